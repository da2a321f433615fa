from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .types import TypeContrainte


class Contrainte(ABC):
    """Classe de base des contraintes portant sur un ensemble de personnes.

    Méthodes à implémenter
    ----------------------
    - `type_contrainte()` : retourne un membre de `TypeContrainte`.
    - `est_satisfaite(affectation)` : valide l'affectation partielle/complète.
    - `texte_humain()` : texte lisible pour l'interface.

    Les membres sont conservés dans l'ordre de saisie, doublons retirés ;
    cet ordre sert à désigner les personnes en cause dans les messages.
    """

    def __init__(self, personnes: Iterable[str]) -> None:
        membres: Tuple[str, ...] = tuple(dict.fromkeys(personnes))
        if len(membres) < 2:
            raise ValueError("une contrainte porte sur au moins deux personnes distinctes")
        self._personnes: Tuple[str, ...] = membres

    @abstractmethod
    def type_contrainte(self) -> TypeContrainte:
        """Retourne le type logique de la contrainte."""
        raise NotImplementedError

    def implique(self) -> Sequence[str]:
        """Retourne les personnes concernées (au moins deux)."""
        return self._personnes

    @abstractmethod
    def est_satisfaite(self, affectation: Mapping[str, int]) -> bool:
        """Indique si la contrainte est satisfaite sous l'affectation nom -> indice de groupe."""
        raise NotImplementedError

    @abstractmethod
    def texte_humain(self) -> str:
        """Texte concis, lisible par un humain."""
        raise NotImplementedError

    def code_machine(self) -> Dict[str, Any]:
        """Représentation sérialisable, stable et exploitable par des outils."""
        return {"type": self.type_contrainte().value, "people": list(self._personnes)}

    def __repr__(self) -> str:  # pragma: no cover - représentation
        return f"{self.__class__.__name__}({list(self._personnes)!r})"


def groupes_places(personnes: Iterable[str], affectation: Mapping[str, int]) -> list[int]:
    """Indices de groupe des personnes déjà placées (les autres sont ignorées)."""
    out: list[int] = []
    for nom in personnes:
        g: Optional[int] = affectation.get(nom)
        if g is not None:
            out.append(g)
    return out


def liste_noms(personnes: Iterable[str]) -> str:
    """Formate les noms pour l'affichage : « A » & « B »."""
    return " & ".join(f"« {p} »" for p in personnes)
