from __future__ import annotations

from abc import ABC, abstractmethod
from random import Random
from typing import Dict, Optional, Sequence

from ..contraintes.base import Contrainte
from ..modele.resultat import ResultatPartition


class Solveur(ABC):
    """Interface abstraite des solveurs de répartition en groupes."""

    @abstractmethod
    def resoudre(
        self,
        personnes: Sequence[str],
        nb_groupes: int,
        contraintes: Sequence[Contrainte],
        *,
        rng: Optional[Random] = None,
        budget_temps_ms: Optional[int] = None,
    ) -> ResultatPartition:
        """Répartit `personnes` en `nb_groupes` groupes en respectant `contraintes`, si possible."""
        raise NotImplementedError

    def valider_final(self, groupes: Sequence[Sequence[str]], contraintes: Sequence[Contrainte]) -> bool:
        """Revérifie chaque contrainte sur une répartition terminée."""
        affectation: Dict[str, int] = {}
        for i, groupe in enumerate(groupes):
            for nom in groupe:
                if nom in affectation:
                    return False
                affectation[nom] = i
        return all(c.est_satisfaite(affectation) for c in contraintes)

    def _sanity_check(self, personnes: Sequence[str], nb_groupes: int, contraintes: Sequence[Contrainte]) -> None:
        """Rejette les entrées mal formées (erreurs d'appel, pas des échecs de répartition)."""
        if isinstance(nb_groupes, bool) or not isinstance(nb_groupes, int) or nb_groupes < 2:
            raise ValueError(f"nb_groupes doit être un entier >= 2 (reçu {nb_groupes!r})")
        connus = set(personnes)
        if len(connus) != len(personnes):
            raise ValueError("les noms des personnes doivent être uniques")
        for c in contraintes:
            inconnus = [p for p in c.implique() if p not in connus]
            if inconnus:
                raise ValueError(f"contrainte sur des personnes inconnues: {inconnus!r}")
