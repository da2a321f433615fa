# equipes/fabrique_ui.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .contraintes.registre import ContexteFabrique, contrainte_depuis_code
from .contraintes.base import Contrainte
from .contraintes.types import TypeContrainte
from .contraintes import enregistrement  # noqa: F401  (remplit le registre)


class ErreurPayload(ValueError):
    """Payload inexploitable ; `code` est un identifiant stable renvoyé au front."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code: str = code


@dataclass
class DemandeRepartition:
    """Demande normalisée, prête pour le moteur."""

    personnes: List[str]
    nb_groupes: int
    contraintes: List[Contrainte] = field(default_factory=list)
    noms_personnalises: Optional[List[str]] = None


# --- helpers ---------------------------------------------------------------

def _personnes_depuis_payload(people: Any) -> List[str]:
    """Noms épurés, sans vides ni doublons (la première occurrence l'emporte)."""
    if not isinstance(people, list):
        raise ErreurPayload("invalid_people", "le champ 'people' doit être une liste de noms")
    out: Dict[str, None] = {}
    for p in people:
        nom = str(p if p is not None else "").strip()
        if nom:
            out.setdefault(nom, None)
    return list(out)


def _nb_groupes_depuis_payload(payload: Mapping[str, Any]) -> tuple[int, Optional[List[str]]]:
    naming: str = str(payload.get("naming", "count")).lower().strip()

    if naming == "custom":
        noms = [str(n).strip() for n in (payload.get("custom_names") or []) if n is not None and str(n).strip()]
        if len(noms) < 2:
            raise ErreurPayload("min_two_custom_names", "il faut au moins deux noms de groupe personnalisés")
        return len(noms), noms

    if naming != "count":
        raise ErreurPayload("invalid_naming", f"mode de nommage inconnu: {naming!r}")
    try:
        nb = int(payload.get("group_count", 2))
    except (TypeError, ValueError) as exc:
        raise ErreurPayload("invalid_group_count", "le nombre de groupes doit être un entier") from exc
    if nb < 2:
        raise ErreurPayload("invalid_group_count", "il faut au moins deux groupes")
    return nb, None


# --- public ----------------------------------------------------------------

def fabrique_contraintes_ui(
        *,
        personnes: Sequence[str],
        constraints_ui: Sequence[Mapping[str, Any]],
) -> List[Contrainte]:
    """
    Traduit la liste brute des contraintes UI en objets métier via le registre.
    - Les noms absents de `personnes` sont retirés de la contrainte.
    - Une contrainte réduite à moins de deux personnes est ignorée.
    """
    connus = set(personnes)
    ctx = ContexteFabrique(personnes=personnes)
    types_valides = {t.value for t in TypeContrainte}

    out: List[Contrainte] = []
    for c in constraints_ui or []:
        if not isinstance(c, Mapping):
            raise ErreurPayload("invalid_constraint", f"contrainte illisible: {c!r}")
        typ: str = str(c.get("type", "")).strip()
        if typ not in types_valides:
            raise ErreurPayload("invalid_constraint", f"type de contrainte inconnu: {typ!r}")

        membres = list(dict.fromkeys(str(p).strip() for p in (c.get("people") or [])))
        membres = [p for p in membres if p in connus]
        if len(membres) < 2:
            continue
        out.append(contrainte_depuis_code({"type": typ, "people": membres}, ctx))
    return out


def demande_depuis_payload(payload: Mapping[str, Any]) -> DemandeRepartition:
    """Construit une `DemandeRepartition` depuis le JSON envoyé par le front ; lève `ErreurPayload`."""
    if not isinstance(payload, Mapping):
        raise ErreurPayload("invalid_payload", "le corps doit être un objet JSON")

    personnes = _personnes_depuis_payload(payload.get("people", []))
    nb_groupes, noms_perso = _nb_groupes_depuis_payload(payload)
    contraintes = fabrique_contraintes_ui(
        personnes=personnes,
        constraints_ui=payload.get("constraints", []) or [],
    )
    return DemandeRepartition(
        personnes=personnes,
        nb_groupes=nb_groupes,
        contraintes=contraintes,
        noms_personnalises=noms_perso,
    )
