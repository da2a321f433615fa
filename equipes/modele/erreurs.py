from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TypeErreur(str, Enum):
    """Motifs d'échec d'une répartition.

    Hérite de `str` pour une sérialisation JSON directe (valeur = code stable).
    """

    # Validation (déterministe, avant toute tentative)
    PERSONNES_INSUFFISANTES = "insufficient_people"
    CONTRAINTE_CONFLICTUELLE = "conflicting_constraint"
    CLIQUE_TROP_GRANDE = "oversized_clique"

    # Recherche (probabiliste, après épuisement des tentatives)
    CONTRAINTES_INSATISFAITES = "unsatisfiable_constraints"


_MESSAGES = {
    TypeErreur.PERSONNES_INSUFFISANTES: "Il faut au moins autant de personnes que de groupes.",
    TypeErreur.CONTRAINTE_CONFLICTUELLE: "Contrainte contradictoire : {noms} doivent être à la fois séparés et ensemble.",
    TypeErreur.CLIQUE_TROP_GRANDE: (
        "Un bloc de personnes devant rester ensemble est plus grand que la taille maximale d'un groupe."
    ),
    TypeErreur.CONTRAINTES_INSATISFAITES: (
        "Aucune répartition trouvée. Les contraintes sont peut-être satisfiables, "
        "mais aucune solution n'a été trouvée dans le nombre d'essais autorisé : "
        "relancez, ou retirez une contrainte."
    ),
}


@dataclass(frozen=True)
class ErreurPartition:
    """Échec typé d'une répartition.

    Attributs
    ---------
    type : TypeErreur
        Motif de l'échec.
    noms : Tuple[str, ...]
        Personnes en cause : les deux noms d'un conflit, ou les membres d'une unité trop grande.
    """

    type: TypeErreur
    noms: Tuple[str, ...] = ()

    def est_validation(self) -> bool:
        """Indique si l'échec vient des vérifications préalables (indépendant du hasard)."""
        return self.type is not TypeErreur.CONTRAINTES_INSATISFAITES

    def message(self) -> str:
        """Texte lisible pour l'interface."""
        return _MESSAGES[self.type].format(noms=" & ".join(self.noms))
