from __future__ import annotations

import math
from typing import Optional, Sequence

from ..modele.erreurs import ErreurPartition, TypeErreur
from ..modele.unite import Unite


def taille_max_groupe(nb_personnes: int, nb_groupes: int) -> int:
    """Plafond d'équilibre : ceil(nb_personnes / nb_groupes)."""
    return math.ceil(nb_personnes / nb_groupes)


def verifier_effectif(nb_personnes: int, nb_groupes: int) -> Optional[ErreurPartition]:
    """Refuse une demande avec moins de personnes que de groupes."""
    if nb_personnes < nb_groupes:
        return ErreurPartition(TypeErreur.PERSONNES_INSUFFISANTES)
    return None


def verifier_conflits(
        separes: Sequence[Sequence[str]],
        ensembles: Sequence[Sequence[str]],
) -> Optional[ErreurPartition]:
    """Détecte une paire à la fois « séparés » et « ensemble ».

    Parcourt les couples (séparés, ensemble) dans l'ordre donné ; le premier
    couple partageant au moins deux personnes est signalé avec les deux
    premiers noms communs, dans l'ordre de la contrainte « séparés ».
    """
    for sep in separes:
        for ens in ensembles:
            dans_ens = set(ens)
            communs = [p for p in dict.fromkeys(sep) if p in dans_ens]
            if len(communs) >= 2:
                return ErreurPartition(TypeErreur.CONTRAINTE_CONFLICTUELLE, (communs[0], communs[1]))
    return None


def verifier_unites(unites: Sequence[Unite], nb_personnes: int, nb_groupes: int) -> Optional[ErreurPartition]:
    """Refuse une unité plus grande que le plafond d'équilibre d'un groupe.

    Le plafond ne dépend que du nombre de personnes et de groupes : la
    vérification se fait une fois, avant toute tentative.
    """
    plafond: int = taille_max_groupe(nb_personnes, nb_groupes)
    for unite in unites:
        if len(unite) > plafond:
            return ErreurPartition(TypeErreur.CLIQUE_TROP_GRANDE, unite.membres)
    return None
