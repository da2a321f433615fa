from __future__ import annotations

import logging
import random
import time
from typing import Dict, List, Mapping, Optional, Sequence, Set

from .base import Solveur
from .faisabilite import verifier_conflits, verifier_effectif, verifier_unites
from .union_find import construire_unites
from ..contraintes.base import Contrainte
from ..contraintes.types import TypeContrainte
from ..modele.erreurs import ErreurPartition, TypeErreur
from ..modele.resultat import ResultatPartition
from ..modele.unite import Unite

logger = logging.getLogger(__name__)

ESSAIS_MAX: int = 50


def voisins_interdits(separes: Sequence[Sequence[str]]) -> Dict[str, Set[str]]:
    """Pour chaque personne, les personnes avec qui elle partage une contrainte « séparés »."""
    out: Dict[str, Set[str]] = {}
    for membres in separes:
        for p in membres:
            out.setdefault(p, set()).update(q for q in membres if q != p)
    return out


def tentative_placement(
        unites: Sequence[Unite],
        nb_groupes: int,
        interdits: Mapping[str, Set[str]],
        rng: random.Random,
) -> Optional[List[List[str]]]:
    """Une passe gloutonne sur une permutation aléatoire des unités.

    Chaque unité va dans le groupe compatible le moins rempli (à taille égale,
    le plus petit indice). Retourne `None` dès qu'une unité ne trouve aucun
    groupe compatible.
    """
    ordre: List[Unite] = list(unites)
    rng.shuffle(ordre)

    groupes: List[List[str]] = [[] for _ in range(nb_groupes)]
    presents: List[Set[str]] = [set() for _ in range(nb_groupes)]

    for unite in ordre:
        # tri stable : les égalités gardent l'ordre des indices
        candidats: List[int] = sorted(range(nb_groupes), key=lambda i: len(groupes[i]))
        for i in candidats:
            if all(interdits.get(p, set()).isdisjoint(presents[i]) for p in unite):
                groupes[i].extend(unite.membres)
                presents[i].update(unite.membres)
                break
        else:
            return None
    return groupes


class SolveurGloutonAleatoire(Solveur):
    """Remplissage glouton équilibré, relancé sur de nouvelles permutations.

    Caractéristiques
    ----------------
    - Contraintes « ensemble » fusionnées en unités indivisibles (union-find).
    - Vérifications préalables déterministes (effectif, conflits, taille des unités).
    - Au plus `essais_max` tentatives, chacune sur un nouveau mélange des unités.

    La recherche est incomplète : un échec après épuisement des essais ne
    prouve pas l'absence de solution.
    """

    def __init__(self, *, essais_max: int = ESSAIS_MAX) -> None:
        if essais_max < 1:
            raise ValueError("essais_max doit être >= 1")
        self.essais_max: int = essais_max

    def resoudre(
        self,
        personnes: Sequence[str],
        nb_groupes: int,
        contraintes: Sequence[Contrainte],
        *,
        rng: Optional[random.Random] = None,
        budget_temps_ms: Optional[int] = None,
    ) -> ResultatPartition:
        personnes = list(personnes)
        self._sanity_check(personnes, nb_groupes, contraintes)

        separes: List[Sequence[str]] = [
            c.implique() for c in contraintes if c.type_contrainte() is TypeContrainte.SEPARES
        ]
        ensembles: List[Sequence[str]] = [
            c.implique() for c in contraintes if c.type_contrainte() is TypeContrainte.ENSEMBLE
        ]

        erreur: Optional[ErreurPartition] = (
            verifier_effectif(len(personnes), nb_groupes)
            or verifier_conflits(separes, ensembles)
        )
        if erreur is None:
            unites: List[Unite] = construire_unites(personnes, ensembles)
            erreur = verifier_unites(unites, len(personnes), nb_groupes)
        if erreur is not None:
            logger.info("répartition refusée avant placement: %s %s", erreur.type.value, list(erreur.noms))
            return ResultatPartition(None, erreur, tentatives=0)

        rng = rng if rng is not None else random.Random()
        interdits = voisins_interdits(separes)
        echeance: Optional[float] = (
            time.monotonic() + budget_temps_ms / 1000.0 if budget_temps_ms is not None else None
        )

        tentatives: int = 0
        while tentatives < self.essais_max:
            if echeance is not None and time.monotonic() >= echeance:
                logger.info("budget de %d ms épuisé après %d tentative(s)", budget_temps_ms, tentatives)
                break
            tentatives += 1
            groupes = tentative_placement(unites, nb_groupes, interdits, rng)
            if groupes is not None:
                logger.info(
                    "%d personnes réparties en %d groupes (%d tentative(s))",
                    len(personnes), nb_groupes, tentatives,
                )
                return ResultatPartition([sorted(g) for g in groupes], None, tentatives=tentatives)
            logger.debug("tentative %d/%d sans placement possible", tentatives, self.essais_max)

        logger.info("aucune répartition trouvée en %d tentative(s)", tentatives)
        return ResultatPartition(
            None,
            ErreurPartition(TypeErreur.CONTRAINTES_INSATISFAITES),
            tentatives=tentatives,
        )
