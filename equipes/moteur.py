"""Point d'entrée du moteur de répartition en groupes."""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from .contraintes.base import Contrainte
from .contraintes.ensembles import DoiventEtreEnsemble, DoiventEtreSepares
from .modele.resultat import ResultatPartition
from .solveurs.glouton import ESSAIS_MAX, SolveurGloutonAleatoire


def partitionner(
        personnes: Sequence[str],
        nb_groupes: int,
        separes: Iterable[Iterable[str]] = (),
        ensembles: Iterable[Iterable[str]] = (),
        *,
        rng: Optional[random.Random] = None,
        essais_max: int = ESSAIS_MAX,
        budget_temps_ms: Optional[int] = None,
) -> ResultatPartition:
    """
    Répartit `personnes` en exactement `nb_groupes` groupes équilibrés.

    - `separes` : ensembles de personnes dont deux membres ne partagent jamais un groupe,
    - `ensembles` : ensembles de personnes toujours placées dans le même groupe,
    - `rng` : source aléatoire injectée (un `random.Random` neuf si `None`),
    - `budget_temps_ms` : durée maximale en millisecondes ; `None` = pas de limite,
      0 ou moins = aucune tentative.

    Fonction pure vis-à-vis de ses entrées : aucun état n'est conservé
    entre deux appels. Les échecs sont renvoyés dans `ResultatPartition.erreur` ;
    seules les erreurs d'appel lèvent `ValueError`.
    """
    contraintes: List[Contrainte] = [DoiventEtreSepares(s) for s in separes]
    contraintes += [DoiventEtreEnsemble(e) for e in ensembles]
    solveur = SolveurGloutonAleatoire(essais_max=essais_max)
    return solveur.resoudre(personnes, nb_groupes, contraintes, rng=rng, budget_temps_ms=budget_temps_ms)
