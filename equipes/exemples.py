from __future__ import annotations

import json
import random
from typing import List

from .solveurs.glouton import SolveurGloutonAleatoire
from .contraintes.base import Contrainte
from .contraintes.ensembles import DoiventEtreEnsemble, DoiventEtreSepares
from .nommage import noms_par_defaut

from .contraintes.enregistrement import *  # noqa: F401,F403
from .contraintes.registre import ContexteFabrique, contrainte_depuis_code


def construire_exemple(seed: int = 42) -> int:
    """
    construit une liste de personnes, un jeu de contraintes et lance le solveur.

    affiche les groupes si une répartition est trouvée, et un export JSON des contraintes.
    """
    # pour la reproductibilité de la démonstration
    rng = random.Random(seed)

    personnes: List[str] = [f"Personne {chr(65 + i)}" for i in range(12)]

    contraintes: List[Contrainte] = [
        DoiventEtreEnsemble(personnes[0:2]),
        DoiventEtreEnsemble([personnes[2], personnes[5], personnes[7]]),
        DoiventEtreSepares([personnes[0], personnes[2], personnes[4]]),
        DoiventEtreSepares([personnes[9], personnes[10]]),
    ]

    solveur = SolveurGloutonAleatoire()
    res = solveur.resoudre(personnes, 3, contraintes, rng=rng)

    if res.groupes is None:
        assert res.erreur is not None
        print(f"aucune répartition trouvée : {res.erreur.message()}")
        return 1

    print(f"=== répartition trouvée ({res.tentatives} tentative(s)) ===")
    for nom, groupe in zip(noms_par_defaut(len(res.groupes)), res.groupes):
        print(f" - {nom:10s} : {', '.join(groupe)}")

    # export JSON « code_machine » + démonstration de rechargement via la fabrique
    codes = [c.code_machine() for c in contraintes]
    print("\n=== export JSON des contraintes ===")
    print(json.dumps(codes, ensure_ascii=False, indent=2))

    ctx = ContexteFabrique(personnes=personnes)
    reconstruites = [contrainte_depuis_code(code, ctx) for code in codes]
    assert all(c1.code_machine() == c2.code_machine() for c1, c2 in zip(contraintes, reconstruites))
    assert solveur.valider_final(res.groupes, reconstruites)
    print("\n(reconstruction via fabrique : OK)")
    return 0


def run_exemple(seed: int = 42) -> int:
    # alias pour __main__.py
    return construire_exemple(seed)
