from __future__ import annotations

import random

from equipes.modele.erreurs import TypeErreur
from equipes.moteur import partitionner


def _groupe_de(groupes, nom):
    return next(i for i, g in enumerate(groupes) if nom in g)


def test_scenario_ensemble():
    for seed in range(20):
        res = partitionner(["A", "B", "C", "D"], 2, ensembles=[{"A", "B"}], rng=random.Random(seed))
        assert res.est_succes
        assert len(res.groupes) == 2
        assert sorted(p for g in res.groupes for p in g) == ["A", "B", "C", "D"]
        assert _groupe_de(res.groupes, "A") == _groupe_de(res.groupes, "B")


def test_scenario_separes():
    for seed in range(20):
        res = partitionner(["A", "B"], 2, separes=[["A", "B"]], rng=random.Random(seed))
        assert sorted(res.groupes) == [["A"], ["B"]]


def test_scenario_conflit():
    res = partitionner(["A", "B", "C"], 2, separes=[["A", "B"]], ensembles=[["A", "B"]])
    assert res.erreur.type is TypeErreur.CONTRAINTE_CONFLICTUELLE
    assert res.erreur.noms == ("A", "B")
    assert "A & B" in res.erreur.message()


def test_scenario_unite_trop_grande():
    res = partitionner(["A", "B", "C"], 2, ensembles=[["A", "B", "C"]])
    assert res.erreur.type is TypeErreur.CLIQUE_TROP_GRANDE
    assert res.groupes is None


def test_scenario_personnes_insuffisantes():
    for seed in range(5):
        res = partitionner(["A"], 2, rng=random.Random(seed))
        assert res.erreur.type is TypeErreur.PERSONNES_INSUFFISANTES


def test_validation_independante_de_l_aleatoire():
    args = (["A", "B", "C", "D"], 2)
    kw = {"separes": [["A", "C"]], "ensembles": [["A", "B", "C"]]}
    verdicts = {partitionner(*args, **kw, rng=random.Random(s)).erreur for s in range(10)}
    assert len(verdicts) == 1
    (erreur,) = verdicts
    assert erreur.type is TypeErreur.CONTRAINTE_CONFLICTUELLE
    assert erreur.est_validation()


def test_unite_trop_grande_independante_de_l_aleatoire():
    verdicts = {
        partitionner(["A", "B", "C"], 2, ensembles=[["A", "B", "C"]], rng=random.Random(s)).erreur
        for s in range(10)
    }
    assert len(verdicts) == 1
    (erreur,) = verdicts
    assert erreur.type is TypeErreur.CLIQUE_TROP_GRANDE
    assert erreur.noms == ("A", "B", "C")
    assert erreur.est_validation()


def test_budget_nul_via_moteur():
    res = partitionner([f"p{i}" for i in range(6)], 2, rng=random.Random(0), budget_temps_ms=0)
    assert not res.est_succes
    assert res.erreur.type is TypeErreur.CONTRAINTES_INSATISFAITES
    assert res.tentatives == 0


def test_rng_par_defaut():
    res = partitionner([f"p{i}" for i in range(9)], 3)
    assert res.est_succes
    assert sorted(len(g) for g in res.groupes) == [3, 3, 3]


def test_entrees_non_modifiees():
    personnes = ["D", "C", "B", "A"]
    ensembles = [["D", "C"]]
    partitionner(personnes, 2, ensembles=ensembles, rng=random.Random(1))
    assert personnes == ["D", "C", "B", "A"]
    assert ensembles == [["D", "C"]]
