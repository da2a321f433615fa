from __future__ import annotations

from equipes.modele.unite import Unite
from equipes.solveurs.union_find import UnionFind, construire_unites


def test_singletons_sans_contrainte():
    unites = construire_unites(["A", "B", "C"], [])
    assert unites == [Unite(("A",)), Unite(("B",)), Unite(("C",))]


def test_fusion_transitive():
    # A-B et C-D, puis B-D relie les deux blocs
    unites = construire_unites(["A", "B", "C", "D", "E"], [["A", "B"], ["C", "D"], ["B", "D"]])
    assert unites == [Unite(("A", "B", "C", "D")), Unite(("E",))]


def test_contrainte_a_plusieurs_membres():
    unites = construire_unites(["E", "D", "C", "B", "A"], [["A", "C", "E"]])
    # l'ordre des membres suit la liste des personnes
    assert [u.membres for u in unites] == [("E", "C", "A"), ("D",), ("B",)]


def test_racine_du_premier_argument_conservee():
    uf = UnionFind(["A", "B", "C"])
    uf.unir("A", "B")
    assert uf.trouver(1) == 0
    uf.unir("C", "B")
    assert uf.trouver(0) == 2
    assert uf.trouver(1) == 2
    assert uf.connectes("A", "C")


def test_compression_de_chemin():
    noms = [f"p{i}" for i in range(6)]
    uf = UnionFind(noms)
    for a, b in zip(noms[1:], noms):
        uf.unir(a, b)  # chaîne p5 -> p4 -> ... -> p0
    racine = uf.trouver(0)
    assert all(uf.trouver(i) == racine for i in range(6))
    assert all(uf._parent[i] == racine for i in range(6))
