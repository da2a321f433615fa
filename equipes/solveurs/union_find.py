from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..modele.unite import Unite


class UnionFind:
    """Ensembles disjoints sur une table contiguë d'indices (compression de chemin).

    Chaque personne reçoit un indice dans l'ordre de `personnes` ; `_parent[i]`
    pointe vers un autre indice du même ensemble, la racine pointant sur
    elle-même. La table appartient à l'appelant pour la durée d'une répartition.
    """

    def __init__(self, personnes: Sequence[str]) -> None:
        self._noms: List[str] = list(personnes)
        self._indice: Dict[str, int] = {nom: i for i, nom in enumerate(self._noms)}
        self._parent: List[int] = list(range(len(self._noms)))

    def trouver(self, i: int) -> int:
        """Retourne la racine de `i` et raccroche le chemin parcouru à cette racine."""
        racine: int = i
        while self._parent[racine] != racine:
            racine = self._parent[racine]
        while self._parent[i] != racine:
            self._parent[i], i = racine, self._parent[i]
        return racine

    def unir(self, a: str, b: str) -> None:
        """Fusionne les ensembles de `a` et `b` (la racine de `a` est conservée)."""
        ra: int = self.trouver(self._indice[a])
        rb: int = self.trouver(self._indice[b])
        if ra != rb:
            self._parent[rb] = ra

    def connectes(self, a: str, b: str) -> bool:
        return self.trouver(self._indice[a]) == self.trouver(self._indice[b])

    def unites(self) -> List[Unite]:
        """Composantes connexes, ordonnées selon la première apparition d'un membre."""
        par_racine: Dict[int, List[str]] = {}
        for i, nom in enumerate(self._noms):
            par_racine.setdefault(self.trouver(i), []).append(nom)
        return [Unite(tuple(membres)) for membres in par_racine.values()]


def construire_unites(personnes: Sequence[str], ensembles: Iterable[Sequence[str]]) -> List[Unite]:
    """Regroupe les personnes liées par les contraintes « ensemble » en unités.

    Unir les membres consécutifs de chaque contrainte suffit à connecter
    tout l'ensemble.
    """
    uf = UnionFind(personnes)
    for membres in ensembles:
        for a, b in zip(membres, membres[1:]):
            uf.unir(a, b)
    return uf.unites()
