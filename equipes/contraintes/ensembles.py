from __future__ import annotations

from typing import Mapping

from .base import Contrainte, groupes_places, liste_noms
from .types import TypeContrainte


class DoiventEtreSepares(Contrainte):
    """Exige que deux membres quelconques soient dans des groupes différents."""

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.SEPARES

    def est_satisfaite(self, affectation: Mapping[str, int]) -> bool:
        places = groupes_places(self.implique(), affectation)
        return len(set(places)) == len(places)

    def texte_humain(self) -> str:
        return f"{liste_noms(self.implique())} doivent être dans des groupes différents"


class DoiventEtreEnsemble(Contrainte):
    """Exige que tous les membres soient dans le même groupe."""

    def type_contrainte(self) -> TypeContrainte:
        return TypeContrainte.ENSEMBLE

    def est_satisfaite(self, affectation: Mapping[str, int]) -> bool:
        return len(set(groupes_places(self.implique(), affectation))) <= 1

    def texte_humain(self) -> str:
        return f"{liste_noms(self.implique())} doivent être dans le même groupe"
