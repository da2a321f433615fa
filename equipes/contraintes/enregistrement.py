from __future__ import annotations

from typing import Any, List, Mapping

from .types import TypeContrainte
from .registre import enregistrer, ContexteFabrique
from .ensembles import DoiventEtreSepares, DoiventEtreEnsemble


def _membres(code: Mapping[str, Any], ctx: ContexteFabrique) -> List[str]:
    return [ctx.verifier(str(nom)) for nom in code["people"]]


@enregistrer(TypeContrainte.SEPARES)
def _fab_separes(code: Mapping[str, Any], ctx: ContexteFabrique):
    return DoiventEtreSepares(_membres(code, ctx))


@enregistrer(TypeContrainte.ENSEMBLE)
def _fab_ensemble(code: Mapping[str, Any], ctx: ContexteFabrique):
    return DoiventEtreEnsemble(_membres(code, ctx))
