from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Unite:
    """Ensemble de personnes liées (transitivement) par des contraintes « ensemble ».

    Attributs
    ---------
    membres : Tuple[str, ...]
    Noms des personnes de l'unité, dans l'ordre de la liste d'entrée.

    Une unité est l'élément atomique de la répartition : elle n'est jamais
    coupée entre deux groupes. Immuable pour pouvoir être mélangée et
    comparée sans copie défensive pendant les tentatives.
    """

    membres: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.membres)

    def __iter__(self) -> Iterator[str]:
        return iter(self.membres)
