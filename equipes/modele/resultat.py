from __future__ import annotations

from typing import List, Optional

from .erreurs import ErreurPartition


class ResultatPartition:
    """Résultat d'une répartition.

    Attributs
    ---------
    groupes : Optional[List[List[str]]]
        Groupes trouvés, chacun trié par nom (ou `None` si échec).
    erreur : Optional[ErreurPartition]
        Motif de l'échec (ou `None` si succès).
    tentatives : int
        Nombre de tentatives de placement consommées (0 si la validation a échoué).
    """

    def __init__(
            self,
            groupes: Optional[List[List[str]]],
            erreur: Optional[ErreurPartition] = None,
            tentatives: int = 0,
    ) -> None:
        self.groupes: Optional[List[List[str]]] = groupes
        self.erreur: Optional[ErreurPartition] = erreur
        self.tentatives: int = tentatives

    @property
    def est_succes(self) -> bool:
        return self.groupes is not None

    def __repr__(self) -> str:  # pragma: no cover - représentation
        if self.est_succes:
            return f"ResultatPartition(groupes={self.groupes!r}, tentatives={self.tentatives})"
        return f"ResultatPartition(erreur={self.erreur!r}, tentatives={self.tentatives})"
