"""
Frontière avec les services externes de nommage et d'illustration des groupes.

Ces collaborateurs sont opaques : le moteur ne dépend jamais de leur succès.
- `nommer_groupes` retombe sur « <libellé> <n> » en cas d'échec ou de réponse invalide.
- `illustrer_groupes` marque "error" les images qui n'ont pas pu être produites.

Les implémentations concrètes sont branchées par réglage Django
(`EQUIPES_GENERATEUR_NOMS`, `EQUIPES_GENERATEUR_IMAGES`) sous forme de chemin pointé.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

IMAGE_ERREUR: str = "error"


class GenerateurNoms(ABC):
    """Propose un nom d'affichage par groupe, à partir des membres."""

    @abstractmethod
    def nommer(self, groupes: Sequence[Sequence[str]]) -> List[str]:
        raise NotImplementedError


class GenerateurImages(ABC):
    """Produit une image (ex. data URL) par nom d'affichage."""

    @abstractmethod
    def illustrer(self, nom: str) -> str:
        raise NotImplementedError


def noms_par_defaut(nb_groupes: int, libelle: str = "Groupe") -> List[str]:
    """Noms de repli déterministes : « Groupe 1 », « Groupe 2 », …"""
    return [f"{libelle} {i + 1}" for i in range(nb_groupes)]


def nommer_groupes(
        groupes: Sequence[Sequence[str]],
        generateur: Optional[GenerateurNoms],
        libelle: str = "Groupe",
) -> List[str]:
    """Un nom par groupe ; repli sur `noms_par_defaut` si le générateur échoue."""
    if generateur is None:
        return noms_par_defaut(len(groupes), libelle)
    try:
        noms = generateur.nommer(groupes)
    except Exception:
        logger.warning("générateur de noms en échec, noms par défaut utilisés", exc_info=True)
        return noms_par_defaut(len(groupes), libelle)

    if (
        not isinstance(noms, list)
        or len(noms) != len(groupes)
        or not all(isinstance(n, str) and n.strip() for n in noms)
    ):
        logger.warning("réponse du générateur de noms invalide (%r), noms par défaut utilisés", noms)
        return noms_par_defaut(len(groupes), libelle)
    return [n.strip() for n in noms]


def illustrer_groupes(noms: Sequence[str], generateur: GenerateurImages) -> List[str]:
    """Une image par nom, ou le marqueur `IMAGE_ERREUR` pour celles qui échouent."""
    images: List[str] = []
    for nom in noms:
        if not nom:
            images.append("")
            continue
        try:
            images.append(generateur.illustrer(nom) or IMAGE_ERREUR)
        except Exception:
            logger.warning("illustration impossible pour %r", nom, exc_info=True)
            images.append(IMAGE_ERREUR)
    return images


def _charger(chemin: Optional[str]):
    if not chemin:
        return None
    return import_string(chemin)()


def generateur_noms_configure() -> Optional[GenerateurNoms]:
    """Instancie le générateur de noms déclaré dans les réglages (ou `None`)."""
    return _charger(getattr(settings, "EQUIPES_GENERATEUR_NOMS", None))


def generateur_images_configure() -> Optional[GenerateurImages]:
    """Instancie le générateur d'images déclaré dans les réglages (ou `None`)."""
    return _charger(getattr(settings, "EQUIPES_GENERATEUR_IMAGES", None))
