from __future__ import annotations

import logging
import random
import secrets
from typing import Any, Dict, List, Optional

from celery import shared_task
from django.conf import settings
from django.core.cache import cache

from .contraintes.base import Contrainte
from .fabrique_ui import DemandeRepartition, ErreurPayload, demande_depuis_payload
from .modele.resultat import ResultatPartition
from .nommage import (
    IMAGE_ERREUR,
    generateur_images_configure,
    generateur_noms_configure,
    illustrer_groupes,
    nommer_groupes,
)
from .solveurs.glouton import SolveurGloutonAleatoire

logger = logging.getLogger(__name__)

DUREE_RESULTAT_S: int = 3600  # 1h, comme les résultats Celery


def cle_resultat(task_id: str) -> str:
    """Clé de cache du dernier résultat connu pour une tâche."""
    return f"eq:{task_id}:resultat"


# --------------------------------------------------------------------------- helpers de conversion

def _parse_options(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Normalise les options et pose les défauts (réglages `EQUIPES_*`).

    Champs reconnus (tous facultatifs) :
      - random_seed: int | null
      - vary_each_run: bool
      - max_attempts: int
      - time_budget_ms: int | null
      - group_label: str
    """
    o: Dict[str, Any] = {**options} if isinstance(options, dict) else {}

    try:
        o["max_attempts"] = max(1, int(o.get("max_attempts", settings.EQUIPES_ESSAIS_MAX)))
    except (TypeError, ValueError):
        o["max_attempts"] = settings.EQUIPES_ESSAIS_MAX

    budget_raw: Any = o.get("time_budget_ms", settings.EQUIPES_BUDGET_TEMPS_MS)
    try:
        o["time_budget_ms"] = int(budget_raw) if budget_raw is not None else None
    except (TypeError, ValueError):
        o["time_budget_ms"] = None

    o["group_label"] = str(o.get("group_label") or settings.EQUIPES_LIBELLE_GROUPE).strip()

    # graine
    seed_raw: Any = o.get("random_seed", None)
    if seed_raw is None:
        o["random_seed"] = secrets.randbelow(2 ** 31 - 1) if bool(o.get("vary_each_run", False)) else None
    else:
        try:
            o["random_seed"] = int(seed_raw)
        except (TypeError, ValueError):
            o["random_seed"] = None
    return o


def _echec(code: str, message: str, personnes: Optional[List[str]] = None) -> Dict[str, Any]:
    return {"status": "FAILURE", "error_code": code, "error": message, "people": personnes or []}


def _solve(demande: DemandeRepartition, options: Dict[str, Any]) -> ResultatPartition:
    """Exécute la répartition avec une source aléatoire propre à l'appel."""
    slv = SolveurGloutonAleatoire(essais_max=options["max_attempts"])
    rng = random.Random(options["random_seed"])
    return slv.resoudre(
        demande.personnes,
        demande.nb_groupes,
        demande.contraintes,
        rng=rng,
        budget_temps_ms=options["time_budget_ms"],
    )


def _images(noms: List[str]) -> Optional[List[str]]:
    """Images par groupe si un générateur est configuré ; jamais bloquant."""
    try:
        generateur = generateur_images_configure()
    except Exception:
        logger.warning("générateur d'images indisponible", exc_info=True)
        return [IMAGE_ERREUR] * len(noms)
    if generateur is None:
        return None
    return illustrer_groupes(noms, generateur)


def _noms_generes(groupes: List[List[str]], libelle: str) -> List[str]:
    try:
        generateur = generateur_noms_configure()
    except Exception:
        logger.warning("générateur de noms indisponible", exc_info=True)
        generateur = None
    return nommer_groupes(groupes, generateur, libelle)


def _contraintes_lisibles(contraintes: List[Contrainte]) -> List[Dict[str, Any]]:
    """Rappel des contraintes appliquées : code machine + texte pour l'interface."""
    return [{**c.code_machine(), "text": c.texte_humain()} for c in contraintes]


def _groupes_depuis_payload(groups: Any) -> List[List[str]]:
    if not isinstance(groups, list) or not groups:
        raise ErreurPayload("invalid_groups", "le champ 'groups' doit être une liste non vide de groupes")
    out: List[List[str]] = []
    for g in groups:
        if not isinstance(g, list) or not all(isinstance(p, str) for p in g):
            raise ErreurPayload("invalid_groups", f"groupe illisible: {g!r}")
        out.append(list(g))
    return out


# --------------------------------------------------------------------------- traitement principal

def executer_repartition(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Traite une demande complète :
      - traduit le payload UI en personnes/nombre de groupes/contraintes,
      - exécute la répartition,
      - nomme (et illustre éventuellement) les groupes obtenus.
    """
    try:
        demande = demande_depuis_payload(payload)
    except ErreurPayload as exc:
        logger.info("payload refusé: %s", exc)
        return _echec(exc.code, str(exc))

    options = _parse_options(payload.get("options"))
    res = _solve(demande, options)
    contraintes = _contraintes_lisibles(demande.contraintes)

    if res.erreur is not None:
        out_echec = _echec(res.erreur.type.value, res.erreur.message(), list(res.erreur.noms))
        out_echec["constraints"] = contraintes
        return out_echec
    assert res.groupes is not None

    if demande.noms_personnalises is not None:
        noms = list(demande.noms_personnalises)
    else:
        noms = _noms_generes(res.groupes, options["group_label"])

    out: Dict[str, Any] = {
        "status": "SUCCESS",
        "groups": res.groupes,
        "names": noms,
        "attempts": res.tentatives,
        "random_seed": options["random_seed"],
        "max_attempts": options["max_attempts"],
        "constraints": contraintes,
    }
    images = _images(noms)
    if images is not None:
        out["images"] = images
    return out


def renommer_groupes(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Renomme (et illustre) des groupes déjà formés, sans relancer la répartition.
    - Body : {"groups": [[...], ...], "options": {"group_label"}, "task_id"?}
    - Si `task_id` désigne un résultat en cache, celui-ci est mis à jour.
    """
    if not isinstance(payload, dict):
        return _echec("invalid_payload", "le corps doit être un objet JSON")
    try:
        groupes = _groupes_depuis_payload(payload.get("groups"))
    except ErreurPayload as exc:
        logger.info("renommage refusé: %s", exc)
        return _echec(exc.code, str(exc))

    options = _parse_options(payload.get("options"))
    noms = _noms_generes(groupes, options["group_label"])
    out: Dict[str, Any] = {"names": noms}
    images = _images(noms)
    if images is not None:
        out["images"] = images

    task_id = payload.get("task_id")
    if task_id:
        cle = cle_resultat(str(task_id))
        precedent: Optional[Dict[str, Any]] = cache.get(cle)
        if precedent is not None and precedent.get("status") == "SUCCESS":
            maj = {k: v for k, v in precedent.items() if k != "images"}
            cache.set(cle, {**maj, **out}, timeout=DUREE_RESULTAT_S)
    return out


@shared_task(bind=True)
def t_repartir_equipes(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Tâche asynchrone : même traitement que `executer_repartition`, hors du fil de la requête.
    Le résultat est aussi gardé en cache sous `cle_resultat(task_id)`.
    """
    resultat = executer_repartition(payload)
    cache.set(cle_resultat(self.request.id), resultat, timeout=DUREE_RESULTAT_S)
    return resultat
