# equipes/views.py
from __future__ import annotations

"""
Vues de l'application "equipes".

Contenu :
- Sonde de santé (sante)
- Répartition synchrone (repartir), pour les petites demandes
- Démarrage et polling d'une tâche Celery (solve_start / solve_status)
- Renommage de groupes déjà formés (renommer)
"""

import json
from typing import Any, Dict, Optional

from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .modele.erreurs import TypeErreur


def _lire_json(request: HttpRequest) -> Optional[Dict[str, Any]]:
    """Corps JSON de la requête, ou `None` s'il est illisible ou n'est pas un objet."""
    try:
        data = json.loads((request.body or b"{}").decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _json_invalide() -> JsonResponse:
    return JsonResponse({"error": "JSON invalide", "error_code": "invalid_json"}, status=400)


# ---------------------------------------------------------------------------
# Pages basiques
# ---------------------------------------------------------------------------

def sante(request: HttpRequest) -> HttpResponse:
    """
    Sonde de santé (sans DB/cache) : utile pour load balancer / monitoring.
    """
    return JsonResponse({"ok": True, "service": "equipes", "version": 1})


# ---------------------------------------------------------------------------
# Répartition synchrone
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def repartir(request: HttpRequest) -> HttpResponse:
    """
    Répartit immédiatement (dans le fil de la requête).
    - Body : JSON de l'état (people, naming, group_count, custom_names, constraints, options)
    - Réponse : résultat de la tâche ; 400 si le payload est inexploitable.
    """
    from .tasks import executer_repartition

    data = _lire_json(request)
    if data is None:
        return _json_invalide()

    resultat = executer_repartition(data)
    # un échec de répartition reste une réponse valide ; seul un payload invalide est une 400
    est_payload_invalide = (
        resultat["status"] == "FAILURE" and resultat["error_code"] not in {t.value for t in TypeErreur}
    )
    return JsonResponse(resultat, status=400 if est_payload_invalide else 200)


# ---------------------------------------------------------------------------
# Celery : démarrage + polling
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def solve_start(request: HttpRequest) -> HttpResponse:
    """
    Lance la tâche Celery de répartition :
    - Body : même JSON que `repartir`
    - Réponse : {"task_id": "..."} à poller via solve_status
    """
    from .tasks import t_repartir_equipes

    data = _lire_json(request)
    if data is None:
        return _json_invalide()
    task = t_repartir_equipes.delay(data)
    return JsonResponse({"task_id": task.id})


@require_GET
def solve_status(request: HttpRequest, task_id: str) -> HttpResponse:
    """
    Polling d'état (PENDING / STARTED / SUCCESS / FAILURE).
    En cas de SUCCESS, renvoie le résultat de la tâche (qui peut lui-même être un échec de répartition).
    """
    from celery.result import AsyncResult
    from .tasks import cle_resultat

    # résultat en cache : éventuellement renommé depuis la fin de la tâche
    resultat = cache.get(cle_resultat(task_id))
    if resultat is not None:
        return JsonResponse(resultat)

    ar = AsyncResult(task_id)
    if ar.state in ("PENDING", "RECEIVED", "STARTED", "RETRY"):
        return JsonResponse({"status": ar.state})
    if ar.state == "SUCCESS":
        return JsonResponse(ar.result)  # type: ignore[arg-type]

    return JsonResponse({"status": "FAILURE", "error_code": "task_failed", "error": str(ar.result or "échec.")})


# ---------------------------------------------------------------------------
# Renommage
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def renommer(request: HttpRequest) -> HttpResponse:
    """
    Relance les générateurs de noms puis d'images sur des groupes existants.
    - Body : {"groups": [[...], ...], "options": {"group_label": "..."}, "task_id": "..."?}
    - Réponse : {"names": [...], "images": [...]?} ; 400 si le payload est inexploitable.
    """
    from .tasks import renommer_groupes

    data = _lire_json(request)
    if data is None:
        return _json_invalide()
    resultat = renommer_groupes(data)
    return JsonResponse(resultat, status=400 if resultat.get("status") == "FAILURE" else 200)
