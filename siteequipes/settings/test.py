from .base import *

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

# Celery exécuté en ligne, résultats gardés en mémoire pour le polling
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_TASK_STORE_EAGER_RESULT = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

CACHES = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}}

EQUIPES_ESSAIS_MAX = 50
EQUIPES_BUDGET_TEMPS_MS = None
EQUIPES_LIBELLE_GROUPE = "Groupe"
EQUIPES_GENERATEUR_NOMS = None
EQUIPES_GENERATEUR_IMAGES = None
