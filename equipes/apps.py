# equipes/apps.py
from django.apps import AppConfig


class EquipesConfig(AppConfig):
    name = "equipes"
    verbose_name = "Répartition en équipes"

    def ready(self):
        # enregistre les fabriques de contraintes dans le registre
        from .contraintes import enregistrement  # noqa: F401
