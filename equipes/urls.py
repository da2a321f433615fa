from django.urls import path
from . import views

app_name = "equipes"

urlpatterns = [
    # Petite sonde de santé (pratique pour Nginx / monitoring)
    path("sante", views.sante, name="sante"),

    path("repartir", views.repartir, name="repartir"),
    path("renommer", views.renommer, name="renommer"),
    path("solve/start", views.solve_start, name="solve_start"),
    path("solve/status/<str:task_id>", views.solve_status, name="solve_status"),
]
