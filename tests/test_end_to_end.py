import json
from pathlib import Path

import pytest
from django.core.cache import cache
from django.test import Client

from equipes import tasks
from equipes.nommage import GenerateurImages, GenerateurNoms


def _payload(nom: str) -> dict:
    return json.loads((Path(__file__).parent / "data" / nom).read_text(encoding="utf-8"))


def _post(client: Client, url: str, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def _groupe_de(groups, nom):
    return next(i for i, g in enumerate(groups) if nom in g)


def test_min_payload_synchrone():
    client = Client()
    r = _post(client, "/equipes/repartir", _payload("payload_min.json"))
    assert r.status_code == 200, r.content
    data = r.json()
    assert data["status"] == "SUCCESS", data
    assert len(data["groups"]) == 2
    assert sorted(p for g in data["groups"] for p in g) == ["Alice", "Bob", "Chloé", "David"]
    assert _groupe_de(data["groups"], "Alice") == _groupe_de(data["groups"], "Bob")
    assert data["names"] == ["Groupe 1", "Groupe 2"]
    assert data["random_seed"] == 7
    assert data["max_attempts"] == 50
    assert "images" not in data


def test_meme_graine_meme_reponse():
    client = Client()
    r1 = _post(client, "/equipes/repartir", _payload("payload_mix.json")).json()
    r2 = _post(client, "/equipes/repartir", _payload("payload_mix.json")).json()
    assert r1["groups"] == r2["groups"]


def test_mix_payload_celery():
    client = Client()
    r = _post(client, "/equipes/solve/start", _payload("payload_mix.json"))
    assert r.status_code == 200, r.content
    task_id = r.json()["task_id"]
    assert isinstance(task_id, str)

    data = client.get(f"/equipes/solve/status/{task_id}").json()
    assert data.get("status") == "SUCCESS", data
    assert data["names"] == ["Renards", "Hiboux", "Loutres"]
    groups = data["groups"]
    assert len(groups) == 3
    assert len({_groupe_de(groups, n) for n in ("Alice", "Bob", "Chloé")}) == 3
    assert _groupe_de(groups, "Alice") == _groupe_de(groups, "David")
    assert _groupe_de(groups, "Emma") == _groupe_de(groups, "Farid")
    assert data["max_attempts"] == 20


def test_conflit_renvoye_comme_echec_type():
    payload = {
        "people": ["A", "B", "C"],
        "group_count": 2,
        "constraints": [
            {"type": "apart", "people": ["A", "B"]},
            {"type": "together", "people": ["A", "B"]},
        ],
    }
    r = _post(Client(), "/equipes/repartir", payload)
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "FAILURE"
    assert data["error_code"] == "conflicting_constraint"
    assert data["people"] == ["A", "B"]


def test_personnes_insuffisantes():
    data = _post(Client(), "/equipes/repartir", {"people": ["Seul"], "group_count": 2}).json()
    assert data["error_code"] == "insufficient_people"


def test_payload_invalide_400():
    client = Client()
    r = client.post("/equipes/repartir", data="{pas du json", content_type="application/json")
    assert r.status_code == 400
    assert r.json()["error_code"] == "invalid_json"

    r = _post(client, "/equipes/repartir", {"people": ["A", "B"], "naming": "custom", "custom_names": ["X"]})
    assert r.status_code == 400
    assert r.json()["error_code"] == "min_two_custom_names"


def test_generateur_de_noms_mal_configure(settings):
    settings.EQUIPES_GENERATEUR_NOMS = "equipes.inexistant.Nommeur"
    data = tasks.executer_repartition({**_payload("payload_min.json"), "options": {"group_label": "Team"}})
    assert data["status"] == "SUCCESS"
    assert data["names"] == ["Team 1", "Team 2"]


class _Illustrateur(GenerateurImages):
    def illustrer(self, nom):
        if nom == "Groupe 2":
            raise RuntimeError("service indisponible")
        return f"img:{nom}"


def test_images_apres_succes(monkeypatch):
    monkeypatch.setattr(tasks, "generateur_images_configure", lambda: _Illustrateur())
    data = tasks.executer_repartition(_payload("payload_min.json"))
    assert data["images"] == ["img:Groupe 1", "error"]


def test_images_generateur_indisponible(monkeypatch):
    def _boom():
        raise ImportError("module absent")

    monkeypatch.setattr(tasks, "generateur_images_configure", _boom)
    data = tasks.executer_repartition(_payload("payload_min.json"))
    assert data["images"] == ["error", "error"]


@pytest.mark.parametrize("options, attendu", [({"max_attempts": "x"}, 50), ({"max_attempts": 0}, 1)])
def test_options_normalisees(options, attendu):
    assert tasks._parse_options(options)["max_attempts"] == attendu


def test_vary_each_run_tire_une_graine():
    seed = tasks._parse_options({"vary_each_run": True})["random_seed"]
    assert isinstance(seed, int)


def test_contraintes_rappelees_dans_le_resultat():
    data = tasks.executer_repartition(_payload("payload_min.json"))
    assert data["constraints"] == [
        {
            "type": "together",
            "people": ["Alice", "Bob"],
            "text": "« Alice » & « Bob » doivent être dans le même groupe",
        }
    ]


def test_contraintes_rappelees_en_cas_d_echec():
    payload = {
        "people": ["A", "B", "C"],
        "group_count": 2,
        "constraints": [{"type": "together", "people": ["A", "B", "C"]}],
    }
    data = tasks.executer_repartition(payload)
    assert data["error_code"] == "oversized_clique"
    assert [c["type"] for c in data["constraints"]] == ["together"]


class _Nommeur(GenerateurNoms):
    def nommer(self, groupes):
        return [f"Équipe de {g[0]}" for g in groupes]


def test_renommer_groupes_existants():
    r = _post(Client(), "/equipes/renommer", {"groups": [["A", "B"], ["C"]], "options": {"group_label": "Team"}})
    assert r.status_code == 200, r.content
    assert r.json() == {"names": ["Team 1", "Team 2"]}


def test_renommer_avec_generateurs(monkeypatch):
    monkeypatch.setattr(tasks, "generateur_noms_configure", lambda: _Nommeur())
    monkeypatch.setattr(tasks, "generateur_images_configure", lambda: _Illustrateur())
    data = _post(Client(), "/equipes/renommer", {"groups": [["Alice", "Bob"], ["Chloé"]]}).json()
    assert data["names"] == ["Équipe de Alice", "Équipe de Chloé"]
    assert data["images"] == ["img:Équipe de Alice", "img:Équipe de Chloé"]


@pytest.mark.parametrize("groups", [None, [], "AB", [["A"], "B"], [["A", 3]]])
def test_renommer_groupes_invalides(groups):
    r = _post(Client(), "/equipes/renommer", {"groups": groups})
    assert r.status_code == 400
    assert r.json()["error_code"] == "invalid_groups"


def test_resultat_de_tache_garde_en_cache():
    client = Client()
    task_id = _post(client, "/equipes/solve/start", _payload("payload_min.json")).json()["task_id"]
    en_cache = cache.get(tasks.cle_resultat(task_id))
    assert en_cache is not None
    assert en_cache["status"] == "SUCCESS"
    assert client.get(f"/equipes/solve/status/{task_id}").json() == en_cache


def test_renommer_met_a_jour_le_resultat_en_cache(monkeypatch):
    client = Client()
    task_id = _post(client, "/equipes/solve/start", _payload("payload_min.json")).json()["task_id"]
    avant = client.get(f"/equipes/solve/status/{task_id}").json()
    assert avant["names"] == ["Groupe 1", "Groupe 2"]

    monkeypatch.setattr(tasks, "generateur_noms_configure", lambda: _Nommeur())
    r = _post(client, "/equipes/renommer", {"groups": avant["groups"], "task_id": task_id})
    assert r.status_code == 200

    apres = client.get(f"/equipes/solve/status/{task_id}").json()
    assert apres["names"] == [f"Équipe de {g[0]}" for g in avant["groups"]]
    assert apres["groups"] == avant["groups"]
    assert apres["random_seed"] == avant["random_seed"]


def test_statut_servi_depuis_le_cache():
    cache.set(tasks.cle_resultat("tache-connue"), {"status": "SUCCESS", "names": ["X", "Y"]})
    data = Client().get("/equipes/solve/status/tache-connue").json()
    assert data == {"status": "SUCCESS", "names": ["X", "Y"]}
