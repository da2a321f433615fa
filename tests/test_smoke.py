# comments in English
def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.content == b"ok"


def test_sante(client):
    r = client.get("/equipes/sante")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "service": "equipes", "version": 1}


def test_repartir_get_not_allowed(client):
    r = client.get("/equipes/repartir")
    assert r.status_code == 405
