"""API tests on the in-memory backend. Neo4j is not needed."""

import json

import pytest
from fastapi.testclient import TestClient

from carnet_api.main import app

FORM = {
    "nom": "Dupont",
    "prenom": "Marie",
    "email": "marie@example.fr",
    "telephone": "06 12 34 56 78",
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("CARNET_STORAGE", "memory")
    monkeypatch.setenv("CARNET_PHONE_REGION", "FR")
    with TestClient(app) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_then_list(client):
    r = client.post("/contacts", json=FORM)
    assert r.status_code == 201
    body = r.json()
    assert body["notice"] == {"message": "Contact ajouté avec succès!", "level": "success"}
    assert body["contact"]["nom"] == "Dupont"
    assert isinstance(body["contact"]["id"], int)
    assert body["contact"]["createdAt"].endswith("Z")

    listed = client.get("/contacts").json()
    assert listed == [body["contact"]]
    assert client.get("/contacts/count").json() == {"count": 1}


def test_create_trims_form_values(client):
    r = client.post("/contacts", json={**FORM, "nom": "  Dupont  "})
    assert r.status_code == 201
    assert r.json()["contact"]["nom"] == "Dupont"


def test_create_missing_field_rejected(client):
    r = client.post("/contacts", json={**FORM, "telephone": "  "})
    assert r.status_code == 400
    assert r.json()["detail"]["message"] == "Tous les champs sont obligatoires"
    assert r.json()["detail"]["level"] == "error"
    assert client.get("/contacts/count").json() == {"count": 0}


def test_create_bad_email_rejected(client):
    r = client.post("/contacts", json={**FORM, "email": "a@b"})
    assert r.status_code == 400
    assert client.get("/contacts/count").json() == {"count": 0}


def test_validate_reports_form_state(client):
    ok = client.post("/contacts/validate", json=FORM).json()
    assert ok == {"can_submit": True, "missing": [], "email_valid": True}

    bad = client.post("/contacts/validate", json={"nom": "A", "email": "a.b.com"}).json()
    assert bad["can_submit"] is False
    assert bad["missing"] == ["prenom", "telephone"]
    assert bad["email_valid"] is False


def test_export_empty_rejected(client):
    r = client.get("/contacts/export")
    assert r.status_code == 400
    assert r.json()["detail"]["message"] == "Aucun contact à exporter"


def test_export_downloads_pretty_json(client):
    client.post("/contacts", json=FORM)
    r = client.get("/contacts/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    disposition = r.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="contacts_')
    assert disposition.endswith('.json"')
    assert r.text.startswith("[\n  {")
    assert json.loads(r.text)[0]["email"] == "marie@example.fr"


def test_import_replaces_collection(client):
    client.post("/contacts", json=FORM)
    payload = json.dumps(
        [
            {"nom": "A", "prenom": "B", "email": "a@b.c"},
            {"nom": "C", "prenom": "D", "email": "c@d.e", "telephone": "01"},
        ]
    )
    r = client.post("/contacts/import", content=payload.encode("utf-8"))
    assert r.status_code == 200
    assert r.json()["count"] == 2
    assert r.json()["notice"]["message"] == "Contacts importés avec succès!"
    assert [c["nom"] for c in client.get("/contacts").json()] == ["A", "C"]


def test_import_invalid_element_reports_index(client):
    client.post("/contacts", json=FORM)
    payload = json.dumps(
        [
            {"nom": "A", "prenom": "B", "email": "a@b.c"},
            {"nom": "", "prenom": "D", "email": "d@e.f"},
        ]
    )
    r = client.post("/contacts/import", content=payload)
    assert r.status_code == 400
    assert "Contact 2 invalide" in r.json()["detail"]["message"]
    assert r.json()["detail"]["message"].startswith("Erreur lors de l'import")
    assert client.get("/contacts/count").json() == {"count": 1}


def test_import_non_list_rejected(client):
    r = client.post("/contacts/import", content='{"nom": "A"}')
    assert r.status_code == 400
    assert "tableau" in r.json()["detail"]["message"]


def test_import_not_json_rejected(client):
    r = client.post("/contacts/import", content="not json at all")
    assert r.status_code == 400


def test_import_binary_rejected(client):
    r = client.post("/contacts/import", content=b"\xff\xfe\x00")
    assert r.status_code == 400


def test_index_page_escapes_contact_fields(client):
    client.post("/contacts", json={**FORM, "nom": "<script>"})
    r = client.get("/")
    assert r.status_code == 200
    assert "<script>" not in r.text
    assert "&lt;script&gt;" in r.text
    assert "+33 6 12 34 56 78" in r.text


def test_index_page_placeholder_when_empty(client):
    r = client.get("/")
    assert "Aucun contact enregistré" in r.text


def test_file_backend_persists_across_restarts(tmp_path, monkeypatch):
    monkeypatch.setenv("CARNET_STORAGE", "file")
    monkeypatch.setenv("CARNET_DATA_FILE", str(tmp_path / "carnet.json"))
    with TestClient(app) as c:
        assert c.post("/contacts", json=FORM).status_code == 201
    with TestClient(app) as c:
        assert c.get("/contacts/count").json() == {"count": 1}


def test_unknown_backend_rejected(monkeypatch):
    from fastapi import FastAPI

    from carnet_api import main as api_main

    monkeypatch.setenv("CARNET_STORAGE", "floppy")
    with pytest.raises(ValueError, match="CARNET_STORAGE"):
        api_main._build_store(FastAPI())
