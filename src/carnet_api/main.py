"""
FastAPI host: the contact form, table view, export download and import upload.
Run with uvicorn: uvicorn carnet_api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from neo4j import GraphDatabase
from pydantic import BaseModel

from carnet.application import (
    DEFAULT_KEY,
    ContactStore,
    ImportFormatError,
    Notice,
    render_html,
    render_table,
)
from carnet.application.dto import ERROR
from carnet.domain import ContactInput, check_form
from carnet.infrastructure import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    Neo4jKeyValueStore,
    ensure_snapshot_constraint,
    phone_formatter,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

STORAGE_MEMORY = "memory"
STORAGE_FILE = "file"
STORAGE_NEO4J = "neo4j"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _build_store(app: FastAPI) -> ContactStore:
    """Pick the persistence backend from CARNET_STORAGE and load the collection once."""
    backend = os.environ.get("CARNET_STORAGE", STORAGE_MEMORY).strip().lower()
    key = os.environ.get("CARNET_STORAGE_KEY", DEFAULT_KEY).strip() or DEFAULT_KEY
    if backend == STORAGE_MEMORY:
        kv = InMemoryKeyValueStore()
    elif backend == STORAGE_FILE:
        data_file = os.environ.get("CARNET_DATA_FILE", "data/carnet.json").strip()
        kv = FileKeyValueStore(data_file)
    elif backend == STORAGE_NEO4J:
        app.state.driver = _get_driver()
        ensure_snapshot_constraint(app.state.driver)
        scope = os.environ.get("CARNET_SCOPE", "default").strip() or "default"
        kv = Neo4jKeyValueStore(app.state.driver, scope=scope)
    else:
        raise ValueError(f"Unsupported CARNET_STORAGE: {backend!r}")
    store = ContactStore(kv, key=key)
    logger.info("Carnet initialised (%s): %d contact(s) loaded", backend, store.count())
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    app.state.phone_region = os.environ.get("CARNET_PHONE_REGION", "FR").strip() or None
    try:
        app.state.store = _build_store(app)
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Carnet API", lifespan=lifespan)


def get_store(request: Request) -> ContactStore:
    return request.app.state.store


def _notice(notice: Notice) -> dict:
    return {"message": notice.message, "level": notice.level}


def _error(status_code: int, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail=_notice(Notice(message, ERROR)))


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- Page ---


_PAGE = """<!DOCTYPE html>
<html lang="fr">
<head><meta charset="utf-8"><title>Carnet de contacts</title></head>
<body>
<main>
<header><h1>Carnet de contacts</h1><p>{count} contact(s)</p></header>
<table id="contactTable">
<thead><tr>{head}</tr></thead>
{body}
</table>
</main>
</body>
</html>
"""


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    store = get_store(request)
    table = render_table(
        store.contacts, format_phone=phone_formatter(request.app.state.phone_region)
    )
    head = "".join(f"<th>{c}</th>" for c in table.columns)
    return _PAGE.format(count=store.count(), head=head, body=render_html(table))


# --- REST: contacts ---


class ContactForm(BaseModel):
    nom: str = ""
    prenom: str = ""
    email: str = ""
    telephone: str = ""


def _form_input(body: ContactForm) -> ContactInput:
    return ContactInput.from_form(body.model_dump())


@app.get("/contacts")
def list_contacts(request: Request):
    return [c.to_dict() for c in get_store(request).contacts]


@app.get("/contacts/count")
def count_contacts(request: Request):
    return {"count": get_store(request).count()}


@app.post("/contacts/validate")
def validate_contact(body: ContactForm):
    check = check_form(_form_input(body))
    return {
        "can_submit": check.can_submit,
        "missing": list(check.missing),
        "email_valid": check.email_valid,
    }


@app.post("/contacts")
def create_contact(body: ContactForm, request: Request):
    contact_input = _form_input(body)
    check = check_form(contact_input)
    if check.missing:
        raise _error(400, "Tous les champs sont obligatoires")
    if not check.email_valid:
        raise _error(400, "Adresse email invalide")
    contact = get_store(request).add(contact_input)
    return JSONResponse(
        content={
            "contact": contact.to_dict(),
            "notice": _notice(Notice("Contact ajouté avec succès!")),
        },
        status_code=201,
    )


@app.get("/contacts/export")
def export_contacts(request: Request):
    store = get_store(request)
    if store.count() == 0:
        raise _error(400, "Aucun contact à exporter")
    filename = store.export_filename()
    logger.info("Exporting %d contact(s) to %s", store.count(), filename)
    return Response(
        content=store.serialize(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/contacts/import")
async def import_contacts(request: Request):
    """Body is the raw text of the selected JSON file."""
    store = get_store(request)
    raw = await request.body()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("Import rejected: body is not UTF-8")
        raise _error(400, "Erreur lors de l'import: le fichier n'est pas du texte UTF-8") from e
    try:
        count = store.import_json(text)
    except ImportFormatError as e:
        logger.warning("Import rejected: %s", e)
        raise _error(400, f"Erreur lors de l'import: {e}") from e
    return {
        "count": count,
        "notice": _notice(Notice("Contacts importés avec succès!")),
    }
