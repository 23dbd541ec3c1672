"""Tests for the export/import scripts on a file-backed snapshot."""

import importlib.util
import json
from pathlib import Path

import pytest

from carnet.application import ContactStore
from carnet.domain import ContactInput
from carnet.infrastructure import FileKeyValueStore

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def _load_script(name: str):
    loader_spec = importlib.util.spec_from_file_location(
        f"carnet_script_{name}", SCRIPTS_DIR / f"{name}.py"
    )
    module = importlib.util.module_from_spec(loader_spec)
    loader_spec.loader.exec_module(module)
    return module


@pytest.fixture
def data_file(tmp_path, monkeypatch) -> Path:
    path = tmp_path / "data" / "carnet.json"
    monkeypatch.setenv("CARNET_DATA_FILE", str(path))
    monkeypatch.delenv("CARNET_STORAGE_KEY", raising=False)
    return path


def _seed(path: Path, *noms: str) -> ContactStore:
    store = ContactStore(FileKeyValueStore(path))
    for nom in noms:
        store.add(ContactInput(nom, "Marie", "m@x.fr", "0612345678"))
    return store


def test_export_refuses_empty_snapshot(data_file, tmp_path, monkeypatch, capsys):
    out_dir = tmp_path / "out"
    monkeypatch.setattr("sys.argv", ["export_contacts.py", str(out_dir)])

    assert _load_script("export_contacts").main() == 1
    assert "Aucun contact à exporter" in capsys.readouterr().err
    assert not out_dir.exists()


def test_export_writes_dated_file(data_file, tmp_path, monkeypatch, capsys):
    store = _seed(data_file, "A", "B")
    out_dir = tmp_path / "out"
    monkeypatch.setattr("sys.argv", ["export_contacts.py", str(out_dir)])

    assert _load_script("export_contacts").main() == 0

    written = list(out_dir.glob("contacts_*.json"))
    assert [p.name for p in written] == [store.export_filename()]
    assert [r["nom"] for r in json.loads(written[0].read_text(encoding="utf-8"))] == ["A", "B"]
    assert "Exported 2 contact(s)" in capsys.readouterr().out


def test_import_replaces_snapshot(data_file, tmp_path, monkeypatch, capsys):
    _seed(data_file, "Old")
    source = tmp_path / "contacts.json"
    source.write_text(
        json.dumps(
            [
                {"nom": "A", "prenom": "B", "email": "a@b.c"},
                {"nom": "C", "prenom": "D", "email": "c@d.e", "telephone": "01"},
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr("sys.argv", ["import_contacts.py", str(source)])

    assert _load_script("import_contacts").main() == 0

    reopened = ContactStore(FileKeyValueStore(data_file))
    assert [c.nom for c in reopened.contacts] == ["A", "C"]
    assert "Imported 2 contact(s)" in capsys.readouterr().out


def test_import_invalid_record_prints_index_and_keeps_snapshot(
    data_file, tmp_path, monkeypatch, capsys
):
    _seed(data_file, "Old")
    before = data_file.read_text(encoding="utf-8")
    source = tmp_path / "contacts.json"
    source.write_text(
        json.dumps(
            [
                {"nom": "A", "prenom": "B", "email": "a@b.c"},
                {"nom": "", "prenom": "D", "email": "d@e.f"},
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr("sys.argv", ["import_contacts.py", str(source)])

    assert _load_script("import_contacts").main() == 1
    assert "Contact 2 invalide" in capsys.readouterr().err
    assert data_file.read_text(encoding="utf-8") == before


def test_import_missing_file_fails(data_file, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["import_contacts.py", str(tmp_path / "nope.json")])
    assert _load_script("import_contacts").main() == 1
    assert "Cannot read" in capsys.readouterr().err


def test_import_requires_one_argument(data_file, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["import_contacts.py"])
    assert _load_script("import_contacts").main() == 2
    assert "Usage" in capsys.readouterr().err
