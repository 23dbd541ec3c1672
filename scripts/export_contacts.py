#!/usr/bin/env python3
"""Write the file-backed contact snapshot to contacts_<date>.json.

Usage: scripts/export_contacts.py [OUTPUT_DIR]
Reads CARNET_DATA_FILE (default data/carnet.json) and CARNET_STORAGE_KEY from .env.
"""
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402

from carnet.application import DEFAULT_KEY, ContactStore  # noqa: E402
from carnet.infrastructure import FileKeyValueStore  # noqa: E402

load_dotenv(REPO_ROOT / ".env")


def main() -> int:
    data_file = os.environ.get("CARNET_DATA_FILE", "data/carnet.json").strip()
    key = os.environ.get("CARNET_STORAGE_KEY", DEFAULT_KEY).strip() or DEFAULT_KEY
    store = ContactStore(FileKeyValueStore(data_file), key=key)
    if store.count() == 0:
        print("Aucun contact à exporter", file=sys.stderr)
        return 1
    out_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / store.export_filename()
    target.write_text(store.serialize() + "\n", encoding="utf-8")
    print(f"Exported {store.count()} contact(s) to {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
