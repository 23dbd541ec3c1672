#!/usr/bin/env python3
"""Replace the file-backed contact snapshot with the contents of a JSON export.

Usage: scripts/import_contacts.py FILE
Nothing is written when the file is not a list of contacts or a contact lacks
nom, prenom or email; the offending 1-based index is printed.
"""
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402

from carnet.application import DEFAULT_KEY, ContactStore, ImportFormatError  # noqa: E402
from carnet.infrastructure import FileKeyValueStore  # noqa: E402

load_dotenv(REPO_ROOT / ".env")


def main() -> int:
    if len(sys.argv) != 2:
        print(__doc__.strip(), file=sys.stderr)
        return 2
    source = Path(sys.argv[1])
    data_file = os.environ.get("CARNET_DATA_FILE", "data/carnet.json").strip()
    key = os.environ.get("CARNET_STORAGE_KEY", DEFAULT_KEY).strip() or DEFAULT_KEY
    store = ContactStore(FileKeyValueStore(data_file), key=key)
    try:
        count = store.import_json(source.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {source}: {e}", file=sys.stderr)
        return 1
    except ImportFormatError as e:
        print(f"Erreur lors de l'import: {e}", file=sys.stderr)
        return 1
    print(f"Imported {count} contact(s) into {data_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
