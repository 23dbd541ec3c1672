"""File-backed KeyValueStore: one JSON object mapping keys to string values."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileKeyValueStore:
    """Reads the file on every get and rewrites it atomically on every set.
    A missing file is empty; an unreadable one is logged and treated as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Failed to read %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top-level value is not an object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(values, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
        finally:
            tmp.unlink(missing_ok=True)
