"""ContactStore: the contact collection and its persisted snapshot.

Every mutation rewrites the whole snapshot under one key. The in-memory
collection always equals the snapshot after a mutation returns.
"""

import json
import logging
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime, timezone
from typing import Any

from carnet.application.ids import MonotonicIdGenerator
from carnet.application.ports import IdGenerator, KeyValueStore
from carnet.domain import (
    IMPORT_REQUIRED_FIELDS,
    Contact,
    ContactInput,
    ImportFormatError,
    StorageReadError,
    ValidationError,
)
from carnet.domain.entities import is_filled

logger = logging.getLogger(__name__)

DEFAULT_KEY = "contactBook"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_snapshot(raw: str) -> list[Contact]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageReadError(f"invalid JSON: {e.msg}") from e
    except RecursionError as e:
        raise StorageReadError("JSON nested too deeply") from e
    if not isinstance(data, list):
        raise StorageReadError("snapshot is not a list")
    contacts = []
    for index, record in enumerate(data, start=1):
        if not isinstance(record, dict):
            raise StorageReadError(f"record {index} is not an object")
        try:
            contacts.append(Contact.from_dict(record))
        except ValidationError as e:
            raise StorageReadError(f"record {index}: {e}") from e
    return contacts


class ContactStore:
    """Owns the contact collection. Build one per session and pass it to callers."""

    def __init__(
        self,
        kv_store: KeyValueStore,
        *,
        key: str = DEFAULT_KEY,
        id_generator: IdGenerator | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._kv = kv_store
        self._key = key
        self._ids = id_generator or MonotonicIdGenerator()
        self._clock = clock or _utcnow
        self._contacts: list[Contact] = []
        # Host endpoints run in a threadpool; mutations must not interleave.
        self._lock = threading.RLock()
        self.load()

    @property
    def key(self) -> str:
        return self._key

    @property
    def contacts(self) -> tuple[Contact, ...]:
        return tuple(self._contacts)

    def load(self) -> tuple[Contact, ...]:
        """Read the snapshot. Absent or unreadable snapshots give an empty collection."""
        with self._lock:
            raw = self._kv.get(self._key)
            contacts: list[Contact] = []
            if raw is not None:
                try:
                    contacts = _decode_snapshot(raw)
                except StorageReadError as e:
                    logger.warning("Ignoring unreadable snapshot under %r: %s", self._key, e)
            self._contacts = contacts
            self._ids.observe(c.id for c in contacts)
            return tuple(contacts)

    def save(self, contacts: Iterable[Contact]) -> None:
        """Overwrite the snapshot with the full collection."""
        contacts = list(contacts)
        payload = json.dumps(
            [c.to_dict() for c in contacts],
            ensure_ascii=False,
            separators=(",", ":"),
        )
        with self._lock:
            self._kv.set(self._key, payload)
            self._contacts = contacts

    def add(self, partial: ContactInput) -> Contact:
        """Append a new contact. The caller has already checked the form."""
        with self._lock:
            contact = Contact(
                id=self._ids.next_id(),
                created_at=_iso_timestamp(self._clock()),
                nom=partial.nom,
                prenom=partial.prenom,
                email=partial.email,
                telephone=partial.telephone,
            )
            self.save([*self._contacts, contact])
            total = len(self._contacts)
        logger.info("Added contact %s (%d total)", contact.id, total)
        return contact

    def replace(self, contacts: Any) -> None:
        """Substitute the whole collection with imported records.

        Records need non-empty nom, prenom and email; telephone is optional.
        Raises ImportFormatError and changes nothing when the input is not a
        list or a record is invalid.
        """
        if isinstance(contacts, (str, bytes, Mapping)) or not isinstance(contacts, Sequence):
            raise ImportFormatError("Le fichier doit contenir un tableau de contacts")
        for index, record in enumerate(contacts, start=1):
            if not isinstance(record, Mapping) or not all(
                is_filled(record.get(name)) for name in IMPORT_REQUIRED_FIELDS
            ):
                raise ImportFormatError(
                    f"Contact {index} invalide: champs manquants", index=index
                )
        with self._lock:
            self.save(self._from_records(contacts))
            total = len(self._contacts)
        logger.info("Imported %d contact(s)", total)

    def import_json(self, text: str) -> int:
        """Parse an export file and replace the collection with it. Returns the new count."""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportFormatError(f"Fichier JSON invalide: {e.msg}") from e
        except RecursionError as e:
            raise ImportFormatError("Fichier JSON invalide: imbrication trop profonde") from e
        self.replace(payload)
        return self.count()

    def count(self) -> int:
        return len(self._contacts)

    def serialize(self) -> str:
        """Pretty-printed JSON of the collection, as written to an export file."""
        return json.dumps(
            [c.to_dict() for c in self._contacts],
            ensure_ascii=False,
            indent=2,
        )

    def export_filename(self, today: date | None = None) -> str:
        day = today or self._clock().astimezone(timezone.utc).date()
        return f"contacts_{day.isoformat()}.json"

    def _from_records(self, records: Sequence[Mapping[str, Any]]) -> list[Contact]:
        """Build contacts from validated records, filling in missing or clashing ids."""
        now = _iso_timestamp(self._clock())
        self._ids.observe(r["id"] for r in records if _is_int(r.get("id")))
        seen: set[int] = set()
        out = []
        for record in records:
            data = dict(record)
            if not _is_int(data.get("id")) or data["id"] in seen:
                data["id"] = self._ids.next_id()
            seen.add(data["id"])
            if not isinstance(data.get("createdAt"), str):
                data["createdAt"] = now
            telephone = data.get("telephone")
            if telephone is not None and not isinstance(telephone, str):
                data["telephone"] = str(telephone)
            out.append(Contact.from_dict(data))
        return out
