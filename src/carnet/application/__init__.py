"""Application layer: the contact store, ports, render model. Depends only on domain."""

from carnet.application.contact_store import DEFAULT_KEY, ContactStore
from carnet.application.dto import (
    EMPTY_PLACEHOLDER,
    ContactRow,
    ContactTable,
    Notice,
)
from carnet.application.ids import MonotonicIdGenerator
from carnet.application.ports import IdGenerator, KeyValueStore
from carnet.application.render import render_html, render_table
from carnet.domain.errors import (
    CarnetError,
    ImportFormatError,
    StorageReadError,
    ValidationError,
)

__all__ = [
    "DEFAULT_KEY",
    "EMPTY_PLACEHOLDER",
    "CarnetError",
    "ContactRow",
    "ContactStore",
    "ContactTable",
    "IdGenerator",
    "ImportFormatError",
    "KeyValueStore",
    "MonotonicIdGenerator",
    "Notice",
    "StorageReadError",
    "ValidationError",
    "render_html",
    "render_table",
]
