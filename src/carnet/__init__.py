"""
Carnet core: clean-architecture layout.

- domain: entities (Contact, ContactInput), form rules, errors. No outer dependencies.
- application: ContactStore, ports (KeyValueStore, IdGenerator), render model.
- infrastructure: adapters (InMemoryKeyValueStore, FileKeyValueStore, Neo4jKeyValueStore).
"""

from carnet.application import (
    ContactStore,
    ContactTable,
    ImportFormatError,
    KeyValueStore,
    Notice,
    StorageReadError,
    ValidationError,
    render_html,
    render_table,
)
from carnet.domain import Contact, ContactInput, FormCheck, check_form, is_valid_email
from carnet.infrastructure import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    Neo4jKeyValueStore,
)

__all__ = [
    "Contact",
    "ContactInput",
    "ContactStore",
    "ContactTable",
    "FileKeyValueStore",
    "FormCheck",
    "ImportFormatError",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "Neo4jKeyValueStore",
    "Notice",
    "StorageReadError",
    "ValidationError",
    "check_form",
    "is_valid_email",
    "render_html",
    "render_table",
]
