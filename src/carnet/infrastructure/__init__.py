"""Infrastructure layer: concrete implementations of application ports."""

from carnet.infrastructure.file_store import FileKeyValueStore
from carnet.infrastructure.memory_store import InMemoryKeyValueStore
from carnet.infrastructure.persistence.neo4j_store import (
    Neo4jKeyValueStore,
    ensure_snapshot_constraint,
)
from carnet.infrastructure.phone import display_phone, phone_formatter

__all__ = [
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "Neo4jKeyValueStore",
    "display_phone",
    "ensure_snapshot_constraint",
    "phone_formatter",
]
