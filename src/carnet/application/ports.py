"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Iterable
from typing import Protocol


class KeyValueStore(Protocol):
    """String values under string keys, scoped to one origin/session."""

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, overwriting any prior value."""
        ...


class IdGenerator(Protocol):
    """Hands out contact ids that are unique within the process."""

    def next_id(self) -> int:
        ...

    def observe(self, ids: Iterable[int]) -> None:
        """Make sure later ids never repeat any of these (ids already stored)."""
        ...
