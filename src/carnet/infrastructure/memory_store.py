"""In-memory implementation of KeyValueStore (no disk, no DB)."""


class InMemoryKeyValueStore:
    """Values live in a dict for the life of the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
