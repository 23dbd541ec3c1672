"""Neo4j implementation of KeyValueStore.
Graph: one (:Snapshot {scope, key, value, updated_at}) node per key, scoped by
the origin/session. (scope, key) is unique; call ensure_snapshot_constraint at startup.
"""

from datetime import datetime, timezone

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT snapshot_scope_key_unique IF NOT EXISTS
FOR (s:Snapshot) REQUIRE (s.scope, s.key) IS NODE UNIQUE
"""

_GET_QUERY = """
MATCH (s:Snapshot { scope: $scope, key: $key })
RETURN s.value AS value
"""

_SET_QUERY = """
MERGE (s:Snapshot { scope: $scope, key: $key })
SET s.value = $value, s.updated_at = $updated_at
"""


def ensure_snapshot_constraint(driver) -> None:
    """Create unique constraint on Snapshot(scope, key) if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


class Neo4jKeyValueStore:
    """Stores string values in Neo4j, scoped so two sessions never see each other's keys."""

    def __init__(self, driver: object, scope: str = "default") -> None:
        scope = (scope or "").strip()
        if not scope:
            raise ValueError("scope must be non-empty")
        self._driver = driver
        self._scope = scope

    def get(self, key: str) -> str | None:
        with self._driver.session() as session:
            result = session.run(_GET_QUERY, scope=self._scope, key=key)
            record = result.single()
        if not record:
            return None
        return record["value"]

    def set(self, key: str, value: str) -> None:
        with self._driver.session() as session:
            session.run(
                _SET_QUERY,
                scope=self._scope,
                key=key,
                value=value,
                updated_at=datetime.now(timezone.utc).isoformat(),
            )
