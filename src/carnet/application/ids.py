"""Contact id generation: clock-derived milliseconds, bumped so ids never repeat."""

import time
from collections.abc import Callable, Iterable


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class MonotonicIdGenerator:
    """Next id is max(now in ms, last id + 1). Two ids in the same millisecond still differ."""

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or _now_ms
        self._last = 0

    def next_id(self) -> int:
        candidate = max(self._clock_ms(), self._last + 1)
        self._last = candidate
        return candidate

    def observe(self, ids: Iterable[int]) -> None:
        for value in ids:
            if value > self._last:
                self._last = value
