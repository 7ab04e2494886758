"""In-memory shared store.

Simple dict-based store suitable for single-process use and testing.
Expired entries are dropped lazily on read.

Usage:
    store = InMemorySharedStore()
    await store.put("key", "value", ttl_seconds=60)
"""

from __future__ import annotations

import time
from collections.abc import Callable


class InMemorySharedStore:
    """Dict-backed SharedStore with TTL.

    Args:
        clock: Monotonic time source in seconds. Override in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}  # key -> (value, expires_at)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._entries[key] = (value, self._clock() + ttl_seconds)

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[call-overload]
        return entry is not None and self._clock() < entry[1]

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for _, expires_at in self._entries.values() if now < expires_at)
