"""Shared store protocol for handoff snapshots.

The shared store is the only state visible to both the origin and the
destination process. Values are opaque strings; partykit stores JSON.

Usage:
    store = InMemorySharedStore()
    await store.put("private-id", snapshot.to_json(), ttl_seconds=1000)
    raw = await store.get("private-id")
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SharedStore(Protocol):
    """Network-backed key-value store with per-key expiry."""

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value under key, expiring after ttl_seconds."""
        ...

    async def get(self, key: str) -> str | None:
        """Return the value under key, or None if absent or expired."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
        ...
