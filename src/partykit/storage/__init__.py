"""Shared store backends for handoff snapshots.

RedisSharedStore lives in partykit.storage.redis and needs the redis extra.
"""

from partykit.storage.memory import InMemorySharedStore
from partykit.storage.protocol import SharedStore

__all__ = [
    "SharedStore",
    "InMemorySharedStore",
]
