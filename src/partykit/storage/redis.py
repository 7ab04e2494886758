"""Redis-backed shared store.

Requires the redis extra: pip install partykit[redis]

Usage:
    from partykit.storage.redis import RedisSharedStore

    store = RedisSharedStore.from_url("redis://localhost:6379/0")
    # or from settings (PARTY_REDIS_URL, PARTY_REDIS_NAMESPACE)
    store = RedisSharedStore.from_settings(RedisSettings())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from partykit.config import RedisSettings

if TYPE_CHECKING:
    import redis.asyncio as redis


class RedisSharedStore:
    """SharedStore on top of a ``redis.asyncio`` client.

    Keys are namespaced as ``{namespace}:{key}``. Expiry uses ``SET ... EX``.

    Args:
        client: Redis client created with ``decode_responses=True``.
        namespace: Key prefix separating snapshots from other data.
    """

    def __init__(self, client: redis.Redis | Any, namespace: str = "ActivePartyServers") -> None:
        self._client = client
        self._namespace = namespace

    @classmethod
    def from_url(cls, url: str, namespace: str = "ActivePartyServers") -> RedisSharedStore:
        """Create a store connected to url."""
        try:
            import redis.asyncio as redis
        except ImportError as e:
            raise ImportError(
                "redis is required for RedisSharedStore. Install with: pip install partykit[redis]"
            ) from e

        return cls(redis.from_url(url, decode_responses=True), namespace=namespace)

    @classmethod
    def from_settings(cls, settings: RedisSettings | None = None) -> RedisSharedStore:
        """Create a store from RedisSettings (environment by default)."""
        settings = settings or RedisSettings()
        return cls.from_url(settings.url, namespace=settings.namespace)

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._client.set(self._key(key), value, ex=ttl_seconds)

    async def get(self, key: str) -> str | None:
        value = await self._client.get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def delete(self, key: str) -> None:
        await self._client.delete(self._key(key))

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
