"""Configuration settings using Pydantic Settings.

Usage:
    from partykit.config import PartySettings, RedisSettings

    # Load from environment variables (PARTY_*, PARTY_REDIS_*)
    settings = PartySettings()

    # Or override with explicit values
    settings = PartySettings(participant_join_timeout=2.5)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PartySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for party lifecycle and handoff.

    Attributes:
        participant_join_timeout: Seconds a destination process waits for each
            handed-off participant to connect before leaving the slot unresolved.
        allow_multiple_parties: Allow one participant to be in several parties.
        default_max_capacity: Capacity of parties created without one.
        snapshot_ttl_seconds: Lifetime of a handoff snapshot in the shared store.

    Environment Variables:
        PARTY_PARTICIPANT_JOIN_TIMEOUT
        PARTY_ALLOW_MULTIPLE_PARTIES
        PARTY_DEFAULT_MAX_CAPACITY
        PARTY_SNAPSHOT_TTL_SECONDS
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    participant_join_timeout: float = Field(default=10.0, gt=0)
    allow_multiple_parties: bool = False
    default_max_capacity: int = Field(default=8, gt=0)
    snapshot_ttl_seconds: int = Field(default=1000, gt=0)


class RedisSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the Redis-backed shared store.

    Attributes:
        url: Redis connection URL.
        namespace: Prefix for snapshot keys.

    Environment Variables:
        PARTY_REDIS_URL
        PARTY_REDIS_NAMESPACE
    """

    model_config = SettingsConfigDict(
        env_prefix="PARTY_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = "redis://localhost:6379/0"
    namespace: str = "ActivePartyServers"
