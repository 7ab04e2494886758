"""Configuration module using Pydantic Settings.

Usage:
    from partykit.config import PartySettings, RedisSettings

    settings = PartySettings(default_max_capacity=4)
    redis_settings = RedisSettings(url="redis://cache:6379/1")
"""

from partykit.config.settings import PartySettings, RedisSettings

__all__ = [
    "PartySettings",
    "RedisSettings",
]
