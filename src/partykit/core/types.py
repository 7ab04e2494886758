"""Core type definitions for partykit."""

from __future__ import annotations

from enum import Enum
from typing import TypeAlias

from partykit.core.identity.models import Member, UserId

Secret: TypeAlias = str | int
"""Password of a private party."""


class PartyType(Enum):
    """Admission behaviour of a party."""

    PUBLIC = "public"
    """Anyone can join."""

    FRIENDS = "friends"
    """Only friends of the current owner can join."""

    PRIVATE = "private"
    """Joining requires the party secret."""


__all__ = ["Member", "PartyType", "Secret", "UserId"]
