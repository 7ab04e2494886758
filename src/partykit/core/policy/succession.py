"""Owner succession strategies.

When the owner leaves a non-empty party a strategy picks the next owner
from the remaining members.

Usage:
    registry = PartyRegistry(successor=RandomSuccessor(random.Random(7)))
    registry = PartyRegistry(successor=LongestMemberSuccessor())
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from partykit.core.types import Member


@runtime_checkable
class SuccessorStrategy(Protocol):
    """Chooses the next owner among the remaining members."""

    def choose(self, members: Sequence[Member]) -> Member:
        """Return one element of members. members is never empty."""
        ...


class RandomSuccessor:
    """Uniformly random pick. Default strategy.

    Args:
        rng: Random source. Pass a seeded instance for reproducible runs.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def choose(self, members: Sequence[Member]) -> Member:
        return members[self._rng.randrange(len(members))]


class LongestMemberSuccessor:
    """Deterministic pick: the member who joined earliest."""

    def choose(self, members: Sequence[Member]) -> Member:
        return members[0]
