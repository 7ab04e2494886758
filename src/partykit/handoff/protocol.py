"""Relocation protocol.

The relocator moves a group of participants to a destination place and
reserves a fresh process for them there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from partykit.core.identity import Participant
    from partykit.handoff.models import RelocationResult


@runtime_checkable
class Relocator(Protocol):
    """Moves participants to another process."""

    async def request(
        self,
        destination: int,
        participants: list[Participant],
        *,
        reserve_process: bool,
    ) -> RelocationResult:
        """Relocate participants to destination.

        Args:
            destination: Target place id.
            participants: Live handles to relocate, in party order.
            reserve_process: Reserve a fresh process for the group.

        Returns:
            Access code and private id of the reserved process.

        Raises:
            Exception: Any failure. Callers treat all errors as transfer failures.
        """
        ...
