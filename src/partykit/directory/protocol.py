"""Participant directory protocol.

The directory knows which participants are connected to this process, maps
durable ids back to live handles and answers friend-relation queries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from partykit.core.identity import Participant, UserId
    from partykit.core.signal import Signal


@runtime_checkable
class ParticipantDirectory(Protocol):
    """Connection registry for the current process.

    Attributes:
        participant_added: Fires with the participant after it connects.
        participant_removing: Fires with the participant before it is dropped.
    """

    participant_added: Signal[Participant]
    participant_removing: Signal[Participant]

    def get(self, user_id: UserId) -> Participant | None:
        """Return the live handle for a connected participant, if any."""
        ...

    async def wait_for(self, user_id: UserId, timeout: float) -> Participant | None:
        """Wait up to timeout seconds for user_id to connect.

        Returns:
            The live handle, or None if it did not connect in time.
        """
        ...

    def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        """Check if two participants have a friend relation."""
        ...

    def connected(self) -> list[Participant]:
        """All currently connected participants, in connection order."""
        ...
