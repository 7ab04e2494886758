"""In-process participant directory.

Suitable for single-process use and testing. Connection events come from
whatever owns the transport calling ``connect``/``disconnect``.

Usage:
    directory = LocalParticipantDirectory()
    directory.befriend(1, 2)
    alice = directory.connect(Participant(1, "alice"))

    bob = await directory.wait_for(2, timeout=10.0)  # None on timeout
"""

from __future__ import annotations

import asyncio
import logging

from partykit.core.identity import Participant, UserId
from partykit.core.signal import Signal

log = logging.getLogger(__name__)


class LocalParticipantDirectory:
    """Dict-based connection registry with symmetric friend relations."""

    def __init__(self) -> None:
        self._connected: dict[UserId, Participant] = {}
        self._friends: dict[UserId, set[UserId]] = {}
        self._waiters: dict[UserId, list[asyncio.Future[Participant]]] = {}

        self.participant_added: Signal[Participant] = Signal()
        self.participant_removing: Signal[Participant] = Signal()

    def connect(self, participant: Participant) -> Participant:
        """Register a newly connected participant and wake its waiters.

        Reconnecting with the same user id replaces the previous handle.
        """
        self._connected[participant.user_id] = participant
        log.debug("Participant %s connected", participant)

        for waiter in self._waiters.pop(participant.user_id, []):
            if not waiter.done():
                waiter.set_result(participant)

        self.participant_added.fire(participant)
        return participant

    def disconnect(self, user_id: UserId) -> bool:
        """Drop a connected participant. Returns True if it was connected."""
        participant = self._connected.get(user_id)
        if participant is None:
            return False

        self.participant_removing.fire(participant)
        del self._connected[user_id]
        log.debug("Participant %s disconnected", participant)
        return True

    def get(self, user_id: UserId) -> Participant | None:
        return self._connected.get(user_id)

    async def wait_for(self, user_id: UserId, timeout: float) -> Participant | None:
        participant = self._connected.get(user_id)
        if participant is not None:
            return participant

        waiter: asyncio.Future[Participant] = asyncio.get_running_loop().create_future()
        self._waiters.setdefault(user_id, []).append(waiter)
        try:
            return await asyncio.wait_for(waiter, timeout)
        except TimeoutError:
            return None
        finally:
            pending = self._waiters.get(user_id)
            if pending is not None and waiter in pending:
                pending.remove(waiter)
                if not pending:
                    del self._waiters[user_id]

    def befriend(self, user_id: UserId, other_id: UserId) -> None:
        """Record a symmetric friend relation."""
        self._friends.setdefault(user_id, set()).add(other_id)
        self._friends.setdefault(other_id, set()).add(user_id)

    def unfriend(self, user_id: UserId, other_id: UserId) -> None:
        """Remove a friend relation if present."""
        self._friends.get(user_id, set()).discard(other_id)
        self._friends.get(other_id, set()).discard(user_id)

    def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        return other_id in self._friends.get(user_id, ())

    def connected(self) -> list[Participant]:
        return list(self._connected.values())

    def __len__(self) -> int:
        return len(self._connected)
