"""Party registry: creation, lookup and removal of live parties.

Usage:
    registry = PartyRegistry(
        context=ProcessContext(is_authority=True),
        directory=LocalParticipantDirectory(),
    )
    party = registry.create(alice, destination=4242)

    registry.get(party.id)          # party
    registry.find_by_member(alice)  # party
    registry.parties()              # [party]
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from partykit.config import PartySettings
from partykit.core.identity import Member, Participant, ProcessContext, user_id_of
from partykit.core.policy import RandomSuccessor, SuccessorStrategy
from partykit.core.signal import Signal
from partykit.core.types import PartyType, Secret
from partykit.directory.protocol import ParticipantDirectory
from partykit.errors import PreconditionViolation
from partykit.party.party import Party, require_member_ref, require_participant

log = logging.getLogger(__name__)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class PartyRegistry:
    """Index of the live parties of one process.

    Only the authoritative process may create or mutate parties; every
    mutating call made elsewhere raises PreconditionViolation.

    Args:
        context: Process facts. Defaults to an authoritative, unreserved process.
        settings: Party settings. Defaults to PartySettings().
        directory: Participant directory used for friend checks and owner
            lookup. Without one, friends-only parties admit nobody.
        successor: Owner succession strategy. Defaults to RandomSuccessor().

    Attributes:
        party_created: Fires with each new party.
        party_destroyed: Fires with each destroyed party.
    """

    def __init__(
        self,
        context: ProcessContext | None = None,
        settings: PartySettings | None = None,
        directory: ParticipantDirectory | None = None,
        successor: SuccessorStrategy | None = None,
    ) -> None:
        self.context = context or ProcessContext()
        self.settings = settings or PartySettings()
        self.directory = directory
        self.successor: SuccessorStrategy = successor or RandomSuccessor()
        self._parties: dict[str, Party] = {}

        self.party_created: Signal[Party] = Signal()
        self.party_destroyed: Signal[Party] = Signal()

    def require_authority(self, action: str) -> None:
        """Raise PreconditionViolation unless running on the authoritative process."""
        if not self.context.is_authority:
            raise PreconditionViolation(f"Cannot {action} outside the authoritative process")

    def create(
        self,
        owner: Participant,
        destination: int,
        name: str | None = None,
        max_capacity: int | None = None,
        party_type: PartyType | None = None,
        secret: Secret | None = None,
    ) -> Party:
        """Create a party owned by owner, who becomes its first member.

        Args:
            owner: Participant that owns the party.
            destination: Place the party relocates to. Positive integer.
            name: Display name. Defaults to the owner's name.
            max_capacity: Maximum members. Defaults to settings.default_max_capacity.
            party_type: Admission policy. Defaults to PUBLIC.
            secret: Secret for PRIVATE parties.

        Returns:
            The registered party.

        Raises:
            PreconditionViolation: Off-authority or invalid arguments.
        """
        require_participant(owner, "owner")
        if not _is_positive_int(destination):
            raise PreconditionViolation(f"Please provide a valid destination, got {destination!r}")
        self.require_authority("create a party")

        capacity = self.settings.default_max_capacity if max_capacity is None else max_capacity
        if not _is_positive_int(capacity):
            raise PreconditionViolation(f"Max capacity must be a positive integer, got {capacity!r}")

        if party_type is None:
            party_type = PartyType.PUBLIC
        elif not isinstance(party_type, PartyType):
            raise PreconditionViolation(f"Unknown party type {party_type!r}")

        party = Party(
            self,
            id=str(uuid.uuid4()),
            name=name or owner.name,
            owner_id=owner.user_id,
            destination=destination,
            max_capacity=capacity,
            type=party_type,
            secret=secret,
            members=[owner],
        )
        self._parties[party.id] = party
        log.info("Party %s created by %s", party.id, owner)
        self.party_created.fire(party)
        return party

    def adopt(self, party: Party) -> Party:
        """Register a party reconstructed from a handoff snapshot.

        Does not fire party_created.

        Raises:
            PreconditionViolation: Off-authority, party built for another
                registry, or id already registered.
        """
        self.require_authority("adopt a party")
        if party._registry is not self:
            raise PreconditionViolation(f"Party {party.id} belongs to another registry")
        if party.id in self._parties:
            raise PreconditionViolation(f"Party {party.id} is already registered")

        self._parties[party.id] = party
        return party

    def get(self, party_id: str) -> Party | None:
        """Return the party with the given id, if registered.

        Raises:
            PreconditionViolation: If party_id is not a string.
        """
        if not isinstance(party_id, str):
            raise PreconditionViolation(f"Please provide a valid party id, got {party_id!r}")
        return self._parties.get(party_id)

    def find_by_member(self, member: Member) -> Party | None:
        """Return the first party whose members include member."""
        user_id = require_member_ref(member)
        for party in self._parties.values():
            if any(user_id_of(slot) == user_id for slot in party.members):
                return party
        return None

    def parties(self) -> list[Party]:
        """All registered parties in creation order."""
        return list(self._parties.values())

    def __len__(self) -> int:
        return len(self._parties)

    def __contains__(self, party_id: object) -> bool:
        return party_id in self._parties

    def _unregister(self, party: Party) -> None:
        self._parties.pop(party.id, None)
