"""Party entity: membership, ownership and lifecycle signals.

Parties are created through a PartyRegistry, never directly.

Usage:
    party = registry.create(alice, destination=4242, max_capacity=4)
    party.member_added.connect(lambda p: print("joined", p))

    party.add_member(bob)                  # True
    party.add_member(carol, secret="x")    # False unless policy admits
    party.remove_member(alice)             # owner leaves, successor elected
    party.destroy()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from partykit.core.identity import Member, Participant, UserId, is_live, user_id_of
from partykit.core.policy import evaluate_join
from partykit.core.signal import Scope, Signal
from partykit.core.types import PartyType, Secret
from partykit.errors import PreconditionViolation

if TYPE_CHECKING:
    from partykit.party.registry import PartyRegistry

log = logging.getLogger(__name__)


def require_participant(handle: Any, role: str = "participant") -> Participant:
    """Return handle if it is a live Participant, else raise PreconditionViolation."""
    if not isinstance(handle, Participant):
        raise PreconditionViolation(f"Please provide a valid {role}, got {handle!r}")
    return handle


def require_member_ref(member: Any) -> UserId:
    """Return the durable id of a Participant or int, else raise PreconditionViolation."""
    try:
        return user_id_of(member)
    except TypeError as e:
        raise PreconditionViolation(f"Please provide a valid participant, got {member!r}") from e


class Party:
    """A bounded group of participants travelling together to a destination.

    Members are kept in join order with no two slots sharing a user id.
    Membership mutations are synchronous; run them from the event loop
    thread only.

    Attributes:
        id: Unique party id.
        name: Display name.
        owner_id: Durable id of the owner.
        destination: Place the party relocates to.
        max_capacity: Upper bound on len(members).
        type: Admission policy.
        secret: Secret required to join a PRIVATE party.
        members: Member slots in join order.
        data: Application-owned values. Must be JSON-serializable to survive handoff.
        member_added: Fires with the participant after it joins.
        member_removed: Fires with the member slot after it is removed.
        owner_changed: Fires with the new owner.
    """

    def __init__(
        self,
        registry: PartyRegistry,
        *,
        id: str,
        name: str,
        owner_id: UserId,
        destination: int,
        max_capacity: int,
        type: PartyType = PartyType.PUBLIC,
        secret: Secret | None = None,
        members: list[Member] | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        self._registry = registry
        self._scope = Scope()
        self._destroyed = False

        self.id = id
        self.name = name
        self.owner_id = owner_id
        self.destination = destination
        self.max_capacity = max_capacity
        self.type = type
        self.secret = secret
        self.members: list[Member] = members if members is not None else []
        self.data: dict[str, Any] = data if data is not None else {}

        self.member_added: Signal[Participant] = self._scope.construct(Signal)
        self.member_removed: Signal[Member] = self._scope.construct(Signal)
        self.owner_changed: Signal[Member] = self._scope.construct(Signal)

    def __repr__(self) -> str:
        return (
            f"Party(id={self.id!r}, name={self.name!r}, type={self.type.name}, "
            f"members={len(self.members)}/{self.max_capacity})"
        )

    def __len__(self) -> int:
        return len(self.members)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def is_full(self) -> bool:
        return len(self.members) >= self.max_capacity

    @property
    def is_live(self) -> bool:
        """True when every slot holds a live handle."""
        return all(is_live(member) for member in self.members)

    def _index_of(self, user_id: UserId) -> int | None:
        for index, member in enumerate(self.members):
            if user_id_of(member) == user_id:
                return index
        return None

    def is_member(self, member: Member) -> bool:
        """Check if a participant (or durable id) occupies a slot."""
        return self._index_of(require_member_ref(member)) is not None

    def is_owner(self, member: Member) -> bool:
        """Check if a participant (or durable id) is the owner."""
        return require_member_ref(member) == self.owner_id

    def get_owner(self) -> Participant | None:
        """Return the owner's live handle, if the owner is connected."""
        index = self._index_of(self.owner_id)
        if index is not None and is_live(self.members[index]):
            return self.members[index]  # type: ignore[return-value]
        directory = self._registry.directory
        return directory.get(self.owner_id) if directory is not None else None

    def add_member(self, handle: Participant, secret: Secret | None = None) -> bool:
        """Add a participant to the party.

        Args:
            handle: Participant to add.
            secret: Secret offered when joining a PRIVATE party.

        Returns:
            True if added. False, with no mutation, when the participant is
            in another party, already a member, the party is full, or the
            join policy rejects.

        Raises:
            PreconditionViolation: Off-authority, invalid handle, or destroyed party.
        """
        require_participant(handle)
        self._registry.require_authority("add a member")
        self._require_alive()

        if not self._registry.settings.allow_multiple_parties:
            current = self._registry.find_by_member(handle)
            if current is not None and current is not self:
                log.warning("%s is already in party %s", handle, current.id)
                return False

        if self._index_of(handle.user_id) is not None:
            log.warning("%s is already in party %s", handle, self.id)
            return False

        if self.is_full:
            log.warning(
                "Cannot add %s to party %s: capacity %d reached",
                handle,
                self.id,
                self.max_capacity,
            )
            return False

        admission = evaluate_join(
            self.type,
            owner_id=self.owner_id,
            candidate_id=handle.user_id,
            secret=secret,
            expected_secret=self.secret,
            friends=self._registry.directory,
        )
        if not admission:
            log.warning("Could not add %s to party %s: %s", handle, self.id, admission.reason)
            return False

        self.members.append(handle)
        self.member_added.fire(handle)
        return True

    def remove_member(self, member: Member) -> bool:
        """Remove a member from the party.

        Removing the last member destroys the party. Removing the owner from
        a non-empty party hands ownership to the member picked by the
        registry's successor strategy.

        Args:
            member: Participant or durable id to remove.

        Returns:
            True if removed, False if it was not a member.

        Raises:
            PreconditionViolation: Off-authority or invalid member.
        """
        user_id = require_member_ref(member)
        self._registry.require_authority("remove a member")

        index = self._index_of(user_id)
        if index is None:
            log.warning("%r is not in party %s", member, self.id)
            return False

        removed = self.members.pop(index)
        self.member_removed.fire(removed)

        if not self.members:
            self.destroy()
        elif user_id == self.owner_id:
            self.set_owner(self._registry.successor.choose(self.members))

        return True

    def set_owner(self, member: Member) -> None:
        """Make member the owner and fire owner_changed.

        Membership of the new owner is not checked.

        Raises:
            PreconditionViolation: Off-authority or invalid member.
        """
        user_id = require_member_ref(member)
        self._registry.require_authority("set the owner")

        self.owner_id = user_id
        self.owner_changed.fire(member)

    def attach(self, participant: Participant) -> bool:
        """Replace the durable-id slot of participant with its live handle.

        Used when a handed-off participant connects. Membership and order are
        unchanged and no signal fires.

        Returns:
            True if a durable-id slot was replaced.
        """
        require_participant(participant)
        index = self._index_of(participant.user_id)
        if index is None or is_live(self.members[index]):
            return False
        self.members[index] = participant
        return True

    def destroy(self) -> None:
        """Remove the party from its registry and release its signals.

        Fires the registry's party_destroyed once. Later calls do nothing.

        Raises:
            PreconditionViolation: Off-authority.
        """
        self._registry.require_authority("destroy a party")
        if self._destroyed:
            return
        self._destroyed = True

        self._registry._unregister(self)
        self._registry.party_destroyed.fire(self)
        self._scope.destroy()
        self.members.clear()
        self.data.clear()
        log.info("Party %s destroyed", self.id)

    def _require_alive(self) -> None:
        if self._destroyed:
            raise PreconditionViolation(f"Party {self.id} has been destroyed")
