"""Admission decisions per party type.

Usage:
    admission = evaluate_join(
        PartyType.FRIENDS,
        owner_id=party.owner_id,
        candidate_id=bob.user_id,
        secret=None,
        expected_secret=party.secret,
        friends=directory,
    )
    if not admission:
        log.warning(admission.reason)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from partykit.core.types import PartyType, Secret, UserId


@runtime_checkable
class FriendGraph(Protocol):
    """Answers friend-relation queries between participants."""

    def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        """Check if two participants have a friend relation."""
        ...


@dataclass(frozen=True, slots=True)
class Admission:
    """Outcome of a join policy evaluation. Truthy when admitted."""

    admitted: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.admitted


ADMITTED = Admission(admitted=True)


def evaluate_join(
    party_type: PartyType,
    *,
    owner_id: UserId,
    candidate_id: UserId,
    secret: Secret | None,
    expected_secret: Secret | None,
    friends: FriendGraph | None,
) -> Admission:
    """Decide whether candidate may join a party of the given type.

    Only the type-specific rule is checked here. Capacity and duplicate
    membership are the party's concern.

    Args:
        party_type: Type of the party being joined.
        owner_id: Durable id of the current owner.
        candidate_id: Durable id of the joining participant.
        secret: Secret offered by the candidate.
        expected_secret: The party's secret.
        friends: Friend relation source. Without one, friends-only parties
            admit nobody.

    Returns:
        Admission, truthy when the candidate is admitted.

    Raises:
        ValueError: If party_type is not a PartyType member.
    """
    if party_type == PartyType.PUBLIC:
        return ADMITTED
    if party_type == PartyType.FRIENDS:
        if friends is not None and friends.are_friends(owner_id, candidate_id):
            return ADMITTED
        return Admission(False, f"{candidate_id} is not a friend of owner {owner_id}")
    if party_type == PartyType.PRIVATE:
        if secret == expected_secret:
            return ADMITTED
        return Admission(False, f"{candidate_id} offered a wrong secret")
    msg = f"Unknown party type: {party_type!r}"
    raise ValueError(msg)
