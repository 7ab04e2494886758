"""Order-preserving conversion between live handles and durable identifiers.

Handoff encodes members before they cross the process boundary; rehydration
decodes them against the local directory. Slot order is join order and must
survive both directions.

Usage:
    ids = encode_members([alice, bob])          # [1, 2]
    members = decode_members([1, 2], lookup)    # [alice, 2] if bob is absent
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from partykit.core.identity.models import Member, Participant, UserId


def user_id_of(member: Member) -> UserId:
    """Return the durable identifier of a member slot.

    Raises:
        TypeError: If member is neither a Participant nor an int.
    """
    if isinstance(member, Participant):
        return member.user_id
    if isinstance(member, int) and not isinstance(member, bool):
        return member
    raise TypeError(f"Expected Participant or user id, got {type(member).__name__}")


def is_live(member: Member) -> bool:
    """Check if a member slot holds a live handle."""
    return isinstance(member, Participant)


def encode_members(members: Iterable[Member]) -> list[UserId]:
    """Convert member slots to durable identifiers, keeping order."""
    return [user_id_of(member) for member in members]


def decode_members(
    user_ids: Iterable[UserId],
    lookup: Callable[[UserId], Participant | None],
) -> list[Member]:
    """Resolve durable identifiers to live handles where available.

    Slots the lookup cannot resolve keep their durable identifier.
    """
    decoded: list[Member] = []
    for user_id in user_ids:
        participant = lookup(user_id)
        decoded.append(participant if participant is not None else user_id)
    return decoded
