"""Participant identity: live handles, durable ids and the codec between them."""

from partykit.core.identity.codec import decode_members, encode_members, is_live, user_id_of
from partykit.core.identity.models import Member, Participant, ProcessContext, UserId

__all__ = [
    "Participant",
    "Member",
    "UserId",
    "ProcessContext",
    "encode_members",
    "decode_members",
    "user_id_of",
    "is_live",
]
