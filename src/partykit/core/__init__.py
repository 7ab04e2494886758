"""Core primitives: identities, party types, policies and signals.

Architecture Note:
    core/ holds stateless building blocks. Stateful services (registry,
    coordinators, stores) live in party/, handoff/, storage/ and directory/.
"""

from partykit.core.identity import (
    Member,
    Participant,
    ProcessContext,
    UserId,
    decode_members,
    encode_members,
    is_live,
    user_id_of,
)
from partykit.core.policy import (
    Admission,
    FriendGraph,
    LongestMemberSuccessor,
    RandomSuccessor,
    SuccessorStrategy,
    evaluate_join,
)
from partykit.core.signal import Connection, Scope, Signal
from partykit.core.types import PartyType, Secret

__all__ = [
    # Identity
    "Participant",
    "ProcessContext",
    "Member",
    "UserId",
    "encode_members",
    "decode_members",
    "user_id_of",
    "is_live",
    # Types
    "PartyType",
    "Secret",
    # Policy
    "Admission",
    "FriendGraph",
    "evaluate_join",
    "SuccessorStrategy",
    "RandomSuccessor",
    "LongestMemberSuccessor",
    # Signals
    "Signal",
    "Connection",
    "Scope",
]
