"""Party policies: who may join, and who owns the party next."""

from partykit.core.policy.join import ADMITTED, Admission, FriendGraph, evaluate_join
from partykit.core.policy.succession import (
    LongestMemberSuccessor,
    RandomSuccessor,
    SuccessorStrategy,
)

__all__ = [
    # Join
    "Admission",
    "ADMITTED",
    "FriendGraph",
    "evaluate_join",
    # Succession
    "SuccessorStrategy",
    "RandomSuccessor",
    "LongestMemberSuccessor",
]
