"""Participant identity models.

Usage:
    alice = Participant(user_id=1, name="alice")
    context = ProcessContext(is_authority=True, private_id="")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Participant:
    """Live handle for a connected participant.

    Handles are only meaningful inside the process that produced them.
    The durable form is ``user_id``.
    """

    user_id: int
    name: str = "Unknown"

    def __repr__(self) -> str:
        return f"Participant({self.user_id}, {self.name!r})"


UserId: TypeAlias = int
"""Durable participant identifier. Valid across process boundaries."""

Member: TypeAlias = Participant | UserId
"""A party slot: a live handle, or a durable id when no handle is available.

Parties on the origin hold durable ids after handoff; on the destination,
slots whose participant never connected keep the durable id.
"""


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """Process-scoped facts the party layer depends on.

    Attributes:
        is_authority: True on the privileged process where mutation is allowed.
        private_id: Private identifier of this process when it was reserved
            as a relocation destination. Empty for ordinary processes.
    """

    is_authority: bool = True
    private_id: str = ""

    @property
    def is_reserved(self) -> bool:
        """Check if this process was reserved as a relocation destination."""
        return bool(self.private_id)
