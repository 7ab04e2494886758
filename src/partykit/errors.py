"""Exceptions raised by partykit.

Policy rejections (full party, wrong secret, non-friend) are not errors:
membership methods return False for those. Exceptions here signal misuse
or failed transfers.
"""

from __future__ import annotations


class PartyError(Exception):
    """Base class for partykit errors."""

    pass


class PreconditionViolation(PartyError):
    """Raised when a call is made with invalid arguments or off-authority.

    Always raised before any state is mutated.
    """

    pass


class TransferFailure(PartyError):
    """Raised when relocating a party or persisting its snapshot fails.

    Attributes:
        stage: Which step failed ("relocate" or "persist").
        party_id: Id of the party being handed off.
    """

    def __init__(self, message: str, *, stage: str, party_id: str) -> None:
        super().__init__(message)
        self.stage = stage
        self.party_id = party_id
