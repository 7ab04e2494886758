"""Participant directories."""

from partykit.directory.local import LocalParticipantDirectory
from partykit.directory.protocol import ParticipantDirectory

__all__ = [
    "ParticipantDirectory",
    "LocalParticipantDirectory",
]
