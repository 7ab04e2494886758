"""partykit: party groups with cross-process handoff.

Usage:
    from partykit import PartyRuntime, Participant, PartyType

    runtime = PartyRuntime(relocator=my_relocator)
    alice = runtime.directory.connect(Participant(1, "alice"))
    bob = runtime.directory.connect(Participant(2, "bob"))

    party = runtime.registry.create(alice, destination=4242, party_type=PartyType.PUBLIC)
    party.add_member(bob)

    snapshot = await runtime.relocate(party)

    # On the reserved destination process
    runtime = PartyRuntime(context=ProcessContext(private_id=private_id), store=store)
    runtime.rehydration.participants_resolved.connect(print)
    result = await runtime.start()
"""

__version__ = "0.1.0"

# Configuration
from partykit.config import PartySettings, RedisSettings

# Core primitives
from partykit.core import (
    Admission,
    FriendGraph,
    LongestMemberSuccessor,
    Member,
    Participant,
    PartyType,
    ProcessContext,
    RandomSuccessor,
    Scope,
    Signal,
    SuccessorStrategy,
    UserId,
    evaluate_join,
)

# Directory
from partykit.directory import LocalParticipantDirectory, ParticipantDirectory

# Errors
from partykit.errors import PartyError, PreconditionViolation, TransferFailure

# Handoff
from partykit.handoff import (
    HandoffCoordinator,
    RehydrationCoordinator,
    RehydrationResult,
    RehydrationStatus,
    RelocationResult,
    Relocator,
    SerializedParty,
    Snapshot,
)

# Parties
from partykit.party import Party, PartyRegistry

# Runtime
from partykit.runtime import PartyRuntime

# Storage
from partykit.storage import InMemorySharedStore, SharedStore

__all__ = [
    # Version
    "__version__",
    # Config
    "PartySettings",
    "RedisSettings",
    # Core
    "Participant",
    "ProcessContext",
    "Member",
    "UserId",
    "PartyType",
    "Admission",
    "FriendGraph",
    "evaluate_join",
    "SuccessorStrategy",
    "RandomSuccessor",
    "LongestMemberSuccessor",
    "Signal",
    "Scope",
    # Errors
    "PartyError",
    "PreconditionViolation",
    "TransferFailure",
    # Parties
    "Party",
    "PartyRegistry",
    # Directory
    "ParticipantDirectory",
    "LocalParticipantDirectory",
    # Storage
    "SharedStore",
    "InMemorySharedStore",
    # Handoff
    "HandoffCoordinator",
    "RehydrationCoordinator",
    "RehydrationResult",
    "RehydrationStatus",
    "Relocator",
    "RelocationResult",
    "Snapshot",
    "SerializedParty",
    # Runtime
    "PartyRuntime",
]
