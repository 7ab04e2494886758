"""Cross-process handoff: relocation, snapshots and rehydration."""

from partykit.handoff.coordinator import HandoffCoordinator
from partykit.handoff.models import RelocationResult, SerializedParty, Snapshot
from partykit.handoff.protocol import Relocator
from partykit.handoff.rehydration import (
    RehydrationCoordinator,
    RehydrationResult,
    RehydrationStatus,
)

__all__ = [
    # Coordinators
    "HandoffCoordinator",
    "RehydrationCoordinator",
    # Models
    "Snapshot",
    "SerializedParty",
    "RelocationResult",
    "RehydrationResult",
    "RehydrationStatus",
    # Protocols
    "Relocator",
]
