"""Handoff coordinator: relocates a party and persists its snapshot.

Usage:
    handoff = HandoffCoordinator(registry, relocator, store)
    try:
        snapshot = await handoff.start(party)
    except TransferFailure as e:
        # party is still registered and mutable; nothing is retried
        log.error("relocation failed at %s", e.stage)
"""

from __future__ import annotations

import logging

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from partykit.config import PartySettings
from partykit.core.identity import Participant, encode_members
from partykit.errors import PreconditionViolation, TransferFailure
from partykit.handoff.models import RelocationResult, SerializedParty, Snapshot
from partykit.handoff.protocol import Relocator
from partykit.party import Party, PartyRegistry
from partykit.storage.protocol import SharedStore

log = logging.getLogger(__name__)


class HandoffCoordinator:
    """Moves a party's participants to a reserved process and leaves a snapshot behind.

    Steps, in order:
        1. Ask the relocator to move every member to the party's destination,
           reserving a fresh process.
        2. Overwrite the party's members with their durable ids.
        3. Build a Snapshot from the relocation's access code and the party.
        4. Store the snapshot under the reserved process's private id.

    A failure at step 1 or 4 raises TransferFailure. Nothing is retried.

    Args:
        registry: Registry the parties belong to. Supplies the authority check.
        relocator: Relocation collaborator.
        store: Shared store visible to the destination process.
        settings: Supplies snapshot_ttl_seconds. Defaults to the registry's settings.
    """

    def __init__(
        self,
        registry: PartyRegistry,
        relocator: Relocator,
        store: SharedStore,
        settings: PartySettings | None = None,
    ) -> None:
        self._registry = registry
        self._relocator = relocator
        self._store = store
        self._settings = settings or registry.settings

    async def start(self, party: Party) -> Snapshot:
        """Relocate party and persist its snapshot.

        Args:
            party: A live party whose members are all connected handles.

        Returns:
            The persisted snapshot.

        Raises:
            PreconditionViolation: Off-authority, destroyed party, party
                already handed off, or party state (data keys and values,
                secret) not JSON-serializable.
            TransferFailure: Relocation or snapshot persistence failed.
        """
        self._registry.require_authority("start a party")
        if party.destroyed:
            raise PreconditionViolation(f"Party {party.id} has been destroyed")
        if not party.is_live:
            raise PreconditionViolation(f"Party {party.id} has already been handed off")
        try:
            SerializedParty.from_party(party).model_dump_json()
        except (ValidationError, PydanticSerializationError) as e:
            raise PreconditionViolation(f"Party {party.id} cannot be serialized: {e}") from e

        participants: list[Participant] = list(party.members)  # type: ignore[arg-type]
        log.info(
            "Relocating party %s (%d members) to destination %s",
            party.id,
            len(participants),
            party.destination,
        )

        relocation = await self._relocate(party, participants)

        party.members[:] = encode_members(party.members)
        snapshot = Snapshot(
            access_code=relocation.access_code,
            party=SerializedParty.from_party(party),
        )

        await self._persist(party, relocation.destination_private_id, snapshot)
        log.info(
            "Party %s handed off to process %s",
            party.id,
            relocation.destination_private_id,
        )
        return snapshot

    async def _relocate(self, party: Party, participants: list[Participant]) -> RelocationResult:
        try:
            return await self._relocator.request(
                party.destination,
                participants,
                reserve_process=True,
            )
        except Exception as e:
            log.error("There was an error relocating party %s: %s", party.id, e)
            raise TransferFailure(
                f"Relocating party {party.id} failed: {e}",
                stage="relocate",
                party_id=party.id,
            ) from e

    async def _persist(self, party: Party, key: str, snapshot: Snapshot) -> None:
        try:
            await self._store.put(key, snapshot.to_json(), self._settings.snapshot_ttl_seconds)
        except Exception as e:
            log.error("There was an error storing the snapshot of party %s: %s", party.id, e)
            raise TransferFailure(
                f"Storing the snapshot of party {party.id} failed: {e}",
                stage="persist",
                party_id=party.id,
            ) from e
