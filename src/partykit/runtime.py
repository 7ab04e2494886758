"""PartyRuntime: per-process wiring of registry, handoff and rehydration.

Usage:
    runtime = PartyRuntime(
        context=ProcessContext(is_authority=True, private_id=os.environ.get("PRIVATE_ID", "")),
        store=RedisSharedStore.from_settings(),
        relocator=my_relocator,
    )

    async with runtime:              # start() on enter, shutdown() on exit
        party = runtime.registry.create(alice, destination=4242)
        party.add_member(bob)
        await runtime.relocate(party)
"""

from __future__ import annotations

import logging
from types import TracebackType

from partykit.config import PartySettings
from partykit.core.identity import ProcessContext
from partykit.core.policy import SuccessorStrategy
from partykit.directory import LocalParticipantDirectory, ParticipantDirectory
from partykit.errors import PreconditionViolation
from partykit.handoff import (
    HandoffCoordinator,
    RehydrationCoordinator,
    RehydrationResult,
    RehydrationStatus,
    Relocator,
    Snapshot,
)
from partykit.party import Party, PartyRegistry
from partykit.storage import InMemorySharedStore, SharedStore

log = logging.getLogger(__name__)


class PartyRuntime:
    """Process bootstrap for the party layer.

    Owns one registry and the coordinators that share its context. On a
    reserved destination process, ``start`` restores the handed-off party
    and reports the outcome.

    Args:
        context: Process facts. Defaults to an authoritative, unreserved process.
        settings: Party settings. Defaults to PartySettings().
        directory: Participant directory. Defaults to LocalParticipantDirectory().
        store: Shared store. Defaults to InMemorySharedStore().
        relocator: Relocation collaborator. Required for ``relocate``.
        successor: Owner succession strategy for the registry.
    """

    def __init__(
        self,
        context: ProcessContext | None = None,
        settings: PartySettings | None = None,
        directory: ParticipantDirectory | None = None,
        store: SharedStore | None = None,
        relocator: Relocator | None = None,
        successor: SuccessorStrategy | None = None,
    ) -> None:
        self.settings = settings or PartySettings()
        self.directory = directory or LocalParticipantDirectory()
        self.store = store or InMemorySharedStore()
        self.registry = PartyRegistry(
            context=context,
            settings=self.settings,
            directory=self.directory,
            successor=successor,
        )
        self.rehydration = RehydrationCoordinator(self.registry, self.store, self.directory)
        self.handoff = (
            HandoffCoordinator(self.registry, relocator, self.store) if relocator else None
        )

    @property
    def context(self) -> ProcessContext:
        return self.registry.context

    @property
    def current_party(self) -> Party | None:
        """Party restored on this process, if any."""
        return self.rehydration.current_party

    async def start(self) -> RehydrationResult:
        """Restore the handed-off party if this is a reserved destination.

        The outcome is logged and returned; load failures never raise.
        """
        result = await self.rehydration.run()
        self._report(result)
        return result

    async def relocate(self, party: Party) -> Snapshot:
        """Hand party off to a reserved process.

        Raises:
            PreconditionViolation: No relocator configured, or see HandoffCoordinator.start.
            TransferFailure: Relocation or persistence failed.
        """
        if self.handoff is None:
            raise PreconditionViolation("No relocator configured for this runtime")
        return await self.handoff.start(party)

    async def shutdown(self) -> None:
        """Final idle check and release of directory subscriptions."""
        await self.rehydration.shutdown()

    async def __aenter__(self) -> PartyRuntime:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.shutdown()

    def _report(self, result: RehydrationResult) -> None:
        private_id = self.context.private_id
        if result.status == RehydrationStatus.SKIPPED:
            log.debug("Process %r is not a reserved destination", private_id)
        elif result.status == RehydrationStatus.NOT_FOUND:
            log.warning("Reserved process %s started without a party", private_id)
        elif result.status == RehydrationStatus.FAILED:
            log.error("Reserved process %s could not restore its party: %s", private_id, result.error)
        elif result.status == RehydrationStatus.RESTORED:
            log.info(
                "Party %s restored: %d resolved, %d unresolved",
                result.party.id if result.party else None,
                len(result.members) - len(result.unresolved),
                len(result.unresolved),
            )
