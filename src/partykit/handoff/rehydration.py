"""Rehydration: rebuilding a handed-off party on its destination process.

Usage:
    rehydration = RehydrationCoordinator(registry, store, directory)

    rehydration.process_started.connect(lambda party: print(party.data))
    rehydration.participants_resolved.connect(lambda members: print(members))

    result = await rehydration.run()
    if result.status is RehydrationStatus.RESTORED:
        party = rehydration.current_party

    # On process termination
    await rehydration.shutdown()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from pydantic import ValidationError

from partykit.config import PartySettings
from partykit.core.identity import Member, Participant, UserId, decode_members, is_live
from partykit.core.signal import Scope, Signal
from partykit.directory.protocol import ParticipantDirectory
from partykit.errors import PreconditionViolation
from partykit.handoff.models import Snapshot
from partykit.party import Party, PartyRegistry
from partykit.storage.protocol import SharedStore

log = logging.getLogger(__name__)


class RehydrationStatus(Enum):
    """Outcome of a rehydration run."""

    SKIPPED = auto()
    """Not a reserved destination, or not the authoritative process."""

    NOT_FOUND = auto()
    """No snapshot stored under this process's private id."""

    FAILED = auto()
    """Loading or parsing the snapshot failed."""

    RESTORED = auto()
    """Party rebuilt and participant resolution finished."""


@dataclass
class RehydrationResult:
    """Everything the bootstrap needs to report a rehydration run.

    Attributes:
        status: Outcome.
        party: Rebuilt party when RESTORED.
        access_code: Access code from the snapshot when RESTORED.
        members: Final member slots, live handles and unresolved ids mixed.
        unresolved: Durable ids that did not connect in time.
        error: Exception behind a FAILED status.
    """

    status: RehydrationStatus
    party: Party | None = None
    access_code: str | None = None
    members: list[Member] = field(default_factory=list)
    unresolved: list[UserId] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def fully_resolved(self) -> bool:
        return self.status is RehydrationStatus.RESTORED and not self.unresolved


class RehydrationCoordinator:
    """Loads this process's snapshot and turns durable ids back into participants.

    Runs once per process, and only when the process is a reserved
    destination on the authoritative side. Resolution waits for every
    member concurrently, each bounded by participant_join_timeout; a member
    that never connects keeps its durable id and does not affect the others.

    While a party is restored, an idle watcher deletes the snapshot from the
    shared store whenever no participant is connected.

    Args:
        registry: Registry the rebuilt party is adopted into.
        store: Shared store holding the snapshot.
        directory: Participant directory of this process.
        settings: Supplies participant_join_timeout. Defaults to the registry's settings.

    Attributes:
        process_started: Fires with the rebuilt party before resolution starts.
        participants_resolved: Fires with the final member slots.
        current_party: The rebuilt party, once restored.
    """

    def __init__(
        self,
        registry: PartyRegistry,
        store: SharedStore,
        directory: ParticipantDirectory,
        settings: PartySettings | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._directory = directory
        self._settings = settings or registry.settings
        self._scope = Scope()
        self._pending: set[asyncio.Task[None]] = set()
        self._started = False

        self.process_started: Signal[Party] = self._scope.construct(Signal)
        self.participants_resolved: Signal[list[Member]] = self._scope.construct(Signal)
        self.current_party: Party | None = None

    @property
    def _key(self) -> str:
        return self._registry.context.private_id

    async def run(self) -> RehydrationResult:
        """Load the snapshot, rebuild the party and resolve its participants.

        Returns:
            RehydrationResult describing the outcome. Load failures are
            reported here rather than raised.

        Raises:
            PreconditionViolation: If called more than once.
        """
        context = self._registry.context
        if not context.is_reserved or not context.is_authority:
            return RehydrationResult(RehydrationStatus.SKIPPED)

        if self._started:
            raise PreconditionViolation("Rehydration already ran for this process")
        self._started = True

        try:
            raw = await self._store.get(self._key)
        except Exception as e:
            log.error("There was an error getting the snapshot for %s: %s", self._key, e)
            return RehydrationResult(RehydrationStatus.FAILED, error=e)

        if raw is None:
            log.warning("No party snapshot stored for process %s", self._key)
            return RehydrationResult(RehydrationStatus.NOT_FOUND)

        try:
            snapshot = Snapshot.from_json(raw)
            party = self._registry.adopt(snapshot.party.to_party(self._registry))
        except (ValidationError, PreconditionViolation) as e:
            log.error("Invalid party snapshot for process %s: %s", self._key, e)
            return RehydrationResult(RehydrationStatus.FAILED, error=e)

        self.current_party = party
        self._install_idle_watcher()
        log.info("Restored party %s on process %s", party.id, self._key)
        self.process_started.fire(party)

        members = await self._resolve_members(party, snapshot.party.members)
        unresolved = [member for member in members if not is_live(member)]
        if unresolved:
            log.debug("Not all participants were resolved: %s", unresolved)
        else:
            log.debug("Successfully resolved all participants")
        self.participants_resolved.fire(members)

        return RehydrationResult(
            RehydrationStatus.RESTORED,
            party=party,
            access_code=snapshot.access_code,
            members=members,
            unresolved=unresolved,  # type: ignore[arg-type]
        )

    async def _resolve_members(self, party: Party, user_ids: list[UserId]) -> list[Member]:
        """Resolve every id concurrently, then attach the live handles to party.

        Completes once each id has resolved or timed out. Slot order follows
        user_ids.
        """
        found = await asyncio.gather(*(self._find_participant(user_id) for user_id in user_ids))
        resolved = {p.user_id: p for p in found if p is not None}

        members = decode_members(user_ids, resolved.get)
        for member in members:
            if is_live(member):
                party.attach(member)  # type: ignore[arg-type]
        return members

    async def _find_participant(self, user_id: UserId) -> Participant | None:
        timeout = self._settings.participant_join_timeout
        try:
            participant = self._directory.get(user_id)
            if participant is None:
                participant = await self._directory.wait_for(user_id, timeout)
        except Exception as e:
            log.debug("Could not resolve participant %s: %s", user_id, e)
            return None

        if participant is None:
            log.debug("Participant %s did not connect within %.1fs", user_id, timeout)
        return participant

    def _install_idle_watcher(self) -> None:
        self._scope.add(self._directory.participant_added.connect(self._on_participant_added))
        self._scope.add(
            self._directory.participant_removing.connect(self._on_participant_removing)
        )

    def _on_participant_added(self, participant: Participant) -> None:
        self._check_idle()

    def _on_participant_removing(self, participant: Participant) -> None:
        self._check_idle(leaving=participant)

    def _check_idle(self, leaving: Participant | None = None) -> None:
        remaining = [
            p
            for p in self._directory.connected()
            if leaving is None or p.user_id != leaving.user_id
        ]
        if remaining:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # shutdown() repeats the check from inside the loop
            log.debug("No running event loop; deferring snapshot release for %s", self._key)
            return

        task = loop.create_task(self._release_snapshot())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _release_snapshot(self) -> None:
        try:
            await self._store.delete(self._key)
        except Exception as e:
            log.warning("There was an error releasing the snapshot for %s: %s", self._key, e)
            return
        log.info("Released party snapshot for idle process %s", self._key)

    async def shutdown(self) -> None:
        """Run the idle check a final time and stop watching the directory.

        Waits for snapshot deletions already in flight.
        """
        if self.current_party is not None and not self._directory.connected():
            await self._release_snapshot()
        if self._pending:
            await asyncio.gather(*self._pending)
        self._scope.destroy()
