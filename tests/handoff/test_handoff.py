"""Tests for HandoffCoordinator.

Critical Invariants:
- A failed relocation writes nothing and leaves the party untouched
- A successful handoff stores the snapshot under the reserved process id
- Members become durable ids in their original order
- Failures are raised as TransferFailure, never retried
"""

import json

import pytest

from partykit import (
    HandoffCoordinator,
    PartyType,
    PreconditionViolation,
    ProcessContext,
    TransferFailure,
)
from partykit.handoff import Snapshot


@pytest.mark.asyncio
async def test_start_relocates_and_persists_snapshot(registry, relocator, store, alice, bob):
    party = registry.create(alice, destination=4242)
    party.add_member(bob)
    party.data["mode"] = "ranked"
    handoff = HandoffCoordinator(registry, relocator, store)

    snapshot = await handoff.start(party)

    assert relocator.calls == [(4242, [alice, bob], True)]
    assert snapshot.access_code == "code-1"
    assert snapshot.party.members == [1, 2]

    stored = await store.get("reserved-1")
    assert Snapshot.from_json(stored) == snapshot
    assert json.loads(stored)["party"]["data"] == {"mode": "ranked"}


@pytest.mark.asyncio
async def test_start_overwrites_members_with_ids_and_keeps_party_registered(
    registry, relocator, store, alice, bob, carol
):
    party = registry.create(alice, destination=1)
    party.add_member(carol)
    party.add_member(bob)
    handoff = HandoffCoordinator(registry, relocator, store)

    await handoff.start(party)

    assert party.members == [1, 3, 2]
    assert registry.get(party.id) is party
    assert not party.destroyed


@pytest.mark.asyncio
async def test_snapshot_uses_configured_ttl(registry, relocator, alice):
    calls = []

    class RecordingStore:
        async def put(self, key, value, ttl_seconds):
            calls.append((key, ttl_seconds))

        async def get(self, key):
            return None

        async def delete(self, key):
            pass

    party = registry.create(alice, destination=1)

    await HandoffCoordinator(registry, relocator, RecordingStore()).start(party)

    assert calls == [("reserved-1", registry.settings.snapshot_ttl_seconds)]


@pytest.mark.asyncio
async def test_relocation_failure_writes_nothing(registry, relocator, store, alice, bob):
    """Scenario: relocation fails; party stays registered and mutable."""
    relocator.error = RuntimeError("place is full")
    party = registry.create(alice, destination=1)
    handoff = HandoffCoordinator(registry, relocator, store)

    with pytest.raises(TransferFailure) as excinfo:
        await handoff.start(party)

    assert excinfo.value.stage == "relocate"
    assert excinfo.value.party_id == party.id
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert len(store) == 0
    assert len(relocator.calls) == 1
    assert party.members == [alice]
    assert registry.get(party.id) is party
    assert party.add_member(bob) is True


@pytest.mark.asyncio
async def test_store_failure_raises_transfer_failure(registry, relocator, broken_store_cls, alice):
    store = broken_store_cls("put")
    party = registry.create(alice, destination=1)
    handoff = HandoffCoordinator(registry, relocator, store)

    with pytest.raises(TransferFailure) as excinfo:
        await handoff.start(party)

    assert excinfo.value.stage == "persist"
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert registry.get(party.id) is party


@pytest.mark.asyncio
async def test_start_twice_is_rejected(registry, relocator, store, alice):
    party = registry.create(alice, destination=1)
    handoff = HandoffCoordinator(registry, relocator, store)
    await handoff.start(party)

    with pytest.raises(PreconditionViolation):
        await handoff.start(party)

    assert len(relocator.calls) == 1


@pytest.mark.asyncio
async def test_start_destroyed_party_is_rejected(registry, relocator, store, alice):
    party = registry.create(alice, destination=1)
    party.destroy()

    with pytest.raises(PreconditionViolation):
        await HandoffCoordinator(registry, relocator, store).start(party)

    assert relocator.calls == []


@pytest.mark.asyncio
async def test_unserializable_data_is_rejected_before_relocation(registry, relocator, store, alice):
    party = registry.create(alice, destination=1)
    party.data["socket"] = object()

    with pytest.raises(PreconditionViolation):
        await HandoffCoordinator(registry, relocator, store).start(party)

    assert relocator.calls == []
    assert party.members == [alice]


@pytest.mark.asyncio
async def test_non_string_data_key_is_rejected_before_relocation(registry, relocator, store, alice):
    party = registry.create(alice, destination=1)
    party.data[7] = "loot"

    with pytest.raises(PreconditionViolation):
        await HandoffCoordinator(registry, relocator, store).start(party)

    assert relocator.calls == []
    assert party.members == [alice]
    assert "reserved-1" not in store


@pytest.mark.asyncio
async def test_unsupported_secret_is_rejected_before_relocation(registry, relocator, store, alice):
    party = registry.create(alice, destination=1, party_type=PartyType.PRIVATE, secret=("a", "b"))

    with pytest.raises(PreconditionViolation):
        await HandoffCoordinator(registry, relocator, store).start(party)

    assert relocator.calls == []


@pytest.mark.asyncio
async def test_start_off_authority_raises(registry, relocator, store, alice):
    party = registry.create(alice, destination=1)
    registry.context = ProcessContext(is_authority=False)

    with pytest.raises(PreconditionViolation):
        await HandoffCoordinator(registry, relocator, store).start(party)

    assert relocator.calls == []
