"""Tests for PartyRegistry.

Critical Invariants:
- Only the authoritative process can create parties
- Invalid arguments are rejected before anything is registered
- Independent registries never share parties
"""

import pytest

from partykit import (
    Participant,
    PartyRegistry,
    PartyType,
    PreconditionViolation,
    ProcessContext,
)


def test_create_registers_party_with_owner_as_first_member(registry, alice):
    party = registry.create(alice, destination=4242)

    assert registry.get(party.id) is party
    assert party.id in registry
    assert party.members == [alice]
    assert party.owner_id == alice.user_id


def test_create_applies_defaults(registry, alice):
    party = registry.create(alice, destination=4242)

    assert party.name == "alice"
    assert party.max_capacity == registry.settings.default_max_capacity == 8
    assert party.type is PartyType.PUBLIC
    assert party.secret is None
    assert party.data == {}


def test_create_fires_party_created(registry, alice):
    created = []
    registry.party_created.connect(created.append)

    party = registry.create(alice, destination=1, name="raid", max_capacity=3)

    assert created == [party]
    assert party.name == "raid"


def test_party_ids_are_unique(registry, alice, bob):
    first = registry.create(alice, destination=1)
    second = registry.create(bob, destination=1)

    assert first.id != second.id
    assert registry.parties() == [first, second]
    assert len(registry) == 2


@pytest.mark.parametrize(
    ("owner", "destination", "kwargs"),
    [
        ("alice", 1, {}),
        (None, 1, {}),
        (Participant(1, "a"), 0, {}),
        (Participant(1, "a"), -3, {}),
        (Participant(1, "a"), "place", {}),
        (Participant(1, "a"), True, {}),
        (Participant(1, "a"), 1, {"max_capacity": 0}),
        (Participant(1, "a"), 1, {"max_capacity": 2.5}),
        (Participant(1, "a"), 1, {"party_type": "public"}),
    ],
)
def test_create_rejects_invalid_arguments(registry, owner, destination, kwargs):
    with pytest.raises(PreconditionViolation):
        registry.create(owner, destination, **kwargs)

    assert len(registry) == 0


def test_create_off_authority_raises(settings, directory, alice):
    registry = PartyRegistry(context=ProcessContext(is_authority=False), settings=settings)

    with pytest.raises(PreconditionViolation):
        registry.create(alice, destination=1)

    assert registry.parties() == []


def test_get_rejects_non_string_id(registry):
    with pytest.raises(PreconditionViolation):
        registry.get(42)


def test_get_unknown_id_returns_none(registry):
    assert registry.get("missing") is None


def test_find_by_member_returns_first_matching_party(registry, alice, bob, carol):
    party = registry.create(alice, destination=1)
    party.add_member(bob)

    assert registry.find_by_member(bob) is party
    assert registry.find_by_member(bob.user_id) is party
    assert registry.find_by_member(carol) is None


def test_find_by_member_validates_handle(registry):
    with pytest.raises(PreconditionViolation):
        registry.find_by_member("bob")


def test_independent_registries_do_not_share_parties(settings, alice):
    first = PartyRegistry(settings=settings)
    second = PartyRegistry(settings=settings)

    party = first.create(alice, destination=1)

    assert second.get(party.id) is None
    assert second.find_by_member(alice) is None


def test_adopt_registers_without_firing_created(registry, alice):
    created = []
    registry.party_created.connect(created.append)
    other = PartyRegistry(settings=registry.settings)
    foreign = other.create(alice, destination=1)

    with pytest.raises(PreconditionViolation):
        registry.adopt(foreign)

    from partykit.handoff import SerializedParty

    rebuilt = SerializedParty.from_party(foreign).to_party(registry)
    assert registry.adopt(rebuilt) is rebuilt
    assert registry.get(foreign.id) is rebuilt
    assert created == []

    with pytest.raises(PreconditionViolation):
        registry.adopt(rebuilt)
