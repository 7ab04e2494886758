"""Tests for LocalParticipantDirectory."""

import asyncio

import pytest

from partykit import Participant
from partykit.directory import LocalParticipantDirectory, ParticipantDirectory


def test_local_directory_is_participant_directory():
    assert isinstance(LocalParticipantDirectory(), ParticipantDirectory)


def test_connect_and_disconnect_fire_signals(directory):
    added, removing = [], []
    directory.participant_added.connect(added.append)
    directory.participant_removing.connect(lambda p: removing.append((p, len(directory))))
    alice = Participant(1, "alice")

    directory.connect(alice)
    assert directory.get(1) is alice
    assert directory.connected() == [alice]

    assert directory.disconnect(1) is True
    assert directory.disconnect(1) is False

    assert added == [alice]
    assert removing == [(alice, 1)]
    assert directory.get(1) is None


def test_friend_relations_are_symmetric(directory):
    directory.befriend(1, 2)

    assert directory.are_friends(1, 2)
    assert directory.are_friends(2, 1)
    assert not directory.are_friends(1, 3)

    directory.unfriend(2, 1)
    assert not directory.are_friends(1, 2)


@pytest.mark.asyncio
async def test_wait_for_returns_connected_participant_immediately(directory):
    alice = directory.connect(Participant(1, "alice"))

    assert await directory.wait_for(1, timeout=0.01) is alice


@pytest.mark.asyncio
async def test_wait_for_resolves_on_connect(directory):
    bob = Participant(2, "bob")
    asyncio.get_running_loop().call_later(0.01, directory.connect, bob)

    assert await directory.wait_for(2, timeout=1.0) is bob


@pytest.mark.asyncio
async def test_wait_for_times_out_with_none(directory):
    assert await directory.wait_for(3, timeout=0.01) is None
    assert directory._waiters == {}


@pytest.mark.asyncio
async def test_several_waiters_for_same_participant(directory):
    carol = Participant(3, "carol")
    waiters = [asyncio.ensure_future(directory.wait_for(3, timeout=1.0)) for _ in range(3)]
    await asyncio.sleep(0)

    directory.connect(carol)

    assert await asyncio.gather(*waiters) == [carol, carol, carol]
