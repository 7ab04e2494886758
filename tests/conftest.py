"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from partykit import (
    InMemorySharedStore,
    LocalParticipantDirectory,
    LongestMemberSuccessor,
    Participant,
    PartyRegistry,
    PartySettings,
    ProcessContext,
    RelocationResult,
)


class FakeRelocator:
    """Relocator that records requests and optionally fails."""

    def __init__(self, private_id: str = "reserved-1", access_code: str = "code-1") -> None:
        self.private_id = private_id
        self.access_code = access_code
        self.error: Exception | None = None
        self.calls: list[tuple[int, list[Participant], bool]] = []

    async def request(self, destination, participants, *, reserve_process):
        self.calls.append((destination, list(participants), reserve_process))
        if self.error is not None:
            raise self.error
        return RelocationResult(
            access_code=self.access_code,
            destination_private_id=self.private_id,
        )


class BrokenStore(InMemorySharedStore):
    """Store whose selected operations raise ConnectionError."""

    def __init__(self, *failing: str) -> None:
        super().__init__()
        self.failing = set(failing)

    async def put(self, key, value, ttl_seconds):
        if "put" in self.failing:
            raise ConnectionError("store unavailable")
        await super().put(key, value, ttl_seconds)

    async def get(self, key):
        if "get" in self.failing:
            raise ConnectionError("store unavailable")
        return await super().get(key)

    async def delete(self, key):
        if "delete" in self.failing:
            raise ConnectionError("store unavailable")
        await super().delete(key)


@pytest.fixture
def settings():
    """Settings with a short join timeout so rehydration tests stay fast."""
    return PartySettings(participant_join_timeout=0.05)


@pytest.fixture
def directory():
    return LocalParticipantDirectory()


@pytest.fixture
def registry(settings, directory):
    """Authoritative registry with deterministic owner succession."""
    return PartyRegistry(
        context=ProcessContext(is_authority=True),
        settings=settings,
        directory=directory,
        successor=LongestMemberSuccessor(),
    )


@pytest.fixture
def alice(directory):
    return directory.connect(Participant(1, "alice"))


@pytest.fixture
def bob(directory):
    return directory.connect(Participant(2, "bob"))


@pytest.fixture
def carol(directory):
    return directory.connect(Participant(3, "carol"))


@pytest.fixture
def store():
    return InMemorySharedStore()


@pytest.fixture
def relocator():
    return FakeRelocator()


@pytest.fixture
def relocator_cls():
    return FakeRelocator


@pytest.fixture
def broken_store_cls():
    return BrokenStore
