"""Party relocation walkthrough.

Demonstrates:
- Creating a party and admitting members under a join policy
- Handing the party off to a reserved process
- Rehydrating it on the destination while one member arrives late
"""

import asyncio
import logging

from partykit import (
    InMemorySharedStore,
    Participant,
    PartyRuntime,
    PartySettings,
    PartyType,
    ProcessContext,
    RelocationResult,
)


class LoopbackRelocator:
    """Pretends to reserve a server and move everyone onto it."""

    async def request(self, destination, participants, *, reserve_process):
        print(f"Moving {participants} to destination {destination}")
        return RelocationResult(access_code="abc123", destination_private_id="server-7")


async def main_async():
    logging.basicConfig(level=logging.INFO)
    store = InMemorySharedStore()
    settings = PartySettings(participant_join_timeout=1.0)

    # Origin process
    origin = PartyRuntime(settings=settings, store=store, relocator=LoopbackRelocator())
    alice = origin.directory.connect(Participant(1, "alice"))
    bob = origin.directory.connect(Participant(2, "bob"))
    mallory = origin.directory.connect(Participant(3, "mallory"))

    party = origin.registry.create(
        alice, destination=4242, party_type=PartyType.PRIVATE, secret="hunter2"
    )
    party.member_added.connect(lambda p: print(f"{p.name} joined"))
    party.add_member(bob, secret="hunter2")
    party.add_member(mallory, secret="wrong")  # rejected
    party.data["map"] = "canyon"

    snapshot = await origin.relocate(party)
    print(f"Handed off with access code {snapshot.access_code}: {party.members}")

    # Reserved destination process
    destination = PartyRuntime(
        context=ProcessContext(private_id="server-7"), settings=settings, store=store
    )
    destination.rehydration.process_started.connect(lambda p: print(f"Restored {p}"))
    destination.rehydration.participants_resolved.connect(lambda m: print(f"Resolved {m}"))

    destination.directory.connect(Participant(1, "alice"))
    asyncio.get_running_loop().call_later(0.2, destination.directory.connect, Participant(2, "bob"))

    async with destination:
        print(f"Owner on destination: {destination.current_party.get_owner()}")

    print("Done.")


def main():
    """Sync wrapper for main_async."""
    asyncio.run(main_async())


if __name__ == "__main__":
    main()
