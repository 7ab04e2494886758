"""Handoff wire models.

A Snapshot is what crosses the process boundary: the relocation access code
plus the party serialized with durable member ids. It is stored as JSON.

Usage:
    snapshot = Snapshot(access_code="abc", party=SerializedParty.from_party(party))
    raw = snapshot.to_json()

    restored = Snapshot.from_json(raw)
    party = restored.party.to_party(registry)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from partykit.core.identity import encode_members
from partykit.core.types import PartyType

if TYPE_CHECKING:
    from partykit.party import Party, PartyRegistry


@dataclass(frozen=True, slots=True)
class RelocationResult:
    """Outcome of a successful relocation request.

    Attributes:
        access_code: Code participants use to enter the reserved process.
        destination_private_id: Private id of the reserved process. Used as
            the snapshot key.
    """

    access_code: str
    destination_private_id: str


class SerializedParty(BaseModel):
    """Party state with members as durable ids.

    Members must be unique and fit within max_capacity.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    owner_id: int
    destination: int
    max_capacity: int = Field(gt=0)
    type: PartyType = PartyType.PUBLIC
    secret: str | int | None = None
    members: list[int] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_members(self) -> SerializedParty:
        if len(set(self.members)) != len(self.members):
            raise ValueError(f"duplicate member ids in {self.members}")
        if len(self.members) > self.max_capacity:
            raise ValueError(
                f"{len(self.members)} members exceed max_capacity {self.max_capacity}"
            )
        return self

    @classmethod
    def from_party(cls, party: Party) -> SerializedParty:
        """Serialize party, encoding its members to durable ids."""
        return cls(
            id=party.id,
            name=party.name,
            owner_id=party.owner_id,
            destination=party.destination,
            max_capacity=party.max_capacity,
            type=party.type,
            secret=party.secret,
            members=encode_members(party.members),
            data=dict(party.data),
        )

    def to_party(self, registry: PartyRegistry) -> Party:
        """Build an unregistered Party bound to registry.

        Members stay durable ids until resolved.
        """
        from partykit.party import Party

        return Party(
            registry,
            id=self.id,
            name=self.name,
            owner_id=self.owner_id,
            destination=self.destination,
            max_capacity=self.max_capacity,
            type=self.type,
            secret=self.secret,
            members=list(self.members),
            data=dict(self.data),
        )


class Snapshot(BaseModel):
    """Handoff payload persisted in the shared store."""

    model_config = ConfigDict(extra="ignore")

    access_code: str
    party: SerializedParty

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str | bytes) -> Snapshot:
        """Parse a stored snapshot.

        Raises:
            pydantic.ValidationError: If raw is not a valid snapshot.
        """
        return cls.model_validate_json(raw)
