"""
Player records.

A ``Player`` bundles identity, contract, season stat line and the three
generated profiles (attributes, personality, bio).  ``overall`` is a
read-only property derived from the attribute profile, so there is no way
to store a rating that disagrees with the attributes it summarises.

Records are treated as values: edits go through ``dataclasses.replace``
and produce a new player.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from typing import Optional

from hoops.attributes import PlayerAttributes, calculate_overall_rating
from hoops.bio import PlayerBio
from hoops.injuries import Injury
from hoops.personality import PlayerPersonality

_ID_ALPHABET = string.ascii_lowercase + string.digits
PLAYER_ID_LENGTH = 9


def generate_player_id(rng: random.Random = None) -> str:
    rng = rng or random
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(PLAYER_ID_LENGTH))


@dataclass
class Contract:
    salary: int
    years: int

    def to_dict(self) -> dict:
        return {"salary": self.salary, "years": self.years}

    @classmethod
    def from_dict(cls, d: dict) -> "Contract":
        return cls(salary=d.get("salary", 0), years=d.get("years", 1))


@dataclass
class PlayerStats:
    """Per-game season averages."""
    points: float = 0
    rebounds: float = 0
    assists: float = 0
    steals: float = 0
    blocks: float = 0

    def to_dict(self) -> dict:
        return {
            "points": self.points,
            "rebounds": self.rebounds,
            "assists": self.assists,
            "steals": self.steals,
            "blocks": self.blocks,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "PlayerStats":
        return cls(**{k: d.get(k, 0) for k in cls.__dataclass_fields__})


@dataclass
class Player:
    id: str
    name: str
    position: str
    age: int
    contract: Contract
    attributes: PlayerAttributes
    personality: PlayerPersonality
    bio: PlayerBio
    stats: PlayerStats = field(default_factory=PlayerStats)
    injury: Optional[Injury] = None

    @property
    def overall(self) -> int:
        return calculate_overall_rating(self.attributes, self.position)

    @property
    def is_injured(self) -> bool:
        return self.injury is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "age": self.age,
            "overall": self.overall,
            "contract": self.contract.to_dict(),
            "stats": self.stats.to_dict(),
            "personality": self.personality.to_dict(),
            "attributes": self.attributes.to_dict(),
            "bio": self.bio.to_dict(),
            "injury": self.injury.to_dict() if self.injury else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Player":
        """Rebuild a player.  The stored ``overall`` is ignored and re-derived."""
        injury = d.get("injury")
        return cls(
            id=d["id"],
            name=d["name"],
            position=d["position"],
            age=d["age"],
            contract=Contract.from_dict(d.get("contract", {})),
            stats=PlayerStats.from_dict(d.get("stats", {})),
            personality=PlayerPersonality.from_dict(d["personality"]),
            attributes=PlayerAttributes.from_dict(d["attributes"]),
            bio=PlayerBio.from_dict(d["bio"]),
            injury=Injury.from_dict(injury) if injury else None,
        )
