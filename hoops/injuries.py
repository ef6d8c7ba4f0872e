"""
Hoops Injury System

Weekly injury bookkeeping for the season simulator:
- Every healthy player rolls once per week against the team's injury rate
- Rate is 5% baseline, 7% for teams playing Grit & Grind defense
- Injuries last 1-4 weeks and tick down by one at the start of each week

Players are never mutated in place; healing and injuring return new records.

Usage:
    roster = heal_roster(team.roster)
    rate = injury_rate_for(team.strategy)
    injury = roll_injury(player, rate, rng)
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Optional

from hoops.config import BASE_INJURY_RATE, GRIT_AND_GRIND_INJURY_RATE, INJURY_WEEKS_RANGE
from hoops.strategy import DefensiveStrategy, TeamStrategy


INJURY_TYPES = [
    "Ankle Sprain",
    "Knee Strain",
    "Back Soreness",
    "Hamstring Pull",
    "Shoulder Strain",
]


# ──────────────────────────────────────────────
# INJURY RECORDS
# ──────────────────────────────────────────────

@dataclass
class Injury:
    """An active injury carried on a player record."""
    type: str
    weeks_remaining: int

    def to_dict(self) -> dict:
        return {"type": self.type, "weeks_remaining": self.weeks_remaining}

    @classmethod
    def from_dict(cls, d: dict) -> "Injury":
        return cls(type=d.get("type", INJURY_TYPES[0]), weeks_remaining=d.get("weeks_remaining", 1))


@dataclass
class InjuryReport:
    """A new injury picked up during a simulated week."""
    team_id: str
    player_id: str
    player_name: str
    position: str
    injury: Injury

    @property
    def display(self) -> str:
        weeks = self.injury.weeks_remaining
        return f"{self.player_name} ({self.position}): {self.injury.type} [{weeks} wk(s)]"

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "position": self.position,
            "injury": self.injury.to_dict(),
        }


# ──────────────────────────────────────────────
# HEALING / ROLLING
# ──────────────────────────────────────────────

def heal_player(player):
    """One week of recovery; the injury clears when no weeks remain."""
    injury = player.injury
    if injury is None or injury.weeks_remaining <= 0:
        return player
    remaining = injury.weeks_remaining - 1
    if remaining > 0:
        return replace(player, injury=Injury(type=injury.type, weeks_remaining=remaining))
    return replace(player, injury=None)


def heal_roster(roster: List) -> List:
    return [heal_player(p) for p in roster]


def injury_rate_for(strategy: Optional[TeamStrategy]) -> float:
    if strategy is not None and strategy.defensive == DefensiveStrategy.GRIT_AND_GRIND:
        return GRIT_AND_GRIND_INJURY_RATE
    return BASE_INJURY_RATE


def roll_injury(player, rate: float, rng: random.Random = None) -> Optional[Injury]:
    """Roll for a new injury.  Already-injured players are never re-injured."""
    if player.injury is not None:
        return None
    rng = rng or random
    if rng.random() >= rate:
        return None
    injury_type = INJURY_TYPES[int(rng.random() * len(INJURY_TYPES))]
    lo, hi = INJURY_WEEKS_RANGE
    weeks = int(rng.random() * (hi - lo + 1)) + lo
    return Injury(type=injury_type, weeks_remaining=weeks)
