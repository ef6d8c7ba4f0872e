"""
Team records.

``salary`` is the payroll snapshot taken when the roster was last built or
traded for; ``with_roster`` is the way to swap a roster and refresh it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from hoops.player import Player
from hoops.strategy import TeamStrategy


@dataclass
class TeamColors:
    primary: str
    secondary: str

    def to_dict(self) -> dict:
        return {"primary": self.primary, "secondary": self.secondary}

    @classmethod
    def from_dict(cls, d: dict) -> "TeamColors":
        return cls(primary=d.get("primary", "#000000"), secondary=d.get("secondary", "#FFFFFF"))


@dataclass
class Team:
    id: str
    name: str
    city: str
    abbreviation: str
    colors: TeamColors
    roster: List[Player] = field(default_factory=list)
    salary: int = 0
    wins: int = 0
    losses: int = 0
    strategy: TeamStrategy = field(default_factory=TeamStrategy)

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.name}"

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        return self.wins / self.games_played if self.games_played else 0.0

    @property
    def average_overall(self) -> float:
        if not self.roster:
            return 0.0
        return sum(p.overall for p in self.roster) / len(self.roster)

    def payroll(self) -> int:
        return sum(p.contract.salary for p in self.roster)

    def find_player(self, player_id: str) -> Optional[Player]:
        for p in self.roster:
            if p.id == player_id:
                return p
        return None

    def with_roster(self, roster: List[Player]) -> "Team":
        """New team record with ``roster`` and the salary recomputed from it."""
        return replace(self, roster=list(roster), salary=sum(p.contract.salary for p in roster))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "abbreviation": self.abbreviation,
            "colors": self.colors.to_dict(),
            "roster": [p.to_dict() for p in self.roster],
            "salary": self.salary,
            "wins": self.wins,
            "losses": self.losses,
            "strategy": self.strategy.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Team":
        return cls(
            id=d["id"],
            name=d["name"],
            city=d.get("city", ""),
            abbreviation=d.get("abbreviation", ""),
            colors=TeamColors.from_dict(d.get("colors", {})),
            roster=[Player.from_dict(p) for p in d.get("roster", [])],
            salary=d.get("salary", 0),
            wins=d.get("wins", 0),
            losses=d.get("losses", 0),
            strategy=TeamStrategy.from_dict(d["strategy"]),
        )
