"""
Hoops Dynasty League Configuration
==================================

Static tuning constants for league generation and the weekly simulator,
plus the ``LeagueConfig`` record a new league is created from.

Difficulty controls the target-overall band players are generated in:

    easy    65-90
    normal  60-88
    hard    55-85
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Tuple


POSITIONS: Tuple[str, ...] = ("PG", "SG", "SF", "PF", "C")

DEFAULT_SEASON = 2024
DEFAULT_SEASON_LENGTH = 30
DEFAULT_NUMBER_OF_TEAMS = 30

DIFFICULTIES: Tuple[str, ...] = ("easy", "normal", "hard")


# ═══════════════════════════════════════════════════════════════
# LEAGUE / ROSTER GENERATION
# ═══════════════════════════════════════════════════════════════

DIFFICULTY_OVERALL_RANGES: Dict[str, Tuple[int, int]] = {
    "easy": (65, 90),
    "normal": (60, 88),
    "hard": (55, 85),
}

# 12-man roster: 2 PG, 3 SG, 3 SF, 2 PF, 2 C
ROSTER_QUOTAS: List[Tuple[str, int]] = [
    ("PG", 2),
    ("SG", 3),
    ("SF", 3),
    ("PF", 2),
    ("C", 2),
]

PLAYER_AGE_RANGE: Tuple[int, int] = (19, 36)

# Veteran contracts: base salary band before age / rating factors
SALARY_BASE_RANGE: Tuple[int, int] = (5_000_000, 40_000_000)
CONTRACT_YEARS_RANGE: Tuple[int, int] = (1, 4)

DRAFT_CLASS_AGE_RANGE: Tuple[int, int] = (19, 21)
DRAFT_CLASS_OVERALL_RANGE: Tuple[int, int] = (60, 89)
ROOKIE_SALARY_RANGE: Tuple[int, int] = (1_000_000, 6_000_000)
ROOKIE_CONTRACT_YEARS = 4

FREE_AGENT_AGE_RANGE: Tuple[int, int] = (22, 36)
FREE_AGENT_OVERALL_RANGE: Tuple[int, int] = (50, 89)
FREE_AGENT_SALARY_RANGE: Tuple[int, int] = (2_000_000, 32_000_000)
FREE_AGENT_YEARS_RANGE: Tuple[int, int] = (1, 3)

# Pre-seeded (non fresh-start) leagues pretend this many games are played
SEEDED_GAMES_PLAYED = 60


# ═══════════════════════════════════════════════════════════════
# WEEKLY SIMULATION
# ═══════════════════════════════════════════════════════════════

BASE_SCORE = 90
BASE_SCORE_SPREAD = 30

BASE_INJURY_RATE = 0.05
GRIT_AND_GRIND_INJURY_RATE = 0.07
INJURY_WEEKS_RANGE: Tuple[int, int] = (1, 4)

PLAYOFF_TEAMS = 8


# ═══════════════════════════════════════════════════════════════
# VALIDATION LIMITS
# ═══════════════════════════════════════════════════════════════

LEAGUE_NAME_MAX_LENGTH = 30
SEASON_LENGTH_RANGE: Tuple[int, int] = (10, 50)
ABBREVIATION_LENGTH = 3


@dataclass
class LeagueConfig:
    """Settings chosen when a new league is created."""
    league_name: str
    season_length: int = DEFAULT_SEASON_LENGTH
    difficulty: str = "normal"
    number_of_teams: int = DEFAULT_NUMBER_OF_TEAMS

    @property
    def overall_range(self) -> Tuple[int, int]:
        return DIFFICULTY_OVERALL_RANGES.get(self.difficulty, DIFFICULTY_OVERALL_RANGES["normal"])

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "LeagueConfig":
        return cls(
            league_name=d.get("league_name", ""),
            season_length=d.get("season_length", DEFAULT_SEASON_LENGTH),
            difficulty=d.get("difficulty", "normal"),
            number_of_teams=d.get("number_of_teams", DEFAULT_NUMBER_OF_TEAMS),
        )
