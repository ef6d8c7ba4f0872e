"""
Hoops League Generator

Builds a full league from a ``LeagueConfig``: the first N of 30 fixed team
templates, each with a 12-man roster (2 PG, 3 SG, 3 SF, 2 PF, 2 C) of
freshly generated players and a random strategy.

Every player goes through the same pipeline:

    name -> attributes (toward a target overall) -> overall
         -> bio and personality (from the derived overall)

Fresh-start leagues begin at 0-0 with empty stat lines.  Otherwise records
and per-game stats are backfilled as if 60 games had been played, with
wins loosely tracking roster strength.

Usage:
    config = LeagueConfig(league_name="Test League", number_of_teams=8)
    teams = generate_league(config, rng=random.Random(42))
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from hoops.attributes import calculate_overall_rating, clamp, generate_player_attributes, round_half_up
from hoops.bio import generate_player_bio
from hoops.config import (
    CONTRACT_YEARS_RANGE,
    DEFAULT_SEASON,
    DIFFICULTIES,
    DIFFICULTY_OVERALL_RANGES,
    DRAFT_CLASS_AGE_RANGE,
    DRAFT_CLASS_OVERALL_RANGE,
    FREE_AGENT_AGE_RANGE,
    FREE_AGENT_OVERALL_RANGE,
    FREE_AGENT_SALARY_RANGE,
    FREE_AGENT_YEARS_RANGE,
    LEAGUE_NAME_MAX_LENGTH,
    PLAYER_AGE_RANGE,
    POSITIONS,
    ROOKIE_CONTRACT_YEARS,
    ROOKIE_SALARY_RANGE,
    ROSTER_QUOTAS,
    SALARY_BASE_RANGE,
    SEASON_LENGTH_RANGE,
    SEEDED_GAMES_PLAYED,
    LeagueConfig,
)
from hoops.names import NameGenerator, name_generator as default_name_generator
from hoops.personality import generate_personality_traits
from hoops.player import Contract, Player, PlayerStats, generate_player_id
from hoops.strategy import TeamStrategy, generate_random_strategy
from hoops.team import Team, TeamColors

_log = logging.getLogger("hoops.league")


# ═══════════════════════════════════════════════════════════════
# TEAM TEMPLATES
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TeamTemplate:
    city: str
    name: str
    abbreviation: str
    primary: str
    secondary: str

    @property
    def team_id(self) -> str:
        return self.abbreviation.lower()


TEAM_TEMPLATES: List[TeamTemplate] = [
    # Western Conference
    TeamTemplate("Los Angeles", "Storm", "LAS", "#552583", "#FDB927"),
    TeamTemplate("Golden State", "Thunder", "GST", "#1D428A", "#FFC72C"),
    TeamTemplate("Phoenix", "Blaze", "PHB", "#E56020", "#1D1160"),
    TeamTemplate("Denver", "Peaks", "DEN", "#0E2240", "#FEC524"),
    TeamTemplate("Portland", "Cascades", "POR", "#E03A3E", "#000000"),
    TeamTemplate("Seattle", "Emeralds", "SEA", "#006747", "#FFC200"),
    TeamTemplate("Sacramento", "Royals", "SAC", "#5A2D81", "#63727A"),
    TeamTemplate("San Antonio", "Stallions", "SAS", "#C4CED4", "#000000"),
    TeamTemplate("Houston", "Rockets", "HOU", "#CE1141", "#000000"),
    TeamTemplate("Dallas", "Mavericks", "DAL", "#00538C", "#002F5F"),
    TeamTemplate("Memphis", "Blues", "MEM", "#5D76A9", "#12173F"),
    TeamTemplate("New Orleans", "Jazz", "NOP", "#0C2340", "#C8102E"),
    TeamTemplate("Oklahoma City", "Storm", "OKC", "#007AC1", "#EF3B24"),
    TeamTemplate("Utah", "Mountains", "UTA", "#002B5C", "#00471B"),
    TeamTemplate("Minnesota", "Wolves", "MIN", "#0C2340", "#236192"),
    # Eastern Conference
    TeamTemplate("Boston", "Eagles", "BOS", "#007A33", "#BA9653"),
    TeamTemplate("Miami", "Heat", "MIA", "#98002E", "#F9A01B"),
    TeamTemplate("New York", "Titans", "NYK", "#006BB6", "#F58426"),
    TeamTemplate("Brooklyn", "Nets", "BKN", "#000000", "#FFFFFF"),
    TeamTemplate("Philadelphia", "Liberty", "PHI", "#006BB6", "#ED174C"),
    TeamTemplate("Toronto", "Raptors", "TOR", "#CE1141", "#000000"),
    TeamTemplate("Chicago", "Lightning", "CHI", "#CE1141", "#000000"),
    TeamTemplate("Milwaukee", "Bucks", "MIL", "#00471B", "#EEE1C6"),
    TeamTemplate("Indiana", "Pacers", "IND", "#002D62", "#FDBB30"),
    TeamTemplate("Detroit", "Motors", "DET", "#C8102E", "#1D42BA"),
    TeamTemplate("Cleveland", "Cavaliers", "CLE", "#860038", "#FDBB30"),
    TeamTemplate("Atlanta", "Hawks", "ATL", "#E03A3E", "#C1D32F"),
    TeamTemplate("Charlotte", "Hornets", "CHA", "#1D1160", "#00788C"),
    TeamTemplate("Washington", "Wizards", "WAS", "#002B5C", "#E31837"),
    TeamTemplate("Orlando", "Magic", "ORL", "#0077C0", "#C4CED4"),
]


def get_available_team_templates() -> List[TeamTemplate]:
    return list(TEAM_TEMPLATES)


# ═══════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════

def validate_league_config(config: LeagueConfig) -> List[str]:
    """Return a list of human-readable problems; empty means valid."""
    errors = []
    name = config.league_name or ""
    if not name.strip():
        errors.append("League name is required")
    if len(name) > LEAGUE_NAME_MAX_LENGTH:
        errors.append(f"League name must be {LEAGUE_NAME_MAX_LENGTH} characters or less")
    lo, hi = SEASON_LENGTH_RANGE
    if config.season_length < lo or config.season_length > hi:
        errors.append(f"Season length must be between {lo} and {hi} weeks")
    if config.difficulty not in DIFFICULTIES:
        errors.append("Invalid difficulty level")
    if config.number_of_teams < 2 or config.number_of_teams > len(TEAM_TEMPLATES):
        errors.append(f"Number of teams must be between 2 and {len(TEAM_TEMPLATES)}")
    return errors


# ═══════════════════════════════════════════════════════════════
# PLAYER GENERATION
# ═══════════════════════════════════════════════════════════════

def _randint(rng, bounds: Tuple[int, int]) -> int:
    lo, hi = bounds
    return int(rng.random() * (hi - lo + 1)) + lo


def _random_amount(rng, bounds: Tuple[int, int]) -> int:
    """Uniform integer in [lo, hi)."""
    lo, hi = bounds
    return int(rng.random() * (hi - lo)) + lo


def _seeded_stats(position: str, overall: int, rng) -> PlayerStats:
    return PlayerStats(
        points=int(rng.random() * 20) + 5 + (overall - 70) * 0.3,
        rebounds=int(rng.random() * 10) + 2 + (3 if position in ("C", "PF") else 0),
        assists=int(rng.random() * 8) + 1 + (4 if position == "PG" else 0),
        steals=rng.random() * 2.5 + 0.5,
        blocks=rng.random() * 2.5 + 0.2 + (1 if position == "C" else 0),
    )


def build_player(
    name: str,
    position: str,
    age: int,
    target_overall: int,
    contract: Contract,
    current_season: int,
    rng: random.Random,
) -> Player:
    """Attributes first, then everything else from the derived overall."""
    attributes = generate_player_attributes(position, age, target_overall, rng)
    overall = calculate_overall_rating(attributes, position)
    return Player(
        id=generate_player_id(rng),
        name=name,
        position=position,
        age=age,
        contract=contract,
        attributes=attributes,
        personality=generate_personality_traits(position, age, overall, rng),
        bio=generate_player_bio(age, position, overall, current_season, rng),
    )


def generate_player(
    position: str,
    overall_range: Tuple[int, int],
    names: NameGenerator,
    fresh_start: bool = True,
    current_season: int = DEFAULT_SEASON,
    rng: random.Random = None,
) -> Player:
    """A veteran roster player with an age- and rating-scaled contract."""
    rng = rng or random
    age = _randint(rng, PLAYER_AGE_RANGE)
    target = _randint(rng, overall_range)

    # Salary scales with the target rating, not the derived overall
    base_salary = _random_amount(rng, SALARY_BASE_RANGE)
    age_factor = 0.7 if age < 25 else 0.8 if age > 32 else 1.0
    salary = int(base_salary * age_factor * target / 100)
    contract = Contract(salary=salary, years=_randint(rng, CONTRACT_YEARS_RANGE))

    player = build_player(names.generate_unique_name(), position, age, target,
                          contract, current_season, rng)
    if not fresh_start:
        player.stats = _seeded_stats(position, player.overall, rng)
    return player


def generate_team_roster(
    difficulty: str,
    names: NameGenerator,
    fresh_start: bool = True,
    current_season: int = DEFAULT_SEASON,
    rng: random.Random = None,
) -> List[Player]:
    overall_range = DIFFICULTY_OVERALL_RANGES.get(difficulty, DIFFICULTY_OVERALL_RANGES["normal"])
    roster = []
    for position, count in ROSTER_QUOTAS:
        for _ in range(count):
            roster.append(generate_player(position, overall_range, names,
                                          fresh_start, current_season, rng))
    return roster


def _seeded_record(roster: List[Player], rng) -> Tuple[int, int]:
    strength = sum(p.overall for p in roster) / len(roster)
    win_share = clamp((strength - 50) / 50, 0.2, 0.8)
    wins = int(rng.random() * 20) + math.floor(SEEDED_GAMES_PLAYED * win_share)
    wins = min(wins, SEEDED_GAMES_PLAYED)
    return wins, SEEDED_GAMES_PLAYED - wins


def generate_team(
    template: TeamTemplate,
    difficulty: str,
    names: NameGenerator,
    fresh_start: bool = True,
    current_season: int = DEFAULT_SEASON,
    rng: random.Random = None,
    strategy: Optional[TeamStrategy] = None,
) -> Team:
    rng = rng or random
    roster = generate_team_roster(difficulty, names, fresh_start, current_season, rng)
    wins, losses = (0, 0) if fresh_start else _seeded_record(roster, rng)
    team = Team(
        id=template.team_id,
        name=template.name,
        city=template.city,
        abbreviation=template.abbreviation,
        colors=TeamColors(template.primary, template.secondary),
        wins=wins,
        losses=losses,
        strategy=strategy or generate_random_strategy(rng),
    )
    return team.with_roster(roster)


def generate_league(
    config: LeagueConfig,
    fresh_start: bool = True,
    current_season: int = DEFAULT_SEASON,
    rng: random.Random = None,
    name_generator: Optional[NameGenerator] = None,
    strategy_overrides: Optional[Dict[str, TeamStrategy]] = None,
) -> List[Team]:
    """Generate every team for ``config``.

    The name generator's history is cleared first so a new league can reuse
    names from a previous one.  ``strategy_overrides`` maps team id to a
    strategy that replaces the random assignment.
    """
    errors = validate_league_config(config)
    if errors:
        raise ValueError(f"Invalid league config: {'; '.join(errors)}")

    rng = rng or random
    names = name_generator or default_name_generator
    names.reset_used_names()
    overrides = strategy_overrides or {}

    teams = []
    for template in TEAM_TEMPLATES[:config.number_of_teams]:
        teams.append(generate_team(
            template, config.difficulty, names, fresh_start, current_season, rng,
            strategy=overrides.get(template.team_id),
        ))

    _log.info(
        f"Generated league '{config.league_name}': {len(teams)} teams, "
        f"{sum(len(t.roster) for t in teams)} players ({config.difficulty})"
    )
    return teams


# ═══════════════════════════════════════════════════════════════
# DRAFT CLASS / FREE AGENTS
# ═══════════════════════════════════════════════════════════════

def generate_draft_class(
    count: int,
    current_season: int = DEFAULT_SEASON,
    rng: random.Random = None,
    name_generator: Optional[NameGenerator] = None,
) -> List[Player]:
    """Rookies on four-year deals.  May return fewer than ``count`` if names run out."""
    rng = rng or random
    names = (name_generator or default_name_generator).generate_draft_class(count)
    draftees = []
    for name in names:
        position = POSITIONS[int(rng.random() * len(POSITIONS))]
        age = _randint(rng, DRAFT_CLASS_AGE_RANGE)
        target = _randint(rng, DRAFT_CLASS_OVERALL_RANGE)
        contract = Contract(salary=_random_amount(rng, ROOKIE_SALARY_RANGE), years=ROOKIE_CONTRACT_YEARS)
        draftees.append(build_player(name, position, age, target, contract, current_season, rng))
    return draftees


def generate_free_agents(
    count: int,
    current_season: int = DEFAULT_SEASON,
    rng: random.Random = None,
    name_generator: Optional[NameGenerator] = None,
) -> List[Player]:
    rng = rng or random
    names = (name_generator or default_name_generator).generate_free_agents(count)
    free_agents = []
    for name in names:
        position = POSITIONS[int(rng.random() * len(POSITIONS))]
        age = _randint(rng, FREE_AGENT_AGE_RANGE)
        target = _randint(rng, FREE_AGENT_OVERALL_RANGE)
        contract = Contract(salary=_random_amount(rng, FREE_AGENT_SALARY_RANGE),
                            years=_randint(rng, FREE_AGENT_YEARS_RANGE))
        free_agents.append(build_player(name, position, age, target, contract, current_season, rng))
    return free_agents


# ═══════════════════════════════════════════════════════════════
# LEAGUE SUMMARY
# ═══════════════════════════════════════════════════════════════

def calculate_league_stats(teams: List[Team]) -> dict:
    if not teams:
        return {
            "total_teams": 0, "total_players": 0, "average_overall": 0,
            "total_salary": 0, "average_salary": 0, "average_roster_size": 0,
        }
    total_players = sum(len(t.roster) for t in teams)
    average_overall = sum(t.average_overall for t in teams) / len(teams)
    total_salary = sum(t.salary for t in teams)
    return {
        "total_teams": len(teams),
        "total_players": total_players,
        "average_overall": round_half_up(average_overall),
        "total_salary": total_salary,
        "average_salary": total_salary / len(teams),
        "average_roster_size": round_half_up(total_players / len(teams)),
    }
