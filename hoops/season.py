"""
Weekly Season Simulator

One call to ``simulate_week`` advances the league by a single week:

1. Heal: every active injury loses a week and clears at zero
2. Pair teams by list position: 0 v 1, 2 v 3, ... (odd team out sits)
3. Score each game from both teams' strategy effects and the matchup edge
4. Update records and log a GameResult per game
5. Roll new injuries for every healthy player on every team

The function is pure: it reads the current teams and week and returns a
``WeekResult`` describing the next state.  Nothing is committed until the
caller publishes that result, so a week is applied all-or-nothing.

Usage:
    result = simulate_week(teams, current_week=1, rng=random.Random(3))
    teams, week = result.teams, result.current_week
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence, Tuple

from hoops.config import BASE_SCORE, BASE_SCORE_SPREAD, DEFAULT_SEASON_LENGTH, PLAYOFF_TEAMS
from hoops.injuries import InjuryReport, heal_roster, injury_rate_for, roll_injury
from hoops.strategy import calculate_matchup_advantage, combine_strategy_effects
from hoops.team import Team

_log = logging.getLogger("hoops.season")


# ──────────────────────────────────────────────
# RESULT RECORDS
# ──────────────────────────────────────────────

@dataclass
class GameResult:
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    date: str

    @property
    def winner(self) -> str:
        return self.home_team if self.home_score > self.away_score else self.away_team

    def to_dict(self) -> dict:
        return {
            "home_team": self.home_team,
            "away_team": self.away_team,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GameResult":
        return cls(
            home_team=d["home_team"],
            away_team=d["away_team"],
            home_score=d["home_score"],
            away_score=d["away_score"],
            date=d.get("date", ""),
        )


@dataclass
class BoxScore:
    """Per-game detail carried in league state.  The weekly simulator does not fill these."""
    game_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    quarter: int = 4
    time_remaining: str = "0:00"
    player_stats: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "home_team": self.home_team,
            "away_team": self.away_team,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "quarter": self.quarter,
            "time_remaining": self.time_remaining,
            "player_stats": {pid: dict(line) for pid, line in self.player_stats.items()},
        }

    @classmethod
    def from_dict(cls, d: dict) -> "BoxScore":
        return cls(
            game_id=d["game_id"],
            home_team=d["home_team"],
            away_team=d["away_team"],
            home_score=d.get("home_score", 0),
            away_score=d.get("away_score", 0),
            quarter=d.get("quarter", 4),
            time_remaining=d.get("time_remaining", "0:00"),
            player_stats={pid: dict(line) for pid, line in d.get("player_stats", {}).items()},
        )


@dataclass
class WeekResult:
    teams: List[Team]
    game_results: List[GameResult]
    injuries: List[InjuryReport]
    current_week: int


# ──────────────────────────────────────────────
# SIMULATION
# ──────────────────────────────────────────────

def score_game(home: Team, away: Team, rng: random.Random = None) -> Tuple[int, int]:
    """Strategy-driven final score.

    The away side's score is additionally scaled by its own opponent-FG
    modifier.
    """
    rng = rng or random
    home_fx = combine_strategy_effects(home.strategy)
    away_fx = combine_strategy_effects(away.strategy)
    advantage = calculate_matchup_advantage(home.strategy, away.strategy)

    home_base = BASE_SCORE + rng.random() * BASE_SCORE_SPREAD
    away_base = BASE_SCORE + rng.random() * BASE_SCORE_SPREAD

    home_score = math.floor(
        home_base * (1 + advantage) * (2 - home_fx.turnover_rate) * home_fx.pace_modifier
    )
    away_score = math.floor(
        away_base * (1 - advantage) * (2 - away_fx.turnover_rate) * away_fx.pace_modifier
        * away_fx.opponent_fg_modifier
    )
    return home_score, away_score


def pair_teams(teams: Sequence[Team]) -> List[Tuple[int, int]]:
    """Index pairs (0, 1), (2, 3), ...; a trailing odd team is left out."""
    return [(i, i + 1) for i in range(0, len(teams) - 1, 2)]


def simulate_week(teams: Sequence[Team], current_week: int, rng: random.Random = None) -> WeekResult:
    rng = rng or random
    week_label = f"Week {current_week + 1}"

    updated = [replace(t, roster=heal_roster(t.roster)) for t in teams]

    results: List[GameResult] = []
    for home_idx, away_idx in pair_teams(updated):
        home, away = updated[home_idx], updated[away_idx]
        home_score, away_score = score_game(home, away, rng)
        home_won = home_score > away_score

        updated[home_idx] = replace(home, wins=home.wins + home_won, losses=home.losses + (not home_won))
        updated[away_idx] = replace(away, wins=away.wins + (not home_won), losses=away.losses + home_won)
        results.append(GameResult(home.id, away.id, home_score, away_score, week_label))
        _log.debug(f"{week_label}: {home.abbreviation} {home_score} - {away_score} {away.abbreviation}")

    reports: List[InjuryReport] = []
    for idx, team in enumerate(updated):
        rate = injury_rate_for(team.strategy)
        roster = []
        for player in team.roster:
            injury = roll_injury(player, rate, rng)
            if injury is not None:
                player = replace(player, injury=injury)
                reports.append(InjuryReport(team.id, player.id, player.name, player.position, injury))
            roster.append(player)
        updated[idx] = replace(team, roster=roster)

    _log.info(f"Simulated {week_label}: {len(results)} games, {len(reports)} new injuries")
    return WeekResult(
        teams=updated,
        game_results=results,
        injuries=reports,
        current_week=current_week + 1,
    )


# ──────────────────────────────────────────────
# STANDINGS / PLAYOFFS
# ──────────────────────────────────────────────

def get_standings(teams: Sequence[Team]) -> List[Team]:
    """Teams by win percentage, best first.  Teams without games count as .000."""
    return sorted(teams, key=lambda t: t.win_pct, reverse=True)


def get_playoff_teams(teams: Sequence[Team], num_teams: int = PLAYOFF_TEAMS) -> List[Team]:
    return get_standings(teams)[:num_teams]


def build_playoff_bracket(teams: Sequence[Team], num_teams: int = PLAYOFF_TEAMS) -> List[Tuple[Team, Team]]:
    """First-round matchups, top seed against bottom seed (1v8, 2v7, 3v6, 4v5)."""
    seeds = get_playoff_teams(teams, num_teams)
    return [(seeds[i], seeds[len(seeds) - 1 - i]) for i in range(len(seeds) // 2)]


def is_playoff_time(current_week: int, season_length: int = DEFAULT_SEASON_LENGTH) -> bool:
    return current_week > season_length
