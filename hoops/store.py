"""
Hoops League State Store

``GameStore`` owns the one mutable reference to league state.  Every
operation computes a new ``GameState`` from the current one and swaps it in
under a re-entrant lock, so readers always see a complete state and two
transitions can never interleave.

``GameState.to_dict()`` is the persisted shape.  Trades are session-only
and are left out of it.  ``GameStore.load()`` runs the migration pipeline
before rebuilding state from a saved dict.

Usage:
    store = GameStore(rng=random.Random(1))
    store.initialize_new_league(LeagueConfig("My League"), "bos")
    store.simulate_week()
    saved = store.export()
    GameStore().load(saved)
"""

from __future__ import annotations

import datetime
import logging
import random
import threading
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

from hoops.config import DEFAULT_SEASON, ABBREVIATION_LENGTH, LeagueConfig
from hoops.injuries import Injury, heal_roster
from hoops.league import generate_draft_class, generate_free_agents, generate_league
from hoops.migrations import SCHEMA_VERSION, run_migrations
from hoops.names import NameGenerator
from hoops.player import Player, PlayerStats
from hoops.season import BoxScore, GameResult, WeekResult, simulate_week
from hoops.strategy import TeamStrategy
from hoops.team import Team, TeamColors
from hoops.trades import Trade, execute_trade, propose_trade

_log = logging.getLogger("hoops.store")


@dataclass
class GameState:
    current_team_id: Optional[str] = None
    all_teams: List[Team] = field(default_factory=list)
    game_results: List[GameResult] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)
    current_season: int = DEFAULT_SEASON
    current_week: int = 1
    box_scores: List[BoxScore] = field(default_factory=list)
    league_config: Optional[LeagueConfig] = None
    schema_version: int = SCHEMA_VERSION

    @property
    def current_team(self) -> Optional[Team]:
        return find_team(self.all_teams, self.current_team_id)

    def to_dict(self) -> dict:
        return {
            "current_team_id": self.current_team_id,
            "all_teams": [t.to_dict() for t in self.all_teams],
            "game_results": [g.to_dict() for g in self.game_results],
            "current_season": self.current_season,
            "current_week": self.current_week,
            "box_scores": [b.to_dict() for b in self.box_scores],
            "league_config": self.league_config.to_dict() if self.league_config else None,
            "schema_version": self.schema_version,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "GameState":
        config = d.get("league_config")
        # older saves stored the whole current team record
        current_team_id = d.get("current_team_id") or (d.get("current_team") or {}).get("id")
        return cls(
            current_team_id=current_team_id,
            all_teams=[Team.from_dict(t) for t in d.get("all_teams", [])],
            game_results=[GameResult.from_dict(g) for g in d.get("game_results", [])],
            current_season=d.get("current_season", DEFAULT_SEASON),
            current_week=d.get("current_week", 1),
            box_scores=[BoxScore.from_dict(b) for b in d.get("box_scores", [])],
            league_config=LeagueConfig.from_dict(config) if config else None,
            schema_version=d.get("schema_version", SCHEMA_VERSION),
        )


def find_team(teams: List[Team], team_id: Optional[str]) -> Optional[Team]:
    for team in teams:
        if team.id == team_id:
            return team
    return None


def _cleared_roster(team: Team) -> Team:
    """0-0 record, zeroed stat lines and no injuries."""
    roster = [replace(p, stats=PlayerStats(), injury=None) for p in team.roster]
    return replace(team, wins=0, losses=0, roster=roster)


class GameStore:
    """Serialised access to one league's state."""

    def __init__(
        self,
        state: Optional[GameState] = None,
        rng: Optional[random.Random] = None,
        name_generator: Optional[NameGenerator] = None,
    ):
        self._state = state or GameState()
        self.rng = rng or random.Random()
        self.name_generator = name_generator or NameGenerator(rng=self.rng)
        self._lock = threading.RLock()

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_team(self) -> Optional[Team]:
        return self._state.current_team

    def get_team(self, team_id: str) -> Optional[Team]:
        return find_team(self._state.all_teams, team_id)

    def _publish(self, **changes):
        self._state = replace(self._state, **changes)

    def _update_team(self, team_id: str, fn: Callable[[Team], Team]):
        self._publish(all_teams=[fn(t) if t.id == team_id else t for t in self._state.all_teams])

    def _update_player(self, team_id: str, player_id: str, fn: Callable[[Player], Player]):
        def update_roster(team: Team) -> Team:
            return replace(team, roster=[fn(p) if p.id == player_id else p for p in team.roster])
        self._update_team(team_id, update_roster)

    # ── basic setters ──────────────────────────

    def set_current_team(self, team_id: str):
        with self._lock:
            if self.get_team(team_id) is None:
                raise ValueError(f"Unknown team '{team_id}'")
            self._publish(current_team_id=team_id)

    def set_all_teams(self, teams: List[Team]):
        with self._lock:
            self._publish(all_teams=list(teams))

    def add_game_result(self, result: GameResult):
        with self._lock:
            self._publish(game_results=self._state.game_results + [result])

    def add_box_score(self, box_score: BoxScore):
        with self._lock:
            self._publish(box_scores=self._state.box_scores + [box_score])

    # ── trades ─────────────────────────────────

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        for trade in self._state.trades:
            if trade.id == trade_id:
                return trade
        return None

    def propose_trade(self, from_team_id: str, to_team_id: str,
                      players_out_ids: List[str], players_in_ids: List[str]) -> Trade:
        with self._lock:
            trade = propose_trade(self._state.all_teams, from_team_id, to_team_id,
                                  players_out_ids, players_in_ids)
            self._publish(trades=self._state.trades + [trade])
            _log.info(
                f"Trade {trade.id} proposed: {from_team_id} -> {to_team_id} "
                f"(salary {trade.salary_difference:+,}, value {trade.trade_value:+})"
            )
            return trade

    def _trades_with_status(self, trade_id: str, status: str) -> List[Trade]:
        return [replace(t, status=status) if t.id == trade_id else t for t in self._state.trades]

    def accept_trade(self, trade_id: str):
        """Execute a pending trade.  Unknown or already-settled ids are ignored.

        A trade whose players have since left the sending rosters (another
        trade moved them first) is marked rejected instead.
        """
        with self._lock:
            trade = self.get_trade(trade_id)
            if trade is None or trade.status != "pending":
                return
            try:
                teams = execute_trade(self._state.all_teams, trade)
            except ValueError as e:
                self._publish(trades=self._trades_with_status(trade_id, "rejected"))
                _log.warning(f"Trade {trade_id} can no longer be executed, rejected: {e}")
                return
            self._publish(
                all_teams=teams,
                trades=self._trades_with_status(trade_id, "accepted"),
            )
            _log.info(f"Trade {trade_id} accepted")

    def reject_trade(self, trade_id: str):
        with self._lock:
            trade = self.get_trade(trade_id)
            if trade is None or trade.status != "pending":
                return
            self._publish(trades=self._trades_with_status(trade_id, "rejected"))

    # ── season ─────────────────────────────────

    def simulate_week(self) -> WeekResult:
        with self._lock:
            result = simulate_week(self._state.all_teams, self._state.current_week, self.rng)
            self._publish(
                all_teams=result.teams,
                game_results=self._state.game_results + result.game_results,
                current_week=result.current_week,
            )
            return result

    def update_player_stats(self, team_id: str, player_id: str, **stats):
        with self._lock:
            unknown = set(stats) - set(PlayerStats.__dataclass_fields__)
            if unknown:
                raise ValueError(f"Unknown stat fields: {sorted(unknown)}")
            self._update_player(team_id, player_id, lambda p: replace(p, stats=replace(p.stats, **stats)))

    def injure_player(self, team_id: str, player_id: str, injury: Injury):
        with self._lock:
            self._update_player(team_id, player_id, lambda p: replace(p, injury=injury))

    def heal_players(self):
        with self._lock:
            self._publish(all_teams=[
                replace(t, roster=heal_roster(t.roster)) for t in self._state.all_teams
            ])

    # ── generation ─────────────────────────────

    def generate_draft_class(self, count: int) -> List[Player]:
        with self._lock:
            return generate_draft_class(count, self._state.current_season, self.rng, self.name_generator)

    def generate_free_agents(self, count: int) -> List[Player]:
        with self._lock:
            return generate_free_agents(count, self._state.current_season, self.rng, self.name_generator)

    def generate_new_league(self, config: LeagueConfig) -> List[Team]:
        """Build a fresh league without installing it or touching the active name history."""
        with self._lock:
            return generate_league(config, True, self._state.current_season, self.rng, NameGenerator(rng=self.rng))

    def initialize_new_league(self, config: LeagueConfig, selected_team_id: str,
                              current_season: Optional[int] = None):
        """Generate a league, install it, and start at week 1 of ``current_season`` (this year by default)."""
        with self._lock:
            season = current_season or datetime.date.today().year
            teams = generate_league(config, True, season, self.rng, self.name_generator)
            teams = [_cleared_roster(t) for t in teams]
            selected = find_team(teams, selected_team_id) or teams[0]
            self._state = GameState(
                current_team_id=selected.id,
                all_teams=teams,
                current_season=season,
                current_week=1,
                league_config=config,
            )
            _log.info(f"New league '{config.league_name}' started, managing {selected.full_name}")

    def reset_league(self):
        with self._lock:
            self._state = GameState(current_season=datetime.date.today().year)
            self.name_generator.reset_used_names()

    def reset_season(self):
        """Week 1 again: records, stats, injuries, results and trades cleared; rosters kept."""
        with self._lock:
            self._publish(
                all_teams=[_cleared_roster(t) for t in self._state.all_teams],
                game_results=[],
                trades=[],
                box_scores=[],
                current_week=1,
            )

    # ── edits ──────────────────────────────────

    def update_team_info(self, team_id: str, name: Optional[str] = None, city: Optional[str] = None,
                         abbreviation: Optional[str] = None, colors: Optional[TeamColors] = None):
        changes = {k: v for k, v in [("name", name), ("city", city),
                                     ("abbreviation", abbreviation), ("colors", colors)]
                   if v is not None}
        with self._lock:
            self._update_team(team_id, lambda t: replace(t, **changes))

    def update_player_name(self, team_id: str, player_id: str, new_name: str):
        """Rename a player; the old name goes back to the pool unless someone else still has it."""
        with self._lock:
            team = self.get_team(team_id)
            player = team.find_player(player_id) if team else None
            if player is None:
                return
            old_name = player.name
            self._update_player(team_id, player_id, lambda p: replace(p, name=new_name))
            self.name_generator.mark_used(new_name)
            if not any(p.name == old_name for t in self._state.all_teams for p in t.roster):
                self.name_generator.release(old_name)

    def update_team_strategy(self, team_id: str, strategy: TeamStrategy):
        with self._lock:
            self._update_team(team_id, lambda t: replace(t, strategy=strategy))

    # ── validation ─────────────────────────────

    def validate_team_name(self, name: str, exclude_team_id: Optional[str] = None) -> bool:
        """True if no other team already uses ``name`` (case-insensitive)."""
        lowered = name.lower()
        return not any(
            t.name.lower() == lowered and t.id != exclude_team_id for t in self._state.all_teams
        )

    def validate_player_name(self, name: str, team_id: str, exclude_player_id: Optional[str] = None) -> bool:
        """True if ``name`` is free on the team.  Unknown teams accept any name."""
        team = self.get_team(team_id)
        if team is None:
            return True
        lowered = name.lower()
        return not any(p.name.lower() == lowered and p.id != exclude_player_id for p in team.roster)

    def validate_abbreviation(self, abbreviation: str, exclude_team_id: Optional[str] = None) -> bool:
        if len(abbreviation) != ABBREVIATION_LENGTH:
            return False
        upper = abbreviation.upper()
        return not any(
            t.abbreviation.upper() == upper and t.id != exclude_team_id for t in self._state.all_teams
        )

    # ── persistence shape ──────────────────────

    def export(self) -> dict:
        return self._state.to_dict()

    def load(self, data: dict):
        """Migrate ``data`` and install it as the current state."""
        with self._lock:
            state = GameState.from_dict(run_migrations(data, self.rng))
            self.name_generator.reset_used_names()
            for team in state.all_teams:
                for player in team.roster:
                    self.name_generator.mark_used(player.name)
            self._state = state
            _log.info(f"Loaded league state: {len(state.all_teams)} teams, week {state.current_week}")
