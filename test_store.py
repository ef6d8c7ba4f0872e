#!/usr/bin/env python3
"""
League State Tests
===================

League generation, the GameStore lifecycle, trades, edits, persistence and
load-time migrations.
"""

import copy
import random
from collections import Counter

import pytest

from hoops.attributes import PlayerAttributes, calculate_overall_rating
from hoops.config import LeagueConfig, SEEDED_GAMES_PLAYED
from hoops.injuries import Injury
from hoops.league import (
    calculate_league_stats,
    generate_league,
    get_available_team_templates,
    validate_league_config,
)
from hoops.migrations import SCHEMA_VERSION, run_migrations
from hoops.names import NameGenerator
from hoops.store import GameState, GameStore
from hoops.strategy import DefensiveStrategy, OffensiveStrategy, TeamStrategy
from hoops.team import TeamColors


def _store(n_teams=4, seed=7, team_id="las"):
    store = GameStore(rng=random.Random(seed))
    store.initialize_new_league(LeagueConfig("Test Dynasty", number_of_teams=n_teams), team_id,
                                current_season=2024)
    return store


def _league(n_teams=4, seed=3, **kwargs):
    rng = random.Random(seed)
    return generate_league(LeagueConfig("Test League", number_of_teams=n_teams),
                           rng=rng, name_generator=NameGenerator(rng=rng), **kwargs)


# ═══════════════════════════════════════════════════════════════
# LEAGUE GENERATION
# ═══════════════════════════════════════════════════════════════

class TestLeagueGeneration:
    def test_thirty_templates(self):
        templates = get_available_team_templates()
        assert len(templates) == 30
        assert len({t.team_id for t in templates}) == 30
        assert all(len(t.abbreviation) == 3 for t in templates)

    def test_roster_quotas(self):
        for team in _league(6):
            counts = Counter(p.position for p in team.roster)
            assert counts == {"PG": 2, "SG": 3, "SF": 3, "PF": 2, "C": 2}

    def test_ids_and_names_unique(self):
        players = [p for t in _league(10) for p in t.roster]
        assert len({p.id for p in players}) == len(players)
        assert len({p.name for p in players}) == len(players)
        assert all(len(p.id) == 9 for p in players)

    def test_fresh_league(self):
        for team in _league(4):
            assert (team.wins, team.losses) == (0, 0)
            assert team.salary == team.payroll()
            assert all(p.stats.points == 0 for p in team.roster)

    def test_seeded_league(self):
        for team in _league(6, fresh_start=False):
            assert team.wins + team.losses == SEEDED_GAMES_PLAYED
            assert any(p.stats.points != 0 for p in team.roster)

    def test_team_order_follows_templates(self):
        ids = [t.id for t in _league(3)]
        assert ids == [t.team_id for t in get_available_team_templates()[:3]]

    def test_strategy_overrides(self):
        zone = TeamStrategy(OffensiveStrategy.MOTION, DefensiveStrategy.ZONE_DEFENSE)
        teams = _league(3, strategy_overrides={"gst": zone})
        assert teams[1].strategy == zone

    def test_difficulty_bands(self):
        rng = random.Random(5)
        teams = generate_league(LeagueConfig("Hard", difficulty="hard", number_of_teams=4),
                                rng=rng, name_generator=NameGenerator(rng=rng))
        overalls = [p.overall for t in teams for p in t.roster]
        assert 40 <= min(overalls) and max(overalls) <= 95

    def test_invalid_config_errors(self):
        errors = validate_league_config(LeagueConfig("", season_length=5, difficulty="insane", number_of_teams=1))
        assert errors == [
            "League name is required",
            "Season length must be between 10 and 50 weeks",
            "Invalid difficulty level",
            "Number of teams must be between 2 and 30",
        ]
        assert validate_league_config(LeagueConfig("x" * 31)) == [
            "League name must be 30 characters or less"
        ]
        assert validate_league_config(LeagueConfig("Fine")) == []

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError):
            generate_league(LeagueConfig("   "))

    def test_league_stats(self):
        teams = _league(4)
        stats = calculate_league_stats(teams)
        assert stats["total_teams"] == 4
        assert stats["total_players"] == 48
        assert stats["average_roster_size"] == 12
        assert stats["total_salary"] == sum(t.payroll() for t in teams)
        assert calculate_league_stats([])["total_players"] == 0


# ═══════════════════════════════════════════════════════════════
# STORE LIFECYCLE
# ═══════════════════════════════════════════════════════════════

class TestGameStore:
    def test_initialize(self):
        store = _store()
        state = store.state
        assert state.current_team_id == "las"
        assert store.current_team.abbreviation == "LAS"
        assert state.current_week == 1
        assert state.current_season == 2024
        assert state.league_config.league_name == "Test Dynasty"
        assert all(t.wins == 0 and t.losses == 0 for t in state.all_teams)

    def test_unknown_selected_team_falls_back(self):
        store = _store(team_id="nope")
        assert store.state.current_team_id == store.state.all_teams[0].id

    def test_set_current_team(self):
        store = _store()
        store.set_current_team("den")
        assert store.current_team.city == "Denver"
        with pytest.raises(ValueError):
            store.set_current_team("zzz")

    def test_simulate_week_publishes(self):
        store = _store()
        result = store.simulate_week()
        assert store.state.current_week == 2
        assert store.state.game_results == result.game_results
        assert store.state.all_teams == result.teams

    def test_reset_season(self):
        store = _store()
        roster_ids = [[p.id for p in t.roster] for t in store.state.all_teams]
        for _ in range(3):
            store.simulate_week()
        store.reset_season()
        state = store.state
        assert state.current_week == 1
        assert state.game_results == []
        assert state.trades == []
        assert all(t.wins == 0 and t.losses == 0 for t in state.all_teams)
        assert all(p.injury is None for t in state.all_teams for p in t.roster)
        assert [[p.id for p in t.roster] for t in state.all_teams] == roster_ids

    def test_reset_league(self):
        store = _store()
        store.reset_league()
        assert store.state.all_teams == []
        assert store.state.current_team_id is None
        assert store.name_generator.used_name_count == 0

    def test_update_player_stats(self):
        store = _store()
        player = store.current_team.roster[0]
        store.update_player_stats("las", player.id, points=21.5, assists=6)
        updated = store.current_team.find_player(player.id)
        assert updated.stats.points == 21.5
        assert updated.stats.assists == 6
        with pytest.raises(ValueError):
            store.update_player_stats("las", player.id, dunks=3)

    def test_injure_and_heal(self):
        store = _store()
        player = store.current_team.roster[2]
        store.injure_player("las", player.id, Injury("Hamstring Pull", 2))
        store.heal_players()
        assert store.current_team.find_player(player.id).injury == Injury("Hamstring Pull", 1)
        store.heal_players()
        assert store.current_team.find_player(player.id).injury is None

    def test_generated_pools(self):
        store = _store()
        rookies = store.generate_draft_class(5)
        assert len(rookies) == 5
        assert all(19 <= p.age <= 21 and p.contract.years == 4 for p in rookies)
        assert all(1_000_000 <= p.contract.salary < 6_000_000 for p in rookies)
        agents = store.generate_free_agents(4)
        assert all(22 <= p.age <= 36 and 1 <= p.contract.years <= 3 for p in agents)
        league_names = {p.name for t in store.state.all_teams for p in t.roster}
        assert not league_names & {p.name for p in rookies + agents}

    def test_generate_new_league_does_not_install(self):
        store = _store()
        before = store.state
        used = store.name_generator.used_name_count
        teams = store.generate_new_league(LeagueConfig("Other", number_of_teams=2))
        assert len(teams) == 2
        assert store.state is before
        assert store.name_generator.used_name_count == used


# ═══════════════════════════════════════════════════════════════
# TRADES
# ═══════════════════════════════════════════════════════════════

class TestTrades:
    def test_propose_records_deltas(self):
        store = _store()
        mine = store.get_team("las").roster[0]
        theirs = store.get_team("gst").roster[0]
        trade = store.propose_trade("las", "gst", [mine.id], [theirs.id])
        assert trade.status == "pending"
        assert trade.salary_difference == theirs.contract.salary - mine.contract.salary
        assert trade.trade_value == theirs.overall - mine.overall
        assert store.get_trade(trade.id) is trade

    def test_accept_swaps_players(self):
        store = _store()
        mine = store.get_team("las").roster[0]
        theirs = [p.id for p in store.get_team("gst").roster[:2]]
        trade = store.propose_trade("las", "gst", [mine.id], theirs)
        store.accept_trade(trade.id)

        las, gst = store.get_team("las"), store.get_team("gst")
        assert las.find_player(mine.id) is None
        assert gst.find_player(mine.id) is not None
        assert all(las.find_player(pid) is not None for pid in theirs)
        assert len(las.roster) == 13 and len(gst.roster) == 11
        assert las.salary == las.payroll()
        assert gst.salary == gst.payroll()
        assert store.get_trade(trade.id).status == "accepted"

    def test_reject(self):
        store = _store()
        trade = store.propose_trade("las", "gst", [store.get_team("las").roster[0].id], [])
        teams_before = store.state.all_teams
        store.reject_trade(trade.id)
        assert store.get_trade(trade.id).status == "rejected"
        assert store.state.all_teams == teams_before

    def test_settled_and_unknown_trades_are_ignored(self):
        store = _store()
        trade = store.propose_trade("las", "gst", [], [store.get_team("gst").roster[0].id])
        store.reject_trade(trade.id)
        before = store.state
        store.accept_trade(trade.id)
        store.accept_trade("missing")
        store.reject_trade("missing")
        assert store.state is before

    def test_overlapping_trades_move_player_once(self):
        store = _store()
        star = store.get_team("las").roster[0]
        to_gst = store.propose_trade("las", "gst", [star.id], [])
        to_phb = store.propose_trade("las", "phb", [star.id], [])
        store.accept_trade(to_gst.id)
        teams_after_first = store.state.all_teams
        store.accept_trade(to_phb.id)

        holders = [t.id for t in store.state.all_teams if t.find_player(star.id) is not None]
        assert holders == ["gst"]
        assert len(store.get_team("las").roster) == 11
        assert len(store.get_team("phb").roster) == 12
        assert store.state.all_teams == teams_after_first
        assert store.get_trade(to_gst.id).status == "accepted"
        assert store.get_trade(to_phb.id).status == "rejected"

    def test_accept_moves_current_player_record(self):
        store = _store()
        target = store.get_team("gst").roster[0]
        trade = store.propose_trade("las", "gst", [], [target.id])
        store.injure_player("gst", target.id, Injury("Knee Strain", 3))
        store.update_player_name("gst", target.id, "Zed Quill")
        store.accept_trade(trade.id)

        arrived = store.get_team("las").find_player(target.id)
        assert arrived.injury == Injury("Knee Strain", 3)
        assert arrived.name == "Zed Quill"
        assert store.get_team("gst").find_player(target.id) is None

    @pytest.mark.parametrize("args", [
        ("las", "las", [], []),
        ("las", "xxx", [], []),
        ("las", "gst", ["not-a-player"], []),
        ("las", "gst", [], []),
    ])
    def test_invalid_proposals(self, args):
        store = _store()
        with pytest.raises(ValueError):
            store.propose_trade(*args)
        assert store.state.trades == []


# ═══════════════════════════════════════════════════════════════
# EDITS / VALIDATION
# ═══════════════════════════════════════════════════════════════

class TestEdits:
    def test_update_team_info(self):
        store = _store()
        store.update_team_info("las", name="Comets", colors=TeamColors("#000000", "#FF0000"))
        team = store.get_team("las")
        assert team.full_name == "Los Angeles Comets"
        assert team.abbreviation == "LAS"
        assert team.colors.secondary == "#FF0000"

    def test_update_player_name_swaps_reserved_name(self):
        store = _store()
        player = store.current_team.roster[0]
        used = store.name_generator.used_name_count
        store.update_player_name("las", player.id, "Zed Quill")
        assert store.current_team.find_player(player.id).name == "Zed Quill"
        assert store.name_generator.used_name_count == used

        # renaming back frees "Zed Quill" and reserves the original again
        store.update_player_name("las", player.id, player.name)
        assert store.name_generator.used_name_count == used
        for _ in range(3):
            store.update_player_name("las", player.id, "Zed Quill")
            store.update_player_name("las", player.id, player.name)
        assert store.name_generator.used_name_count == used

    def test_rename_keeps_name_still_in_use(self):
        store = _store()
        first, second = store.current_team.roster[:2]
        store.update_player_name("las", second.id, first.name)
        used = store.name_generator.used_name_count
        store.update_player_name("las", first.id, "Zed Quill")
        assert store.name_generator.used_name_count == used + 1

    def test_rename_unknown_player_is_ignored(self):
        store = _store()
        before = store.state
        store.update_player_name("las", "missing", "Zed Quill")
        store.update_player_name("zzz", "missing", "Zed Quill")
        assert store.state is before

    def test_update_team_strategy(self):
        store = _store()
        strategy = TeamStrategy(OffensiveStrategy.INSIDE_OUT, DefensiveStrategy.PAINT_PROTECTION)
        store.update_team_strategy("gst", strategy)
        assert store.get_team("gst").strategy == strategy

    def test_validate_team_name(self):
        store = _store()
        assert not store.validate_team_name("storm")
        assert store.validate_team_name("Storm", exclude_team_id="las")
        assert store.validate_team_name("Comets")

    def test_validate_abbreviation(self):
        store = _store()
        assert not store.validate_abbreviation("GST")
        assert not store.validate_abbreviation("gst")
        assert store.validate_abbreviation("GST", exclude_team_id="gst")
        assert store.validate_abbreviation("XYZ")
        assert not store.validate_abbreviation("XY")
        assert not store.validate_abbreviation("WXYZ")

    def test_validate_player_name(self):
        store = _store()
        player = store.current_team.roster[0]
        assert not store.validate_player_name(player.name.upper(), "las")
        assert store.validate_player_name(player.name, "las", exclude_player_id=player.id)
        assert store.validate_player_name(player.name, "unknown-team")


# ═══════════════════════════════════════════════════════════════
# PERSISTENCE / MIGRATIONS
# ═══════════════════════════════════════════════════════════════

def _legacy_state():
    """A save from before attributes, personalities, bios and strategies."""
    data = _store(n_teams=2).export()
    for team in data["all_teams"]:
        del team["strategy"]
        for player in team["roster"]:
            del player["attributes"]
            del player["personality"]
            del player["bio"]
            player["overall"] = 77
    data.pop("schema_version")
    return data


class TestPersistence:
    def test_export_load_round_trip(self):
        store = _store()
        store.simulate_week()
        saved = store.export()
        restored = GameStore(rng=random.Random(99))
        restored.load(saved)
        assert restored.export() == saved
        assert restored.name_generator.used_name_count == 48

    def test_trades_not_persisted(self):
        store = _store()
        store.propose_trade("las", "gst", [store.get_team("las").roster[0].id], [])
        assert "trades" not in store.export()

    def test_legacy_current_team_record(self):
        data = _store(n_teams=2).export()
        current = data.pop("current_team_id")
        data["current_team"] = {"id": current}
        assert GameState.from_dict(data).current_team_id == current

    def test_migrations_backfill(self):
        migrated = run_migrations(_legacy_state(), random.Random(1))
        assert migrated["schema_version"] == SCHEMA_VERSION
        for team in migrated["all_teams"]:
            assert team["strategy"]
            for player in team["roster"]:
                assert player["personality"] and player["bio"]["height"] and player["bio"]["weight"]
                attrs = PlayerAttributes.from_dict(player["attributes"])
                assert player["overall"] == calculate_overall_rating(attrs, player["position"])

    def test_migrations_do_not_touch_input(self):
        legacy = _legacy_state()
        snapshot = copy.deepcopy(legacy)
        run_migrations(legacy, random.Random(2))
        assert legacy == snapshot

    def test_migrations_idempotent(self):
        once = run_migrations(_legacy_state(), random.Random(3))
        assert run_migrations(once, random.Random(4)) == once

    def test_current_save_is_not_copied(self, caplog):
        saved = _store(n_teams=2).export()
        saved.pop("schema_version")
        with caplog.at_level("INFO", logger="hoops.migrations"):
            migrated = run_migrations(saved, random.Random(7))
        assert migrated is not saved
        assert "schema_version" not in saved
        assert migrated["schema_version"] == SCHEMA_VERSION
        assert migrated["all_teams"] is saved["all_teams"]
        assert "Applied migrations" not in caplog.text

    def test_partial_bio_keeps_college(self):
        data = _store(n_teams=2).export()
        player = data["all_teams"][0]["roster"][0]
        college = player["bio"]["college"]
        del player["bio"]["height"]
        migrated = run_migrations(data, random.Random(5))
        bio = migrated["all_teams"][0]["roster"][0]["bio"]
        assert bio["college"] == college
        assert bio["height"] and bio["weight"]

    def test_load_legacy_state(self):
        store = GameStore(rng=random.Random(6))
        store.load(_legacy_state())
        assert len(store.state.all_teams) == 2
        for team in store.state.all_teams:
            for player in team.roster:
                assert player.bio.height
                assert player.personality.label in ("Diva", "Mercurial", "Neutral", "Pro", "Leader")
