#!/usr/bin/env python3
"""
Season Simulation Tests
========================

Weekly simulation, injuries, standings and playoff seeding.
"""

import random
from dataclasses import replace

import pytest

from hoops.config import LeagueConfig
from hoops.injuries import (
    INJURY_TYPES,
    Injury,
    heal_player,
    injury_rate_for,
    roll_injury,
)
from hoops.league import generate_league
from hoops.names import NameGenerator
from hoops.season import (
    build_playoff_bracket,
    get_playoff_teams,
    get_standings,
    is_playoff_time,
    pair_teams,
    score_game,
    simulate_week,
)
from hoops.strategy import DefensiveStrategy, OffensiveStrategy, TeamStrategy


def _league(n_teams, seed=42):
    rng = random.Random(seed)
    return generate_league(
        LeagueConfig("Test League", number_of_teams=n_teams),
        rng=rng,
        name_generator=NameGenerator(rng=rng),
    )


def _games_played(teams):
    return sum(t.wins + t.losses for t in teams)


# ═══════════════════════════════════════════════════════════════
# WEEKLY SIMULATION
# ═══════════════════════════════════════════════════════════════

class TestSimulateWeek:
    def test_week_advances(self):
        result = simulate_week(_league(8), 1, random.Random(1))
        assert result.current_week == 2

    def test_each_pair_plays_once(self):
        teams = _league(8)
        result = simulate_week(teams, 1, random.Random(2))
        assert len(result.game_results) == 4
        assert _games_played(result.teams) == _games_played(teams) + 8
        for team in result.teams:
            assert team.wins + team.losses == 1

    def test_odd_team_sits_out(self):
        teams = _league(5)
        result = simulate_week(teams, 3, random.Random(3))
        assert len(result.game_results) == 2
        assert _games_played(result.teams) == _games_played(teams) + 4
        assert result.teams[4].wins + result.teams[4].losses == 0

    def test_inputs_not_mutated(self):
        teams = _league(4)
        snapshot = [t.to_dict() for t in teams]
        simulate_week(teams, 1, random.Random(4))
        assert [t.to_dict() for t in teams] == snapshot

    def test_results_dated_by_next_week(self):
        result = simulate_week(_league(4), 7, random.Random(5))
        assert all(g.date == "Week 8" for g in result.game_results)

    def test_winner_matches_records(self):
        teams = _league(8)
        result = simulate_week(teams, 1, random.Random(6))
        by_id = {t.id: t for t in result.teams}
        for game in result.game_results:
            loser = game.away_team if game.winner == game.home_team else game.home_team
            assert by_id[game.winner].wins == 1
            assert by_id[loser].losses == 1

    def test_pairing_by_position(self):
        teams = _league(6)
        result = simulate_week(teams, 1, random.Random(7))
        pairs = [(g.home_team, g.away_team) for g in result.game_results]
        assert pairs == [(teams[0].id, teams[1].id), (teams[2].id, teams[3].id), (teams[4].id, teams[5].id)]
        assert pair_teams(teams[:3]) == [(0, 1)]
        assert pair_teams([]) == []

    def test_scores_positive(self):
        teams = _league(2)
        rng = random.Random(8)
        for _ in range(200):
            home, away = score_game(teams[0], teams[1], rng)
            assert home > 0 and away > 0

    def test_many_weeks_accumulate(self):
        teams = _league(6)
        rng = random.Random(9)
        week = 1
        for _ in range(10):
            result = simulate_week(teams, week, rng)
            teams, week = result.teams, result.current_week
        assert week == 11
        assert all(t.wins + t.losses == 10 for t in teams)


# ═══════════════════════════════════════════════════════════════
# INJURIES
# ═══════════════════════════════════════════════════════════════

class TestInjuries:
    def test_existing_injury_heals_one_week(self):
        teams = _league(2)
        hurt = replace(teams[0].roster[0], injury=Injury("Knee Strain", 3))
        teams[0] = replace(teams[0], roster=[hurt] + teams[0].roster[1:])
        result = simulate_week(teams, 1, random.Random(10))
        healed = result.teams[0].find_player(hurt.id)
        assert healed.injury == Injury("Knee Strain", 2)

    def test_last_week_clears(self):
        teams = _league(2)
        player = replace(teams[0].roster[0], injury=Injury("Ankle Sprain", 1))
        assert heal_player(player).injury is None
        assert heal_player(teams[0].roster[1]) is teams[0].roster[1]

    def test_reports_are_valid(self):
        teams = _league(8)
        rng = random.Random(11)
        reports = []
        week = 1
        for _ in range(6):
            result = simulate_week(teams, week, rng)
            reports.extend(result.injuries)
            teams, week = result.teams, result.current_week
        assert reports
        for report in reports:
            assert report.injury.type in INJURY_TYPES
            assert 1 <= report.injury.weeks_remaining <= 4
            assert report.display.startswith(report.player_name)

    def test_new_injuries_land_on_roster(self):
        result = simulate_week(_league(8), 1, random.Random(12))
        by_id = {t.id: t for t in result.teams}
        for report in result.injuries:
            assert by_id[report.team_id].find_player(report.player_id).injury == report.injury

    def test_injury_rates(self):
        assert injury_rate_for(TeamStrategy(OffensiveStrategy.BALANCED, DefensiveStrategy.GRIT_AND_GRIND)) == 0.07
        assert injury_rate_for(TeamStrategy()) == 0.05
        assert injury_rate_for(None) == 0.05

    def test_roll_never_reinjures(self):
        player = replace(_league(2)[0].roster[0], injury=Injury("Back Soreness", 2))
        assert roll_injury(player, 1.0, random.Random(13)) is None

    def test_roll_certain_and_impossible(self):
        player = _league(2)[0].roster[0]
        rng = random.Random(14)
        assert all(roll_injury(player, 1.0, rng) is not None for _ in range(50))
        assert all(roll_injury(player, 0.0, rng) is None for _ in range(50))


# ═══════════════════════════════════════════════════════════════
# STANDINGS / PLAYOFFS
# ═══════════════════════════════════════════════════════════════

def _with_records(teams, records):
    return [replace(t, wins=w, losses=l) for t, (w, l) in zip(teams, records)]


class TestStandings:
    def test_sorted_by_win_pct(self):
        teams = _with_records(_league(4), [(2, 8), (9, 1), (0, 0), (5, 5)])
        assert [t.wins for t in get_standings(teams)] == [9, 5, 2, 0]

    def test_playoff_field(self):
        records = [(i, 10 - i) for i in range(10)]
        teams = _with_records(_league(10), records)
        field = get_playoff_teams(teams)
        assert len(field) == 8
        assert [t.wins for t in field] == [9, 8, 7, 6, 5, 4, 3, 2]

    def test_bracket_pairs_top_with_bottom(self):
        records = [(i, 10 - i) for i in range(8)]
        teams = _with_records(_league(8), records)
        bracket = build_playoff_bracket(teams)
        assert [(a.wins, b.wins) for a, b in bracket] == [(7, 0), (6, 1), (5, 2), (4, 3)]

    @pytest.mark.parametrize("week,expected", [(1, False), (30, False), (31, True)])
    def test_is_playoff_time(self, week, expected):
        assert is_playoff_time(week) is expected

    def test_custom_season_length(self):
        assert is_playoff_time(11, season_length=10)
        assert not is_playoff_time(10, season_length=10)
