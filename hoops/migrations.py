"""
Load-time migrations for persisted league state.

Older saves may predate player personalities, attribute profiles, bios or
team strategies.  Each ``Migration`` pairs a cheap ``needs`` scan with an
``apply`` that backfills only the records missing the data, using the same
generators a new league would.  Running the pipeline twice is a no-op the
second time.

Migrations work on the raw persisted dict, before it is turned into
dataclasses.

Usage:
    data = run_migrations(saved_state, rng)
    state = GameState.from_dict(data)
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterator, List

from hoops.attributes import PlayerAttributes, calculate_overall_rating, generate_player_attributes
from hoops.bio import generate_player_bio, generate_player_height, generate_player_weight
from hoops.config import DEFAULT_SEASON
from hoops.personality import generate_personality_traits
from hoops.strategy import generate_random_strategy

_log = logging.getLogger("hoops.migrations")

SCHEMA_VERSION = 1

# Rating assumed for a legacy record with neither attributes nor overall
_LEGACY_OVERALL = 70


@dataclass
class Migration:
    name: str
    needs: Callable[[dict], bool]
    apply: Callable[[dict, random.Random], None]


def _players(data: dict) -> Iterator[dict]:
    for team in data.get("all_teams", []):
        for player in team.get("roster", []):
            yield player


def _player_overall(player: dict) -> int:
    if player.get("attributes"):
        return calculate_overall_rating(PlayerAttributes.from_dict(player["attributes"]), player["position"])
    return player.get("overall", _LEGACY_OVERALL)


# ──────────────────────────────────────────────
# PERSONALITY
# ──────────────────────────────────────────────

def _needs_personality(data: dict) -> bool:
    return any(not p.get("personality") for p in _players(data))


def _add_personality(data: dict, rng):
    for p in _players(data):
        if not p.get("personality"):
            p["personality"] = generate_personality_traits(
                p["position"], p["age"], _player_overall(p), rng
            ).to_dict()


# ──────────────────────────────────────────────
# ATTRIBUTES
# ──────────────────────────────────────────────

def _needs_attributes(data: dict) -> bool:
    return any(not p.get("attributes") for p in _players(data))


def _add_attributes(data: dict, rng):
    for p in _players(data):
        if not p.get("attributes"):
            attrs = generate_player_attributes(p["position"], p["age"], _player_overall(p), rng)
            p["attributes"] = attrs.to_dict()
            p["overall"] = calculate_overall_rating(attrs, p["position"])


# ──────────────────────────────────────────────
# BIO
# ──────────────────────────────────────────────

def _bio_incomplete(player: dict) -> bool:
    bio = player.get("bio")
    return not bio or not bio.get("height") or not bio.get("weight")


def _needs_bio(data: dict) -> bool:
    return any(_bio_incomplete(p) for p in _players(data))


def _add_bio(data: dict, rng):
    season = data.get("current_season", DEFAULT_SEASON)
    for p in _players(data):
        if not p.get("bio"):
            p["bio"] = generate_player_bio(
                p["age"], p["position"], _player_overall(p), season, rng
            ).to_dict()
        elif _bio_incomplete(p):
            height = generate_player_height(p["position"], rng)
            p["bio"]["height"] = height
            p["bio"]["weight"] = generate_player_weight(height, p["position"], rng)


# ──────────────────────────────────────────────
# STRATEGY
# ──────────────────────────────────────────────

def _needs_strategy(data: dict) -> bool:
    return any(not t.get("strategy") for t in data.get("all_teams", []))


def _add_strategy(data: dict, rng):
    for team in data.get("all_teams", []):
        if not team.get("strategy"):
            team["strategy"] = generate_random_strategy(rng).to_dict()


MIGRATIONS: List[Migration] = [
    Migration("personality", _needs_personality, _add_personality),
    Migration("attributes", _needs_attributes, _add_attributes),
    Migration("bio", _needs_bio, _add_bio),
    Migration("strategy", _needs_strategy, _add_strategy),
]


def run_migrations(data: dict, rng: random.Random = None) -> dict:
    """Return a migrated copy of ``data``; the input is left untouched.

    The ``needs`` scans run on ``data`` itself.  Only when one of them fires
    is the state deep-copied; an up-to-date save gets a shallow copy that
    shares its team and player records with the input.
    """
    rng = rng or random
    if not any(migration.needs(data) for migration in MIGRATIONS):
        current = dict(data)
        current["schema_version"] = SCHEMA_VERSION
        return current

    migrated = copy.deepcopy(data)
    applied = []
    for migration in MIGRATIONS:
        if migration.needs(migrated):
            migration.apply(migrated, rng)
            applied.append(migration.name)
    migrated["schema_version"] = SCHEMA_VERSION
    _log.info(f"Applied migrations: {', '.join(applied)}")
    return migrated
