"""
Player Attribute System

Seven rating categories, each a fixed group of sub-skills rated 10-95:

    shooting      two_point_shooting, three_point_shooting, free_throw_shooting
    finishing     layups, dunking, post_scoring
    playmaking    passing, ball_handling, court_vision
    defense       perimeter_defense, post_defense, steals, blocks
    rebounding    offensive_rebounding, defensive_rebounding
    athleticism   speed, strength, vertical, endurance
    basketball_iq decision_making, awareness, shot_selection

A player's overall rating is never stored independently of these numbers:
``calculate_overall_rating`` is the one place it comes from.

Generation draws every sub-skill around a position/age-biased base, then
nudges the whole profile toward a target overall with a single damped
correction (80% of the gap) so ratings approach the target without piling
up at the clamps.

Usage:
    attrs = generate_player_attributes("PG", age=22, target_overall=80, rng=rng)
    overall = calculate_overall_rating(attrs, "PG")
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field, fields
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from hoops.config import POSITIONS


ATTRIBUTE_MIN = 10
ATTRIBUTE_MAX = 95

# Base draw is uniform in [30, 70); noise is +/- half of NOISE_AMPLITUDE
BASE_RANGE: Tuple[int, int] = (30, 70)
NOISE_AMPLITUDE = 25
TARGET_DAMPING = 0.8


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# ──────────────────────────────────────────────
# CATEGORY RECORDS
# ──────────────────────────────────────────────

class _Category:
    """Shared helpers for the per-category dataclasses."""

    def values(self) -> List[float]:
        return [getattr(self, f.name) for f in fields(self)]

    def items(self) -> List[Tuple[str, float]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    def average(self) -> float:
        vals = self.values()
        return sum(vals) / len(vals)

    def to_dict(self) -> dict:
        return dict(self.items())

    @classmethod
    def from_dict(cls, d: dict):
        return cls(**{f.name: d.get(f.name, 50) for f in fields(cls)})


@dataclass
class ShootingAttributes(_Category):
    two_point_shooting: float = 50
    three_point_shooting: float = 50
    free_throw_shooting: float = 50


@dataclass
class FinishingAttributes(_Category):
    layups: float = 50
    dunking: float = 50
    post_scoring: float = 50


@dataclass
class PlaymakingAttributes(_Category):
    passing: float = 50
    ball_handling: float = 50
    court_vision: float = 50


@dataclass
class DefenseAttributes(_Category):
    perimeter_defense: float = 50
    post_defense: float = 50
    steals: float = 50
    blocks: float = 50


@dataclass
class ReboundingAttributes(_Category):
    offensive_rebounding: float = 50
    defensive_rebounding: float = 50


@dataclass
class AthleticismAttributes(_Category):
    speed: float = 50
    strength: float = 50
    vertical: float = 50
    endurance: float = 50


@dataclass
class BasketballIQAttributes(_Category):
    decision_making: float = 50
    awareness: float = 50
    shot_selection: float = 50


CATEGORY_TYPES = {
    "shooting": ShootingAttributes,
    "finishing": FinishingAttributes,
    "playmaking": PlaymakingAttributes,
    "defense": DefenseAttributes,
    "rebounding": ReboundingAttributes,
    "athleticism": AthleticismAttributes,
    "basketball_iq": BasketballIQAttributes,
}

CATEGORIES: Tuple[str, ...] = tuple(CATEGORY_TYPES)


@dataclass
class PlayerAttributes:
    shooting: ShootingAttributes = field(default_factory=ShootingAttributes)
    finishing: FinishingAttributes = field(default_factory=FinishingAttributes)
    playmaking: PlaymakingAttributes = field(default_factory=PlaymakingAttributes)
    defense: DefenseAttributes = field(default_factory=DefenseAttributes)
    rebounding: ReboundingAttributes = field(default_factory=ReboundingAttributes)
    athleticism: AthleticismAttributes = field(default_factory=AthleticismAttributes)
    basketball_iq: BasketballIQAttributes = field(default_factory=BasketballIQAttributes)

    def category(self, name: str) -> _Category:
        return getattr(self, name)

    def category_averages(self) -> Dict[str, float]:
        return {name: self.category(name).average() for name in CATEGORIES}

    def iter_attributes(self):
        """Yield (category, attribute, value) in declaration order."""
        for cat in CATEGORIES:
            for attr, value in self.category(cat).items():
                yield cat, attr, value

    def get(self, category: str, attribute: str, default: float = None) -> Optional[float]:
        cat = getattr(self, category, None)
        if cat is None:
            return default
        return getattr(cat, attribute, default)

    def map_values(self, fn: Callable[[str, str, float], float]) -> "PlayerAttributes":
        """Return a new profile with ``fn(category, attribute, value)`` applied to every sub-skill."""
        built = {}
        for cat in CATEGORIES:
            cat_type = CATEGORY_TYPES[cat]
            built[cat] = cat_type(**{
                attr: fn(cat, attr, value) for attr, value in self.category(cat).items()
            })
        return PlayerAttributes(**built)

    def to_dict(self) -> dict:
        return {cat: self.category(cat).to_dict() for cat in CATEGORIES}

    @classmethod
    def from_dict(cls, d: dict) -> "PlayerAttributes":
        return cls(**{
            cat: CATEGORY_TYPES[cat].from_dict(d.get(cat, {})) for cat in CATEGORIES
        })


# ──────────────────────────────────────────────
# OVERALL RATING
# ──────────────────────────────────────────────

# Each row sums to 1.0
POSITION_WEIGHTS: Dict[str, Dict[str, float]] = {
    "PG": {
        "shooting": 0.20, "finishing": 0.10, "playmaking": 0.25, "defense": 0.15,
        "rebounding": 0.05, "athleticism": 0.15, "basketball_iq": 0.10,
    },
    "SG": {
        "shooting": 0.30, "finishing": 0.15, "playmaking": 0.10, "defense": 0.15,
        "rebounding": 0.05, "athleticism": 0.20, "basketball_iq": 0.05,
    },
    "SF": {
        "shooting": 0.20, "finishing": 0.15, "playmaking": 0.15, "defense": 0.20,
        "rebounding": 0.10, "athleticism": 0.20, "basketball_iq": 0.00,
    },
    "PF": {
        "shooting": 0.10, "finishing": 0.25, "playmaking": 0.05, "defense": 0.20,
        "rebounding": 0.20, "athleticism": 0.15, "basketball_iq": 0.05,
    },
    "C": {
        "shooting": 0.05, "finishing": 0.30, "playmaking": 0.05, "defense": 0.20,
        "rebounding": 0.25, "athleticism": 0.15, "basketball_iq": 0.00,
    },
}


def get_position_weights(position: str) -> Dict[str, float]:
    if position not in POSITION_WEIGHTS:
        raise ValueError(f"Unknown position '{position}'")
    return POSITION_WEIGHTS[position]


def calculate_overall_rating(attributes: PlayerAttributes, position: str) -> int:
    """Position-weighted mean of the category averages, rounded to an int."""
    weights = get_position_weights(position)
    averages = attributes.category_averages()
    raw = sum(averages[cat] * weights[cat] for cat in CATEGORIES)
    return round_half_up(raw)


# ──────────────────────────────────────────────
# GENERATION BIASES
# ──────────────────────────────────────────────

# (category, sub-skills or None for the whole category, additive bias)
_PositionRule = Tuple[str, Optional[FrozenSet[str]], int]

POSITION_BIASES: Dict[str, List[_PositionRule]] = {
    "PG": [
        ("playmaking", None, 20),
        ("shooting", None, 10),
        ("athleticism", frozenset({"speed"}), 15),
        ("basketball_iq", None, 15),
        ("finishing", frozenset({"dunking"}), -15),
        ("rebounding", None, -10),
    ],
    "SG": [
        ("shooting", None, 20),
        ("athleticism", frozenset({"speed", "vertical"}), 15),
        ("finishing", frozenset({"layups", "dunking"}), 10),
        ("playmaking", frozenset({"passing"}), -5),
        ("rebounding", None, -5),
    ],
    "SF": [
        ("shooting", frozenset({"two_point_shooting", "three_point_shooting"}), 10),
        ("athleticism", None, 15),
        ("defense", None, 10),
        ("finishing", None, 10),
    ],
    "PF": [
        ("finishing", None, 20),
        ("rebounding", None, 20),
        ("defense", frozenset({"post_defense"}), 15),
        ("athleticism", frozenset({"strength"}), 15),
        ("shooting", frozenset({"three_point_shooting"}), -10),
    ],
    "C": [
        ("finishing", None, 25),
        ("rebounding", None, 25),
        ("defense", frozenset({"post_defense", "blocks"}), 20),
        ("athleticism", frozenset({"strength"}), 20),
        ("shooting", None, -15),
        ("playmaking", None, -10),
        ("athleticism", frozenset({"speed"}), -10),
    ],
}


def _validate_tables():
    for pos in POSITIONS:
        if pos not in POSITION_WEIGHTS or pos not in POSITION_BIASES:
            raise RuntimeError(f"Attribute tables missing position '{pos}'")
        weights = POSITION_WEIGHTS[pos]
        if set(weights) != set(CATEGORIES):
            raise RuntimeError(f"Position weights for '{pos}' do not cover every category")
        if abs(sum(weights.values()) - 1.0) > 1e-9:
            raise RuntimeError(f"Position weights for '{pos}' do not sum to 1.0")
        for cat, attrs, _ in POSITION_BIASES[pos]:
            if cat not in CATEGORY_TYPES:
                raise RuntimeError(f"Unknown category '{cat}' in '{pos}' biases")
            known = {f.name for f in fields(CATEGORY_TYPES[cat])}
            if attrs is not None and not attrs <= known:
                raise RuntimeError(f"Unknown sub-skill in '{pos}' {cat} biases: {attrs - known}")


_validate_tables()


def position_bias(position: str, category: str, attribute: str) -> int:
    total = 0
    for cat, attrs, delta in POSITION_BIASES[position]:
        if cat == category and (attrs is None or attribute in attrs):
            total += delta
    return total


def age_bias(age: int, category: str) -> int:
    """Young players skew athletic, veterans skew cerebral."""
    if category == "athleticism":
        return 15 if age < 25 else -10 if age > 32 else 0
    if category == "basketball_iq":
        return -10 if age < 25 else 15 if age > 32 else 0
    return 0


# ──────────────────────────────────────────────
# GENERATION
# ──────────────────────────────────────────────

def roll_raw_attributes(position: str, age: int, rng: random.Random = None) -> PlayerAttributes:
    """Biased, noisy, clamped draw before any pull toward a target overall."""
    rng = rng or random
    get_position_weights(position)

    def roll(category: str, attribute: str, _value: float) -> float:
        base = BASE_RANGE[0] + rng.random() * (BASE_RANGE[1] - BASE_RANGE[0])
        base += position_bias(position, category, attribute)
        base += age_bias(age, category)
        base += (rng.random() - 0.5) * NOISE_AMPLITUDE
        return clamp(base, ATTRIBUTE_MIN, ATTRIBUTE_MAX)

    return PlayerAttributes().map_values(roll)


def generate_player_attributes(
    position: str,
    age: int,
    target_overall: int,
    rng: random.Random = None,
) -> PlayerAttributes:
    """Roll a full attribute profile and pull it toward ``target_overall``.

    The correction is one-shot: ``(target - current) * 0.8`` is added to every
    sub-skill once, so the final overall lands near (not exactly on) target.
    """
    raw = roll_raw_attributes(position, age, rng)
    adjustment = (target_overall - calculate_overall_rating(raw, position)) * TARGET_DAMPING

    return raw.map_values(
        lambda _c, _a, value: clamp(round_half_up(value + adjustment), ATTRIBUTE_MIN, ATTRIBUTE_MAX)
    )


# ──────────────────────────────────────────────
# DISPLAY HELPERS
# ──────────────────────────────────────────────

_GRADE_THRESHOLDS = [
    (95, "A+"), (90, "A"), (85, "A-"), (80, "B+"), (75, "B"), (70, "B-"),
    (65, "C+"), (60, "C"), (55, "C-"), (50, "D+"), (40, "D"),
]


def get_attribute_grade(value: float) -> str:
    for threshold, grade in _GRADE_THRESHOLDS:
        if value >= threshold:
            return grade
    return "F"


CATEGORY_DISPLAY_NAMES = {
    "shooting": "Shooting",
    "finishing": "Finishing",
    "playmaking": "Playmaking",
    "defense": "Defense",
    "rebounding": "Rebounding",
    "athleticism": "Athleticism",
    "basketball_iq": "Basketball IQ",
}

ATTRIBUTE_DISPLAY_NAMES = {
    "two_point_shooting": "2-Point Shooting",
    "three_point_shooting": "3-Point Shooting",
    "free_throw_shooting": "Free Throw Shooting",
    "layups": "Layups",
    "dunking": "Dunking",
    "post_scoring": "Post Scoring",
    "passing": "Passing",
    "ball_handling": "Ball Handling",
    "court_vision": "Court Vision",
    "perimeter_defense": "Perimeter Defense",
    "post_defense": "Post Defense",
    "steals": "Steals",
    "blocks": "Blocks",
    "offensive_rebounding": "Offensive Rebounding",
    "defensive_rebounding": "Defensive Rebounding",
    "speed": "Speed",
    "strength": "Strength",
    "vertical": "Vertical",
    "endurance": "Endurance",
    "decision_making": "Decision Making",
    "awareness": "Awareness",
    "shot_selection": "Shot Selection",
}


def get_attribute_display_name(attribute: str) -> str:
    return ATTRIBUTE_DISPLAY_NAMES.get(attribute, attribute)


def get_top_attributes(attributes: PlayerAttributes, count: int = 3) -> List[Tuple[str, str, float]]:
    """Highest sub-skills as (category, attribute, value); stable on ties."""
    ranked = sorted(attributes.iter_attributes(), key=lambda item: item[2], reverse=True)
    return ranked[:count]


# Primary category -> archetype label, checked per position; anything else
# falls back to the position's generic label.
_ARCHETYPES: Dict[str, Tuple[Dict[str, str], str]] = {
    "PG": ({"shooting": "Scoring Point Guard", "playmaking": "Floor General",
            "defense": "Defensive Point Guard", "athleticism": "Athletic Point Guard"},
           "Traditional Point Guard"),
    "SG": ({"shooting": "Sharpshooter", "athleticism": "Athletic Wing",
            "defense": "Two-Way Guard", "finishing": "Slashing Guard"},
           "Shooting Guard"),
    "SF": ({"shooting": "Stretch Forward", "athleticism": "Athletic Wing",
            "defense": "Defensive Wing", "playmaking": "Point Forward"},
           "Small Forward"),
    "PF": ({"shooting": "Stretch Four", "finishing": "Power Forward",
            "defense": "Defensive Forward", "rebounding": "Rebounding Forward"},
           "Power Forward"),
    "C": ({"finishing": "Scoring Center", "defense": "Defensive Anchor",
           "rebounding": "Glass Cleaner", "shooting": "Stretch Center"},
          "Traditional Center"),
}


def get_player_archetype(attributes: PlayerAttributes, position: str) -> str:
    if position not in _ARCHETYPES:
        return "Basketball Player"
    averages = attributes.category_averages()
    primary = max(CATEGORIES, key=lambda cat: averages[cat])
    labels, fallback = _ARCHETYPES[position]
    return labels.get(primary, fallback)
