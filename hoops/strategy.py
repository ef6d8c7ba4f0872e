"""
Team Strategy Engine

Every team runs one offensive and one defensive scheme.  Each scheme maps to
a partial set of game-level modifiers; combining the two gives the team's
full ``StrategyEffects`` for the week simulator.

Combination rules:
    pace            offense pace x defense pace
    turnover rate   the lower (more favourable) of the two
    rebounding      the higher of the two
    shot mix/assist offense only
    opp FG / fouls  defense only

The effect numbers are game-balance constants; change them deliberately.

Usage:
    strategy = TeamStrategy(OffensiveStrategy.PACE_AND_SPACE,
                            DefensiveStrategy.ZONE_DEFENSE)
    effects = combine_strategy_effects(strategy)
    edge = calculate_matchup_advantage(strategy, opponent.strategy)
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, List

from hoops.attributes import clamp


class OffensiveStrategy(str, Enum):
    PACE_AND_SPACE = "Pace & Space"
    RUN_AND_GUN = "Run & Gun"
    INSIDE_OUT = "Inside-Out"
    ISOLATION = "Isolation/Star Power"
    BALANCED = "Balanced"
    MOTION = "Motion/Ball Movement"


class DefensiveStrategy(str, Enum):
    GRIT_AND_GRIND = "Grit & Grind"
    SWITCH_EVERYTHING = "Switch Everything"
    PAINT_PROTECTION = "Paint Protection"
    PERIMETER_LOCKDOWN = "Perimeter Lockdown"
    ZONE_DEFENSE = "Zone Defense"
    BALANCED = "Balanced"


@dataclass
class TeamStrategy:
    offensive: OffensiveStrategy = OffensiveStrategy.BALANCED
    defensive: DefensiveStrategy = DefensiveStrategy.BALANCED

    def to_dict(self) -> dict:
        return {"offensive": self.offensive.value, "defensive": self.defensive.value}

    @classmethod
    def from_dict(cls, d: dict) -> "TeamStrategy":
        return cls(
            offensive=OffensiveStrategy(d.get("offensive", OffensiveStrategy.BALANCED.value)),
            defensive=DefensiveStrategy(d.get("defensive", DefensiveStrategy.BALANCED.value)),
        )


@dataclass
class StrategyEffects:
    pace_modifier: float
    two_point_attempt_rate: float
    three_point_attempt_rate: float
    post_up_rate: float
    assist_rate: float
    turnover_rate: float
    rebounding_modifier: float
    opponent_fg_modifier: float
    foul_rate: float

    def to_dict(self) -> dict:
        return asdict(self)


# ═══════════════════════════════════════════════════════════════
# EFFECT TABLES
# ═══════════════════════════════════════════════════════════════

OFFENSIVE_EFFECTS: Dict[OffensiveStrategy, Dict[str, float]] = {
    OffensiveStrategy.PACE_AND_SPACE: {
        "pace_modifier": 1.15, "two_point_attempt_rate": 0.45,
        "three_point_attempt_rate": 0.45, "post_up_rate": 0.10,
        "assist_rate": 1.1, "turnover_rate": 1.05,
    },
    OffensiveStrategy.RUN_AND_GUN: {
        "pace_modifier": 1.25, "two_point_attempt_rate": 0.55,
        "three_point_attempt_rate": 0.35, "post_up_rate": 0.10,
        "assist_rate": 0.95, "turnover_rate": 1.15,
    },
    OffensiveStrategy.INSIDE_OUT: {
        "pace_modifier": 0.90, "two_point_attempt_rate": 0.65,
        "three_point_attempt_rate": 0.25, "post_up_rate": 0.35,
        "assist_rate": 1.05, "turnover_rate": 0.95,
        "rebounding_modifier": 1.1,
    },
    OffensiveStrategy.ISOLATION: {
        "pace_modifier": 0.95, "two_point_attempt_rate": 0.60,
        "three_point_attempt_rate": 0.30, "post_up_rate": 0.20,
        "assist_rate": 0.85, "turnover_rate": 0.90,
    },
    OffensiveStrategy.BALANCED: {
        "pace_modifier": 1.0, "two_point_attempt_rate": 0.55,
        "three_point_attempt_rate": 0.35, "post_up_rate": 0.20,
        "assist_rate": 1.0, "turnover_rate": 1.0,
    },
    OffensiveStrategy.MOTION: {
        "pace_modifier": 0.95, "two_point_attempt_rate": 0.50,
        "three_point_attempt_rate": 0.35, "post_up_rate": 0.15,
        "assist_rate": 1.25, "turnover_rate": 0.90,
    },
}

DEFENSIVE_EFFECTS: Dict[DefensiveStrategy, Dict[str, float]] = {
    DefensiveStrategy.GRIT_AND_GRIND: {
        "pace_modifier": 0.85, "opponent_fg_modifier": 0.95,
        "turnover_rate": 0.85, "foul_rate": 1.15, "rebounding_modifier": 1.05,
    },
    DefensiveStrategy.SWITCH_EVERYTHING: {
        "pace_modifier": 1.0, "opponent_fg_modifier": 0.97,
        "turnover_rate": 0.95, "foul_rate": 1.05, "rebounding_modifier": 1.0,
    },
    DefensiveStrategy.PAINT_PROTECTION: {
        "pace_modifier": 0.95, "opponent_fg_modifier": 0.92,
        "turnover_rate": 1.0, "foul_rate": 1.1, "rebounding_modifier": 1.15,
    },
    DefensiveStrategy.PERIMETER_LOCKDOWN: {
        "pace_modifier": 1.05, "opponent_fg_modifier": 0.94,
        "turnover_rate": 0.90, "foul_rate": 1.08, "rebounding_modifier": 0.95,
    },
    DefensiveStrategy.ZONE_DEFENSE: {
        "pace_modifier": 0.92, "opponent_fg_modifier": 0.96,
        "turnover_rate": 0.95, "foul_rate": 0.95, "rebounding_modifier": 1.08,
    },
    DefensiveStrategy.BALANCED: {
        "pace_modifier": 1.0, "opponent_fg_modifier": 1.0,
        "turnover_rate": 1.0, "foul_rate": 1.0, "rebounding_modifier": 1.0,
    },
}

OFFENSIVE_STRATEGY_INFO: Dict[OffensiveStrategy, dict] = {
    OffensiveStrategy.PACE_AND_SPACE: {
        "description": "Fast tempo, lots of 3s, spread floor",
        "strengths": ["High pace", "3-point shooting", "Spacing"],
        "weaknesses": ["Interior scoring", "Rebounding"],
    },
    OffensiveStrategy.RUN_AND_GUN: {
        "description": "Extremely fast pace, focus on quick scoring",
        "strengths": ["Very high pace", "Fast breaks", "Conditioning"],
        "weaknesses": ["Defense", "Turnovers", "Half-court offense"],
    },
    OffensiveStrategy.INSIDE_OUT: {
        "description": "Post play through bigs, kick-outs to shooters",
        "strengths": ["Post scoring", "Drawing fouls", "Rebounding"],
        "weaknesses": ["Pace", "3-point shooting"],
    },
    OffensiveStrategy.ISOLATION: {
        "description": "Focus on one or two stars creating shots",
        "strengths": ["Star player usage", "Clutch scoring", "Simplicity"],
        "weaknesses": ["Ball movement", "Team chemistry", "Predictability"],
    },
    OffensiveStrategy.BALANCED: {
        "description": "Equal mix of drives, jumpers, and ball movement",
        "strengths": ["Versatility", "Adaptability", "No major weaknesses"],
        "weaknesses": ["No major strengths"],
    },
    OffensiveStrategy.MOTION: {
        "description": "Pass-heavy offense, high assists",
        "strengths": ["Ball movement", "Team chemistry", "Open shots"],
        "weaknesses": ["Star player usage", "Pace"],
    },
}

DEFENSIVE_STRATEGY_INFO: Dict[DefensiveStrategy, dict] = {
    DefensiveStrategy.GRIT_AND_GRIND: {
        "description": "Slow pace, physical, grind opponents down",
        "strengths": ["Slow pace", "Physical play", "Opponent turnovers"],
        "weaknesses": ["Offensive pace", "Foul trouble"],
    },
    DefensiveStrategy.SWITCH_EVERYTHING: {
        "description": "Switch all screens, versatile defenders",
        "strengths": ["Screen defense", "Versatility", "Mismatches"],
        "weaknesses": ["Size mismatches", "Communication"],
    },
    DefensiveStrategy.PAINT_PROTECTION: {
        "description": "Collapse defense inside, weaker vs 3-point shooting",
        "strengths": ["Interior defense", "Rebounding", "Shot blocking"],
        "weaknesses": ["3-point defense", "Perimeter coverage"],
    },
    DefensiveStrategy.PERIMETER_LOCKDOWN: {
        "description": "Pressure guards/wings, risk giving up inside scoring",
        "strengths": ["3-point defense", "Steals", "Guard pressure"],
        "weaknesses": ["Interior defense", "Post scoring"],
    },
    DefensiveStrategy.ZONE_DEFENSE: {
        "description": "Force outside shots, good vs isolation, bad vs ball movement",
        "strengths": ["vs Isolation", "Help defense", "Rebounding"],
        "weaknesses": ["vs Ball movement", "3-point shooting", "Mismatches"],
    },
    DefensiveStrategy.BALANCED: {
        "description": "General defense, adaptable",
        "strengths": ["Versatility", "Adaptability", "No major weaknesses"],
        "weaknesses": ["No major strengths"],
    },
}

# Fallbacks when a scheme's partial table leaves a field out
_OFFENSE_DEFAULTS = {
    "pace_modifier": 1.0, "two_point_attempt_rate": 0.55,
    "three_point_attempt_rate": 0.35, "post_up_rate": 0.20,
    "assist_rate": 1.0, "turnover_rate": 1.0, "rebounding_modifier": 1.0,
}
_DEFENSE_DEFAULTS = {
    "pace_modifier": 1.0, "opponent_fg_modifier": 1.0,
    "turnover_rate": 1.0, "foul_rate": 1.0, "rebounding_modifier": 1.0,
}


def _validate_tables():
    for table, enum_type in [
        (OFFENSIVE_EFFECTS, OffensiveStrategy),
        (OFFENSIVE_STRATEGY_INFO, OffensiveStrategy),
        (DEFENSIVE_EFFECTS, DefensiveStrategy),
        (DEFENSIVE_STRATEGY_INFO, DefensiveStrategy),
    ]:
        missing = [s.value for s in enum_type if s not in table]
        if missing:
            raise RuntimeError(f"Strategy table missing entries for {missing}")
    for effects in OFFENSIVE_EFFECTS.values():
        unknown = set(effects) - set(_OFFENSE_DEFAULTS)
        if unknown:
            raise RuntimeError(f"Unknown offensive effect keys {sorted(unknown)}")
    for effects in DEFENSIVE_EFFECTS.values():
        unknown = set(effects) - set(_DEFENSE_DEFAULTS)
        if unknown:
            raise RuntimeError(f"Unknown defensive effect keys {sorted(unknown)}")


_validate_tables()


def get_offensive_strategy_effects(strategy: OffensiveStrategy) -> Dict[str, float]:
    return dict(OFFENSIVE_EFFECTS[OffensiveStrategy(strategy)])


def get_defensive_strategy_effects(strategy: DefensiveStrategy) -> Dict[str, float]:
    return dict(DEFENSIVE_EFFECTS[DefensiveStrategy(strategy)])


def combine_strategy_effects(strategy: TeamStrategy) -> StrategyEffects:
    off = {**_OFFENSE_DEFAULTS, **OFFENSIVE_EFFECTS[strategy.offensive]}
    dfn = {**_DEFENSE_DEFAULTS, **DEFENSIVE_EFFECTS[strategy.defensive]}
    return StrategyEffects(
        pace_modifier=off["pace_modifier"] * dfn["pace_modifier"],
        two_point_attempt_rate=off["two_point_attempt_rate"],
        three_point_attempt_rate=off["three_point_attempt_rate"],
        post_up_rate=off["post_up_rate"],
        assist_rate=off["assist_rate"],
        turnover_rate=min(off["turnover_rate"], dfn["turnover_rate"]),
        rebounding_modifier=max(off["rebounding_modifier"], dfn["rebounding_modifier"]),
        opponent_fg_modifier=dfn["opponent_fg_modifier"],
        foul_rate=dfn["foul_rate"],
    )


def all_strategies() -> List[TeamStrategy]:
    """All 36 combinations, offense outer, in declaration order."""
    return [TeamStrategy(o, d) for o in OffensiveStrategy for d in DefensiveStrategy]


def generate_random_strategy(rng: random.Random = None) -> TeamStrategy:
    rng = rng or random
    offensive = list(OffensiveStrategy)
    defensive = list(DefensiveStrategy)
    return TeamStrategy(
        offensive=offensive[int(rng.random() * len(offensive))],
        defensive=defensive[int(rng.random() * len(defensive))],
    )


# ═══════════════════════════════════════════════════════════════
# ROSTER FIT
# ═══════════════════════════════════════════════════════════════

# Rating assumed for a player whose attribute profile is missing
DEFAULT_FIT_RATING = 70
STAR_OVERALL = 85


def _roster_average(roster, category: str, attribute: str) -> float:
    if not roster:
        return DEFAULT_FIT_RATING
    total = 0.0
    for p in roster:
        value = p.attributes.get(category, attribute) if p.attributes is not None else None
        total += value if value else DEFAULT_FIT_RATING
    return total / len(roster)


def calculate_strategy_fit(team, strategy: TeamStrategy) -> float:
    """How well ``team``'s roster suits ``strategy``, in [0, 1].

    Only the offensive scheme contributes; the defensive half of the
    strategy never changes the score.
    """
    roster = team.roster
    fit = 0.5
    offense = strategy.offensive

    if offense == OffensiveStrategy.PACE_AND_SPACE:
        fit += (_roster_average(roster, "shooting", "three_point_shooting") - 70) * 0.003
        fit += (_roster_average(roster, "athleticism", "speed") - 70) * 0.002
    elif offense == OffensiveStrategy.RUN_AND_GUN:
        guards = sum(1 for p in roster if p.position in ("PG", "SG"))
        fit += (_roster_average(roster, "athleticism", "speed") - 70) * 0.004
        fit += (guards - 2) * 0.05
    elif offense == OffensiveStrategy.INSIDE_OUT:
        centers = sum(1 for p in roster if p.position == "C")
        fit += (_roster_average(roster, "finishing", "post_scoring") - 70) * 0.003
        fit += (centers - 1) * 0.1
    elif offense == OffensiveStrategy.ISOLATION:
        stars = sum(1 for p in roster if p.overall >= STAR_OVERALL)
        fit += stars * 0.1
    elif offense == OffensiveStrategy.MOTION:
        fit += (_roster_average(roster, "playmaking", "passing") - 70) * 0.003

    return clamp(fit, 0.0, 1.0)


def suggest_optimal_strategy(team) -> TeamStrategy:
    best = TeamStrategy(OffensiveStrategy.BALANCED, DefensiveStrategy.BALANCED)
    best_fit = 0.0
    for candidate in all_strategies():
        fit = calculate_strategy_fit(team, candidate)
        if fit > best_fit:
            best_fit = fit
            best = candidate
    return best


# ═══════════════════════════════════════════════════════════════
# MATCHUPS
# ═══════════════════════════════════════════════════════════════

MATCHUP_BONUSES = {
    (OffensiveStrategy.PACE_AND_SPACE, DefensiveStrategy.PAINT_PROTECTION): 0.1,
    (OffensiveStrategy.INSIDE_OUT, DefensiveStrategy.PERIMETER_LOCKDOWN): 0.1,
    (OffensiveStrategy.MOTION, DefensiveStrategy.ZONE_DEFENSE): 0.15,
    (OffensiveStrategy.ISOLATION, DefensiveStrategy.ZONE_DEFENSE): -0.1,
}

PACE_MISMATCH_THRESHOLD = 0.15
PACE_MISMATCH_WEIGHT = 0.2
MAX_MATCHUP_ADVANTAGE = 0.2


def calculate_matchup_advantage(team_strategy: TeamStrategy, opponent_strategy: TeamStrategy) -> float:
    """Edge for ``team_strategy``'s offense against ``opponent_strategy``'s defense."""
    advantage = MATCHUP_BONUSES.get((team_strategy.offensive, opponent_strategy.defensive), 0.0)

    pace_gap = abs(
        combine_strategy_effects(team_strategy).pace_modifier
        - combine_strategy_effects(opponent_strategy).pace_modifier
    )
    if pace_gap > PACE_MISMATCH_THRESHOLD:
        advantage += pace_gap * PACE_MISMATCH_WEIGHT

    return clamp(advantage, -MAX_MATCHUP_ADVANTAGE, MAX_MATCHUP_ADVANTAGE)
