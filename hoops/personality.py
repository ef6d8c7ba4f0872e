"""
Player Personality

Nine independent traits on a 0-100 scale.  Generation starts from a random
base per trait and then applies overall-rating, position and age nudges,
clamping after every step.

The personality *score* is a fixed linear blend of six traits (temperament
and ego count inverted) and maps to a label:

    <= 24  Diva
    <= 39  Mercurial
    <= 59  Neutral
    <= 79  Pro
    else   Leader
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, fields
from typing import Dict, List, Tuple

from hoops.attributes import clamp, round_half_up


TRAIT_MIN = 0
TRAIT_MAX = 100

PERSONALITY_LABELS: Tuple[str, ...] = ("Diva", "Mercurial", "Neutral", "Pro", "Leader")


@dataclass
class PlayerPersonality:
    agreeableness: float = 50
    temperament: float = 50
    work_ethic: float = 50
    leadership: float = 50
    professionalism: float = 50
    ego: float = 50
    loyalty: float = 50
    market_pref: float = 50
    morale: float = 80

    @property
    def score(self) -> float:
        return calculate_personality_score(self)

    @property
    def label(self) -> str:
        return get_personality_label(self.score)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "PlayerPersonality":
        return cls(**{f.name: d[f.name] for f in fields(cls) if f.name in d})


TRAITS: Tuple[str, ...] = tuple(f.name for f in fields(PlayerPersonality))

# trait -> (low, span): base is low + floor(U * span)
BASE_TRAIT_RANGES: Dict[str, Tuple[int, int]] = {
    "agreeableness": (20, 60),
    "temperament": (15, 70),
    "work_ethic": (30, 50),
    "leadership": (20, 60),
    "professionalism": (30, 50),
    "ego": (15, 70),
    "loyalty": (20, 60),
    "market_pref": (10, 80),
    "morale": (60, 40),
}

POSITION_TRAIT_ADJUSTMENTS: Dict[str, List[Tuple[str, int]]] = {
    "PG": [("leadership", 15), ("ego", -10)],
    "C": [("ego", 10), ("agreeableness", -5)],
    "SG": [("ego", 5)],
}

YOUNG_TRAIT_ADJUSTMENTS = [("professionalism", -10), ("ego", 10), ("loyalty", -15)]
VETERAN_TRAIT_ADJUSTMENTS = [("professionalism", 15), ("ego", -10), ("loyalty", 10), ("leadership", 10)]


def _bump(traits: Dict[str, float], trait: str, delta: float):
    traits[trait] = clamp(traits[trait] + delta, TRAIT_MIN, TRAIT_MAX)


def generate_personality_traits(
    position: str,
    age: int,
    overall: int,
    rng: random.Random = None,
) -> PlayerPersonality:
    rng = rng or random
    traits: Dict[str, float] = {
        trait: low + int(rng.random() * span)
        for trait, (low, span) in BASE_TRAIT_RANGES.items()
    }

    # Better players skew harder-working, more professional, and prouder
    overall_factor = (overall - 50) / 50
    _bump(traits, "work_ethic", overall_factor * 20)
    _bump(traits, "professionalism", overall_factor * 15)
    _bump(traits, "ego", overall_factor * 10)

    for trait, delta in POSITION_TRAIT_ADJUSTMENTS.get(position, []):
        _bump(traits, trait, delta)

    if age < 25:
        for trait, delta in YOUNG_TRAIT_ADJUSTMENTS:
            _bump(traits, trait, delta)
    elif age > 32:
        for trait, delta in VETERAN_TRAIT_ADJUSTMENTS:
            _bump(traits, trait, delta)

    return PlayerPersonality(**traits)


def validate_personality_traits(personality: PlayerPersonality) -> PlayerPersonality:
    """Return a copy with every trait clamped to [0, 100]."""
    return PlayerPersonality(**{
        trait: clamp(value, TRAIT_MIN, TRAIT_MAX)
        for trait, value in personality.to_dict().items()
    })


def calculate_personality_score(personality: PlayerPersonality) -> float:
    score = (
        0.25 * personality.agreeableness
        + 0.20 * personality.professionalism
        + 0.20 * personality.leadership
        + 0.15 * (100 - personality.temperament)
        + 0.10 * personality.loyalty
        + 0.10 * (100 - personality.ego)
    )
    return round_half_up(score * 100) / 100


def get_personality_label(score: float) -> str:
    if score <= 24:
        return "Diva"
    if score <= 39:
        return "Mercurial"
    if score <= 59:
        return "Neutral"
    if score <= 79:
        return "Pro"
    return "Leader"


_LABEL_INSIGHTS = {
    "Leader": "Natural leader who elevates teammates",
    "Pro": "Professional approach to the game",
    "Diva": "May cause locker room issues",
    "Mercurial": "Unpredictable personality",
}

# Evaluated in order after the label insight
_TRAIT_INSIGHTS = [
    (lambda p: p.leadership > 80, "Excellent captain material"),
    (lambda p: p.work_ethic > 85, "Exceptional work ethic"),
    (lambda p: p.ego > 85, "Very high ego - needs careful management"),
    (lambda p: p.loyalty < 30, "Low loyalty - flight risk in free agency"),
    (lambda p: p.temperament > 80, "Volatile temperament - prone to outbursts"),
    (lambda p: p.market_pref > 80, "Prefers big market teams"),
    (lambda p: p.morale < 40, "Low morale - performance may suffer"),
]


def get_personality_insights(personality: PlayerPersonality) -> List[str]:
    insights = []
    label_insight = _LABEL_INSIGHTS.get(personality.label)
    if label_insight:
        insights.append(label_insight)
    for check, text in _TRAIT_INSIGHTS:
        if check(personality):
            insights.append(text)
    return insights


TRAIT_DISPLAY_NAMES = {
    "agreeableness": "Agreeableness",
    "temperament": "Temperament",
    "work_ethic": "Work Ethic",
    "leadership": "Leadership",
    "professionalism": "Professionalism",
    "ego": "Ego",
    "loyalty": "Loyalty",
    "market_pref": "Market Preference",
    "morale": "Morale",
}

TRAIT_DESCRIPTIONS = {
    "agreeableness": "How well the player gets along with teammates",
    "temperament": "Emotional stability (higher = more volatile)",
    "work_ethic": "Dedication to training and improvement",
    "leadership": "Natural leadership abilities",
    "professionalism": "Professional conduct and attitude",
    "ego": "Self-importance (higher = bigger ego)",
    "loyalty": "Loyalty to team and organization",
    "market_pref": "Preference for large market teams",
    "morale": "Current happiness and satisfaction",
}


def get_trait_display_name(trait: str) -> str:
    return TRAIT_DISPLAY_NAMES.get(trait, trait)


def get_trait_description(trait: str) -> str:
    return TRAIT_DESCRIPTIONS.get(trait, "")
