"""
Player Biography Generation

Hometown, college, draft history, height and weight for a generated player.

College depends on where the player is from: international players mostly
skip US college, domestic players mostly attend one, and elite domestic
players (overall 85+) are re-rolled until they land a real program.

Draft age is sampled independently of the hometown (an 80/20 split between
a "college" 19-22 window and an "international" 18-25 window), then turned
into a draft year relative to the current season.

Usage:
    bio = generate_player_bio(age=24, position="SF", overall=78,
                              current_season=2024, rng=rng)
    format_draft_display(bio)    # "2021, 1st Round, Pick 22"
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

from hoops.attributes import clamp, round_half_up
from hoops.colleges import (
    INTERNATIONAL,
    NO_COLLEGE,
    get_random_college,
    is_pseudo_college,
    most_common_college,
)
from hoops.hometowns import get_random_hometown_entry, is_international_hometown

_log = logging.getLogger("hoops.bio")

EARLIEST_DRAFT_YEAR = 1990
FALLBACK_WEIGHT = 200
MAX_COLLEGE_REROLLS = 1000
WEIGHT_RANGE: Tuple[int, int] = (160, 350)

_HEIGHT_RE = re.compile(r"(\d+)'(\d+)\"")


@dataclass
class PlayerBio:
    college: Optional[str]
    hometown: str
    draft_year: int
    draft_round: Optional[int]
    draft_pick: Optional[int]
    height: str
    weight: int

    @property
    def undrafted(self) -> bool:
        return self.draft_round is None and self.draft_pick is None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "PlayerBio":
        return cls(
            college=d.get("college"),
            hometown=d.get("hometown", ""),
            draft_year=d.get("draft_year", 0),
            draft_round=d.get("draft_round"),
            draft_pick=d.get("draft_pick"),
            height=d.get("height", ""),
            weight=d.get("weight", FALLBACK_WEIGHT),
        )


# ──────────────────────────────────────────────
# DRAFT
# ──────────────────────────────────────────────

def calculate_draft_year(age: int, current_season: int, rng: random.Random = None) -> int:
    rng = rng or random
    if rng.random() < 0.8:
        draft_age = int(rng.random() * 4) + 19
    else:
        draft_age = int(rng.random() * 8) + 18
    draft_year = current_season - (age - draft_age)
    return max(EARLIEST_DRAFT_YEAR, min(current_season, draft_year))


def _undrafted_chance(overall: int) -> float:
    if overall < 60:
        return 0.25
    if overall < 70:
        return 0.15
    if overall < 80:
        return 0.08
    return 0.03


# (minimum overall, first pick, number of picks in the band)
_PICK_BANDS = [
    (85, 1, 15),
    (80, 5, 21),
    (75, 15, 26),
    (70, 25, 31),
]
_LOWEST_PICK_BAND = (35, 26)


def generate_draft_info(overall: int, rng: random.Random = None) -> Tuple[Optional[int], Optional[int]]:
    """Return (round, pick), or (None, None) for an undrafted player."""
    rng = rng or random
    if rng.random() < _undrafted_chance(overall):
        return None, None

    first, span = _LOWEST_PICK_BAND
    for min_overall, band_first, band_span in _PICK_BANDS:
        if overall >= min_overall:
            first, span = band_first, band_span
            break
    pick = int(rng.random() * span) + first
    draft_round = 1 if pick <= 30 else 2
    return draft_round, pick


# ──────────────────────────────────────────────
# BODY
# ──────────────────────────────────────────────

# position -> (min inches, max inches, common heights)
HEIGHT_RANGES: Dict[str, Tuple[int, int, List[int]]] = {
    "PG": (70, 78, [72, 73, 74, 75]),
    "SG": (72, 80, [74, 75, 76, 77, 78]),
    "SF": (76, 82, [78, 79, 80]),
    "PF": (79, 84, [80, 81, 82, 83]),
    "C": (81, 90, [82, 83, 84, 85, 86]),
}

WEIGHT_MULTIPLIERS = {"PG": 0.85, "SG": 0.90, "SF": 0.95, "PF": 1.05, "C": 1.10}

ATHLETIC_BMI = 24


def format_height(inches: int) -> str:
    return f"{inches // 12}'{inches % 12}\""


def parse_height_inches(height: str) -> Optional[int]:
    match = _HEIGHT_RE.search(height or "")
    if not match:
        return None
    return int(match.group(1)) * 12 + int(match.group(2))


def generate_player_height(position: str, rng: random.Random = None) -> str:
    if position not in HEIGHT_RANGES:
        raise ValueError(f"Unknown position '{position}'")
    rng = rng or random
    lo, hi, common = HEIGHT_RANGES[position]
    if rng.random() < 0.7 and common:
        inches = common[int(rng.random() * len(common))]
    else:
        inches = int(rng.random() * (hi - lo + 1)) + lo
    return format_height(inches)


def generate_player_weight(height: str, position: str, rng: random.Random = None) -> int:
    """Athletic-BMI weight in pounds; FALLBACK_WEIGHT if ``height`` won't parse."""
    inches = parse_height_inches(height)
    if inches is None:
        return FALLBACK_WEIGHT
    rng = rng or random
    meters = inches * 0.0254
    base_weight = ATHLETIC_BMI * meters * meters * 2.205
    adjusted = base_weight * WEIGHT_MULTIPLIERS[position]
    variation = (rng.random() - 0.5) * 30
    return int(clamp(round_half_up(adjusted + variation), *WEIGHT_RANGE))


# ──────────────────────────────────────────────
# COLLEGE
# ──────────────────────────────────────────────

def _pick_international_college(rng) -> str:
    roll = rng.random()
    if roll < 0.7:
        return NO_COLLEGE
    if roll < 0.9:
        return INTERNATIONAL
    college = get_random_college(rng)
    return INTERNATIONAL if is_pseudo_college(college) else college


def _pick_domestic_college(overall: int, rng) -> str:
    college = get_random_college(rng)
    if overall < 85 or not is_pseudo_college(college):
        return college
    for _ in range(MAX_COLLEGE_REROLLS):
        college = get_random_college(rng)
        if not is_pseudo_college(college):
            return college
    fallback = most_common_college()
    _log.warning(f"College re-roll limit hit for elite prospect, using {fallback}")
    return fallback


def generate_player_bio(
    age: int,
    position: str,
    overall: int,
    current_season: int,
    rng: random.Random = None,
) -> PlayerBio:
    rng = rng or random
    hometown = get_random_hometown_entry(rng)
    if hometown.is_international:
        college = _pick_international_college(rng)
    else:
        college = _pick_domestic_college(overall, rng)

    draft_year = calculate_draft_year(age, current_season, rng)
    draft_round, draft_pick = generate_draft_info(overall, rng)
    height = generate_player_height(position, rng)
    weight = generate_player_weight(height, position, rng)

    return PlayerBio(
        college=college,
        hometown=hometown.label,
        draft_year=draft_year,
        draft_round=draft_round,
        draft_pick=draft_pick,
        height=height,
        weight=weight,
    )


# ──────────────────────────────────────────────
# DISPLAY HELPERS
# ──────────────────────────────────────────────

def format_college_display(college: Optional[str]) -> str:
    if not college or college == NO_COLLEGE:
        return NO_COLLEGE
    return college


def format_draft_display(bio: PlayerBio) -> str:
    if not bio.draft_round or not bio.draft_pick:
        return "Undrafted"
    round_text = "1st" if bio.draft_round == 1 else "2nd"
    return f"{bio.draft_year}, {round_text} Round, Pick {bio.draft_pick}"


ELITE_PROGRAMS = {
    "Duke University",
    "University of Kentucky",
    "University of Connecticut",
    "University of Kansas",
    "University of North Carolina",
    "Villanova University",
    "Gonzaga University",
    "University of California, Los Angeles",
}


def get_college_tier(college: Optional[str], rng: random.Random = None) -> str:
    """elite / high / mid / none.  Non-elite major programs are a coin flip."""
    if not college or college == NO_COLLEGE:
        return "none"
    if college == INTERNATIONAL:
        return "mid"
    if college in ELITE_PROGRAMS:
        return "elite"
    if "University" in college or "State" in college:
        rng = rng or random
        return "high" if rng.random() > 0.5 else "mid"
    return "mid"


def is_international_player(bio: PlayerBio) -> bool:
    return is_international_hometown(bio.hometown) or bio.college == INTERNATIONAL


def get_bmi_category(height: str, weight: int) -> str:
    inches = parse_height_inches(height)
    if inches is None:
        return "normal"
    meters = inches * 0.0254
    bmi = weight / 2.205 / (meters * meters)
    if bmi < 18.5:
        return "underweight"
    if bmi < 25:
        return "normal"
    if bmi < 30:
        return "athletic"
    return "overweight"


COUNTRY_ABBREVIATIONS = {
    "Canada": "CAN", "Spain": "ESP", "France": "FRA", "Australia": "AUS",
    "Germany": "GER", "Italy": "ITA", "Greece": "GRE", "Serbia": "SRB",
    "Croatia": "CRO", "Slovenia": "SLO", "Lithuania": "LTU", "Latvia": "LAT",
    "Israel": "ISR", "Turkey": "TUR", "Russia": "RUS", "Ukraine": "UKR",
    "Poland": "POL", "Czech Republic": "CZE", "Hungary": "HUN", "Romania": "ROU",
    "Nigeria": "NGR", "Senegal": "SEN", "Angola": "ANG", "Brazil": "BRA",
    "Argentina": "ARG", "Mexico": "MEX", "Dominican Republic": "DOM",
    "Puerto Rico": "PUR", "Cuba": "CUB", "Jamaica": "JAM", "Haiti": "HAI",
}


def get_hometown_abbreviation(hometown: str) -> str:
    _, _, location = hometown.partition(", ")
    if location and len(location) <= 3:
        return location
    return COUNTRY_ABBREVIATIONS.get(location) or location[:3].upper()
