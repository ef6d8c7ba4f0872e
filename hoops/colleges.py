"""
College Basketball Programs

Weighted table of college programs used when generating player bios.
Higher weight means a program shows up more often.  Two pseudo-entries,
"No College" and "International", are injected into the sampling pool only;
they are not colleges and never appear in ``ALL_COLLEGES``.

Usage:
    from hoops.colleges import get_random_college
    college = get_random_college(rng)
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from hoops.reference_data import add_pseudo_entries, build_weighted_pool, weighted_choice


@dataclass(frozen=True)
class College:
    name: str
    weight: int
    conference: str = ""


NO_COLLEGE = "No College"
INTERNATIONAL = "International"

SPECIAL_CATEGORIES = [NO_COLLEGE, INTERNATIONAL]

# Pool copies for the pseudo-entries (~8% and ~12% of draws)
NO_COLLEGE_WEIGHT = 15
INTERNATIONAL_WEIGHT = 25


# ──────────────────────────────────────────────
# PROGRAM TABLES
# ──────────────────────────────────────────────

# Top-tier programs (highest weight)
TOP_TIER_COLLEGES: List[College] = [
    College("Duke University", 10, "ACC"),
    College("University of Kentucky", 10, "SEC"),
    College("University of Connecticut", 9, "Big East"),
    College("University of Kansas", 9, "Big 12"),
    College("University of North Carolina", 9, "ACC"),
    College("Villanova University", 8, "Big East"),
    College("Gonzaga University", 8, "WCC"),
    College("University of California, Los Angeles", 8, "Pac-12"),
    College("Michigan State University", 7, "Big Ten"),
    College("University of Arizona", 7, "Pac-12"),
    College("University of Louisville", 7, "ACC"),
    College("Syracuse University", 7, "ACC"),
    College("University of Florida", 7, "SEC"),
    College("Indiana University", 7, "Big Ten"),
    College("University of Michigan", 6, "Big Ten"),
]

# High-tier programs (medium-high weight)
HIGH_TIER_COLLEGES: List[College] = [
    College("Baylor University", 6, "Big 12"),
    College("University of Virginia", 6, "ACC"),
    College("Texas Tech University", 6, "Big 12"),
    College("University of Houston", 6, "Big 12"),
    College("Purdue University", 6, "Big Ten"),
    College("University of Wisconsin", 5, "Big Ten"),
    College("University of Illinois", 5, "Big Ten"),
    College("Ohio State University", 5, "Big Ten"),
    College("University of Iowa", 5, "Big Ten"),
    College("University of Maryland", 5, "Big Ten"),
    College("University of Tennessee", 5, "SEC"),
    College("Auburn University", 5, "SEC"),
    College("University of Alabama", 5, "SEC"),
    College("Louisiana State University", 5, "SEC"),
    College("University of Arkansas", 5, "SEC"),
    College("Texas A&M University", 5, "SEC"),
    College("University of Georgia", 4, "SEC"),
    College("University of South Carolina", 4, "SEC"),
    College("Vanderbilt University", 4, "SEC"),
    College("University of Mississippi", 4, "SEC"),
    College("Wake Forest University", 4, "ACC"),
    College("Georgia Institute of Technology", 4, "ACC"),
    College("Florida State University", 4, "ACC"),
    College("Clemson University", 4, "ACC"),
    College("Virginia Tech", 4, "ACC"),
    College("University of Miami", 4, "ACC"),
    College("Boston College", 4, "ACC"),
    College("University of Pittsburgh", 4, "ACC"),
    College("Notre Dame University", 4, "ACC"),
    College("University of Texas", 5, "Big 12"),
    College("Texas Christian University", 4, "Big 12"),
    College("Oklahoma State University", 4, "Big 12"),
    College("University of Oklahoma", 4, "Big 12"),
    College("Iowa State University", 4, "Big 12"),
    College("Kansas State University", 4, "Big 12"),
    College("West Virginia University", 4, "Big 12"),
    College("University of Cincinnati", 4, "Big 12"),
    College("University of Central Florida", 4, "Big 12"),
    College("Brigham Young University", 4, "Big 12"),
]

# Mid-tier programs (medium weight)
MID_TIER_COLLEGES: List[College] = [
    College("Stanford University", 4, "Pac-12"),
    College("University of Oregon", 4, "Pac-12"),
    College("University of Southern California", 4, "Pac-12"),
    College("University of Colorado", 3, "Pac-12"),
    College("Arizona State University", 3, "Pac-12"),
    College("University of Utah", 3, "Pac-12"),
    College("University of Washington", 3, "Pac-12"),
    College("Washington State University", 3, "Pac-12"),
    College("Oregon State University", 3, "Pac-12"),
    College("University of California, Berkeley", 3, "Pac-12"),
    College("Creighton University", 4, "Big East"),
    College("Marquette University", 4, "Big East"),
    College("Providence College", 3, "Big East"),
    College("Seton Hall University", 3, "Big East"),
    College("St. John's University", 3, "Big East"),
    College("Xavier University", 3, "Big East"),
    College("Butler University", 3, "Big East"),
    College("Georgetown University", 3, "Big East"),
    College("DePaul University", 2, "Big East"),
    College("University of Memphis", 4, "AAC"),
    College("Temple University", 3, "AAC"),
    College("Southern Methodist University", 3, "AAC"),
    College("University of Tulsa", 2, "AAC"),
    College("East Carolina University", 2, "AAC"),
    College("Tulane University", 2, "AAC"),
    College("University of South Florida", 2, "AAC"),
    College("Wichita State University", 3, "AAC"),
    College("San Diego State University", 4, "Mountain West"),
    College("University of Nevada, Las Vegas", 3, "Mountain West"),
    College("Colorado State University", 3, "Mountain West"),
    College("Boise State University", 3, "Mountain West"),
    College("University of New Mexico", 3, "Mountain West"),
    College("Fresno State University", 2, "Mountain West"),
    College("University of Wyoming", 2, "Mountain West"),
    College("Utah State University", 2, "Mountain West"),
    College("Air Force Academy", 2, "Mountain West"),
    College("University of Nevada, Reno", 2, "Mountain West"),
    College("San Jose State University", 2, "Mountain West"),
]

# Lower-tier and mid-major programs (lower weight)
LOWER_TIER_COLLEGES: List[College] = [
    College("Saint Mary's College", 3, "WCC"),
    College("Loyola Marymount University", 2, "WCC"),
    College("University of San Francisco", 2, "WCC"),
    College("Santa Clara University", 2, "WCC"),
    College("Pepperdine University", 2, "WCC"),
    College("University of the Pacific", 1, "WCC"),
    College("Portland University", 1, "WCC"),
    College("Loyola Chicago", 3, "A-10"),
    College("Virginia Commonwealth University", 3, "A-10"),
    College("University of Dayton", 3, "A-10"),
    College("Saint Louis University", 2, "A-10"),
    College("University of Richmond", 2, "A-10"),
    College("George Mason University", 2, "A-10"),
    College("George Washington University", 2, "A-10"),
    College("Davidson College", 2, "A-10"),
    College("Fordham University", 2, "A-10"),
    College("La Salle University", 1, "A-10"),
    College("University of Massachusetts", 2, "A-10"),
    College("Rhode Island University", 2, "A-10"),
    College("St. Bonaventure University", 2, "A-10"),
    College("Duquesne University", 1, "A-10"),
    College("Murray State University", 2, "MVC"),
    College("Northern Iowa University", 2, "MVC"),
    College("Bradley University", 1, "MVC"),
    College("Drake University", 1, "MVC"),
    College("Illinois State University", 1, "MVC"),
    College("Indiana State University", 1, "MVC"),
    College("Loyola University Chicago", 2, "MVC"),
    College("Missouri State University", 1, "MVC"),
    College("Southern Illinois University", 1, "MVC"),
    College("University of Evansville", 1, "MVC"),
    College("Valparaiso University", 1, "MVC"),
    College("Belmont University", 2, "OVC"),
    College("Jacksonville State University", 1, "OVC"),
    College("Morehead State University", 1, "OVC"),
    College("Eastern Kentucky University", 1, "OVC"),
    College("Austin Peay State University", 1, "OVC"),
    College("Tennessee State University", 1, "OVC"),
    College("Tennessee Tech University", 1, "OVC"),
    College("University of Tennessee at Martin", 1, "OVC"),
    College("Southeast Missouri State University", 1, "OVC"),
    College("Southern Illinois University Edwardsville", 1, "OVC"),
    College("Eastern Illinois University", 1, "OVC"),
    College("Florida Atlantic University", 2, "C-USA"),
    College("Florida International University", 2, "C-USA"),
    College("Louisiana Tech University", 2, "C-USA"),
    College("Marshall University", 2, "C-USA"),
    College("Middle Tennessee State University", 2, "C-USA"),
    College("Old Dominion University", 2, "C-USA"),
    College("Rice University", 1, "C-USA"),
    College("University of Alabama at Birmingham", 2, "C-USA"),
    College("University of North Texas", 2, "C-USA"),
    College("University of Texas at El Paso", 1, "C-USA"),
    College("University of Texas at San Antonio", 2, "C-USA"),
    College("Western Kentucky University", 2, "C-USA"),
    College("Charlotte University", 2, "C-USA"),
    College("North Carolina State University", 4, "ACC"),
]


ALL_COLLEGES: List[College] = (
    TOP_TIER_COLLEGES
    + HIGH_TIER_COLLEGES
    + MID_TIER_COLLEGES
    + LOWER_TIER_COLLEGES
)


# ──────────────────────────────────────────────
# SAMPLING
# ──────────────────────────────────────────────

_college_pool: List[str] = []


def create_college_weighted_pool() -> List[str]:
    """Build the flat name pool, pseudo-entries included."""
    pool = [c.name for c in build_weighted_pool(ALL_COLLEGES, lambda c: c.weight)]
    add_pseudo_entries(pool, NO_COLLEGE, NO_COLLEGE_WEIGHT)
    add_pseudo_entries(pool, INTERNATIONAL, INTERNATIONAL_WEIGHT)
    return pool


def get_random_college(rng: random.Random = None) -> str:
    """Weighted draw; may return one of the pseudo-entries."""
    global _college_pool
    if not _college_pool:
        _college_pool = create_college_weighted_pool()
    return weighted_choice(_college_pool, rng)


def get_college_info(college_name: str) -> Optional[College]:
    for college in ALL_COLLEGES:
        if college.name == college_name:
            return college
    return None


def is_pseudo_college(college_name: Optional[str]) -> bool:
    return college_name in SPECIAL_CATEGORIES


def most_common_college() -> str:
    """Highest-weight real program (first one wins ties)."""
    return max(ALL_COLLEGES, key=lambda c: c.weight).name

