"""
Player Hometowns

Population-weighted table of US and international cities.  US entries carry
a two-letter ``state``; international entries carry a ``country`` instead, and
that field alone decides whether a hometown counts as international.

Usage:
    from hoops.hometowns import get_random_hometown, is_international_hometown
    hometown = get_random_hometown(rng)          # "Chicago, IL"
    is_international_hometown("Madrid, Spain")   # True
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from hoops.reference_data import build_weighted_pool, weighted_choice


@dataclass(frozen=True)
class Hometown:
    city: str
    state: Optional[str] = None
    country: Optional[str] = None
    population: int = 0
    weight: int = 0

    @property
    def is_international(self) -> bool:
        return bool(self.country)

    @property
    def label(self) -> str:
        if self.state:
            return f"{self.city}, {self.state}"
        return f"{self.city}, {self.country}"


# ──────────────────────────────────────────────
# CITY TABLES
# ──────────────────────────────────────────────

# Major US Cities (highest population, highest weight)
MAJOR_US_CITIES: List[Hometown] = [
    Hometown("New York", state="NY", population=8400000, weight=20),
    Hometown("Los Angeles", state="CA", population=4000000, weight=18),
    Hometown("Chicago", state="IL", population=2700000, weight=15),
    Hometown("Houston", state="TX", population=2300000, weight=12),
    Hometown("Phoenix", state="AZ", population=1700000, weight=10),
    Hometown("Philadelphia", state="PA", population=1600000, weight=10),
    Hometown("San Antonio", state="TX", population=1500000, weight=9),
    Hometown("San Diego", state="CA", population=1400000, weight=9),
    Hometown("Dallas", state="TX", population=1300000, weight=8),
    Hometown("San Jose", state="CA", population=1000000, weight=7),
    Hometown("Austin", state="TX", population=980000, weight=7),
    Hometown("Jacksonville", state="FL", population=950000, weight=6),
    Hometown("Fort Worth", state="TX", population=920000, weight=6),
    Hometown("Columbus", state="OH", population=900000, weight=6),
    Hometown("Charlotte", state="NC", population=880000, weight=6),
    Hometown("San Francisco", state="CA", population=870000, weight=6),
    Hometown("Indianapolis", state="IN", population=860000, weight=6),
    Hometown("Seattle", state="WA", population=750000, weight=5),
    Hometown("Denver", state="CO", population=720000, weight=5),
    Hometown("Washington", state="DC", population=700000, weight=5),
]

# Large US Cities (medium-high weight)
LARGE_US_CITIES: List[Hometown] = [
    Hometown("Boston", state="MA", population=690000, weight=5),
    Hometown("El Paso", state="TX", population=680000, weight=4),
    Hometown("Detroit", state="MI", population=670000, weight=5),
    Hometown("Nashville", state="TN", population=670000, weight=4),
    Hometown("Portland", state="OR", population=650000, weight=4),
    Hometown("Memphis", state="TN", population=650000, weight=4),
    Hometown("Oklahoma City", state="OK", population=640000, weight=4),
    Hometown("Las Vegas", state="NV", population=640000, weight=4),
    Hometown("Louisville", state="KY", population=620000, weight=4),
    Hometown("Baltimore", state="MD", population=590000, weight=4),
    Hometown("Milwaukee", state="WI", population=590000, weight=4),
    Hometown("Albuquerque", state="NM", population=560000, weight=3),
    Hometown("Tucson", state="AZ", population=550000, weight=3),
    Hometown("Fresno", state="CA", population=540000, weight=3),
    Hometown("Sacramento", state="CA", population=520000, weight=3),
    Hometown("Kansas City", state="MO", population=490000, weight=3),
    Hometown("Mesa", state="AZ", population=500000, weight=3),
    Hometown("Atlanta", state="GA", population=490000, weight=4),
    Hometown("Colorado Springs", state="CO", population=480000, weight=3),
    Hometown("Raleigh", state="NC", population=470000, weight=3),
    Hometown("Omaha", state="NE", population=470000, weight=3),
    Hometown("Miami", state="FL", population=460000, weight=4),
    Hometown("Oakland", state="CA", population=430000, weight=3),
    Hometown("Minneapolis", state="MN", population=430000, weight=3),
    Hometown("Tulsa", state="OK", population=410000, weight=3),
    Hometown("Cleveland", state="OH", population=380000, weight=3),
    Hometown("Wichita", state="KS", population=390000, weight=3),
    Hometown("Arlington", state="TX", population=390000, weight=3),
]

# Medium US Cities (medium weight)
MEDIUM_US_CITIES: List[Hometown] = [
    Hometown("New Orleans", state="LA", population=390000, weight=3),
    Hometown("Bakersfield", state="CA", population=380000, weight=2),
    Hometown("Tampa", state="FL", population=380000, weight=3),
    Hometown("Honolulu", state="HI", population=350000, weight=2),
    Hometown("Aurora", state="CO", population=370000, weight=2),
    Hometown("Anaheim", state="CA", population=350000, weight=2),
    Hometown("Santa Ana", state="CA", population=330000, weight=2),
    Hometown("St. Louis", state="MO", population=300000, weight=3),
    Hometown("Riverside", state="CA", population=330000, weight=2),
    Hometown("Corpus Christi", state="TX", population=320000, weight=2),
    Hometown("Lexington", state="KY", population=320000, weight=2),
    Hometown("Pittsburgh", state="PA", population=300000, weight=3),
    Hometown("Anchorage", state="AK", population=290000, weight=1),
    Hometown("Stockton", state="CA", population=310000, weight=2),
    Hometown("Cincinnati", state="OH", population=300000, weight=2),
    Hometown("St. Paul", state="MN", population=310000, weight=2),
    Hometown("Toledo", state="OH", population=270000, weight=2),
    Hometown("Newark", state="NJ", population=280000, weight=2),
    Hometown("Greensboro", state="NC", population=290000, weight=2),
    Hometown("Plano", state="TX", population=290000, weight=2),
    Hometown("Henderson", state="NV", population=320000, weight=2),
    Hometown("Lincoln", state="NE", population=290000, weight=2),
    Hometown("Buffalo", state="NY", population=250000, weight=2),
    Hometown("Jersey City", state="NJ", population=270000, weight=2),
    Hometown("Chula Vista", state="CA", population=270000, weight=2),
    Hometown("Fort Wayne", state="IN", population=270000, weight=2),
    Hometown("Orlando", state="FL", population=280000, weight=2),
    Hometown("St. Petersburg", state="FL", population=260000, weight=2),
    Hometown("Chandler", state="AZ", population=260000, weight=2),
    Hometown("Laredo", state="TX", population=260000, weight=2),
    Hometown("Norfolk", state="VA", population=240000, weight=2),
    Hometown("Durham", state="NC", population=280000, weight=2),
    Hometown("Madison", state="WI", population=260000, weight=2),
    Hometown("Lubbock", state="TX", population=250000, weight=2),
    Hometown("Irvine", state="CA", population=280000, weight=2),
    Hometown("Winston-Salem", state="NC", population=240000, weight=2),
    Hometown("Glendale", state="AZ", population=250000, weight=2),
    Hometown("Garland", state="TX", population=240000, weight=2),
    Hometown("Hialeah", state="FL", population=230000, weight=2),
    Hometown("Reno", state="NV", population=250000, weight=2),
    Hometown("Chesapeake", state="VA", population=250000, weight=2),
    Hometown("Gilbert", state="AZ", population=250000, weight=2),
    Hometown("Baton Rouge", state="LA", population=220000, weight=2),
    Hometown("Irving", state="TX", population=240000, weight=2),
    Hometown("Scottsdale", state="AZ", population=260000, weight=2),
    Hometown("North Las Vegas", state="NV", population=250000, weight=2),
    Hometown("Fremont", state="CA", population=230000, weight=2),
    Hometown("Boise", state="ID", population=230000, weight=2),
]

# Smaller US Cities (lower weight but still represented)
SMALL_US_CITIES: List[Hometown] = [
    Hometown("Richmond", state="VA", population=230000, weight=1),
    Hometown("San Bernardino", state="CA", population=220000, weight=1),
    Hometown("Birmingham", state="AL", population=200000, weight=1),
    Hometown("Spokane", state="WA", population=220000, weight=1),
    Hometown("Rochester", state="NY", population=200000, weight=1),
    Hometown("Des Moines", state="IA", population=210000, weight=1),
    Hometown("Modesto", state="CA", population=220000, weight=1),
    Hometown("Fayetteville", state="NC", population=210000, weight=1),
    Hometown("Tacoma", state="WA", population=220000, weight=1),
    Hometown("Oxnard", state="CA", population=210000, weight=1),
    Hometown("Fontana", state="CA", population=210000, weight=1),
    Hometown("Columbus", state="GA", population=200000, weight=1),
    Hometown("Montgomery", state="AL", population=200000, weight=1),
    Hometown("Shreveport", state="LA", population=180000, weight=1),
    Hometown("Aurora", state="IL", population=200000, weight=1),
    Hometown("Yonkers", state="NY", population=200000, weight=1),
    Hometown("Akron", state="OH", population=190000, weight=1),
    Hometown("Huntington Beach", state="CA", population=200000, weight=1),
    Hometown("Little Rock", state="AR", population=200000, weight=1),
    Hometown("Augusta", state="GA", population=200000, weight=1),
    Hometown("Amarillo", state="TX", population=200000, weight=1),
    Hometown("Glendale", state="CA", population=200000, weight=1),
    Hometown("Mobile", state="AL", population=190000, weight=1),
    Hometown("Grand Rapids", state="MI", population=200000, weight=1),
    Hometown("Salt Lake City", state="UT", population=200000, weight=2),
    Hometown("Tallahassee", state="FL", population=190000, weight=1),
    Hometown("Huntsville", state="AL", population=200000, weight=1),
    Hometown("Grand Prairie", state="TX", population=190000, weight=1),
    Hometown("Knoxville", state="TN", population=190000, weight=1),
    Hometown("Worcester", state="MA", population=190000, weight=1),
]

# International Cities (for international players)
INTERNATIONAL_CITIES: List[Hometown] = [
    Hometown("Toronto", country="Canada", population=2930000, weight=8),
    Hometown("Montreal", country="Canada", population=1780000, weight=5),
    Hometown("Vancouver", country="Canada", population=675000, weight=4),
    Hometown("Madrid", country="Spain", population=3200000, weight=6),
    Hometown("Barcelona", country="Spain", population=1620000, weight=5),
    Hometown("Paris", country="France", population=2160000, weight=6),
    Hometown("Lyon", country="France", population=520000, weight=3),
    Hometown("Melbourne", country="Australia", population=5080000, weight=7),
    Hometown("Sydney", country="Australia", population=5310000, weight=7),
    Hometown("Perth", country="Australia", population=2040000, weight=4),
    Hometown("Berlin", country="Germany", population=3670000, weight=5),
    Hometown("Munich", country="Germany", population=1480000, weight=3),
    Hometown("Milan", country="Italy", population=1350000, weight=4),
    Hometown("Rome", country="Italy", population=2870000, weight=4),
    Hometown("Athens", country="Greece", population=3150000, weight=4),
    Hometown("Belgrade", country="Serbia", population=1690000, weight=4),
    Hometown("Zagreb", country="Croatia", population=790000, weight=3),
    Hometown("Ljubljana", country="Slovenia", population=280000, weight=2),
    Hometown("Vilnius", country="Lithuania", population=540000, weight=3),
    Hometown("Riga", country="Latvia", population=630000, weight=2),
    Hometown("Tel Aviv", country="Israel", population=460000, weight=3),
    Hometown("Istanbul", country="Turkey", population=15460000, weight=5),
    Hometown("Ankara", country="Turkey", population=5660000, weight=3),
    Hometown("Moscow", country="Russia", population=12540000, weight=4),
    Hometown("St. Petersburg", country="Russia", population=5380000, weight=3),
    Hometown("Kiev", country="Ukraine", population=2960000, weight=3),
    Hometown("Warsaw", country="Poland", population=1790000, weight=3),
    Hometown("Prague", country="Czech Republic", population=1320000, weight=3),
    Hometown("Budapest", country="Hungary", population=1750000, weight=3),
    Hometown("Bucharest", country="Romania", population=1830000, weight=2),
    Hometown("Lagos", country="Nigeria", population=14860000, weight=4),
    Hometown("Dakar", country="Senegal", population=1030000, weight=3),
    Hometown("Luanda", country="Angola", population=2570000, weight=2),
    Hometown("São Paulo", country="Brazil", population=12330000, weight=4),
    Hometown("Rio de Janeiro", country="Brazil", population=6750000, weight=3),
    Hometown("Buenos Aires", country="Argentina", population=3080000, weight=4),
    Hometown("Mexico City", country="Mexico", population=9210000, weight=5),
    Hometown("Guadalajara", country="Mexico", population=1460000, weight=3),
    Hometown("Monterrey", country="Mexico", population=1140000, weight=2),
    Hometown("Santo Domingo", country="Dominican Republic", population=1030000, weight=4),
    Hometown("San Juan", country="Puerto Rico", population=320000, weight=3),
    Hometown("Havana", country="Cuba", population=2130000, weight=2),
    Hometown("Kingston", country="Jamaica", population=590000, weight=2),
    Hometown("Port-au-Prince", country="Haiti", population=1230000, weight=2),
]


ALL_HOMETOWNS: List[Hometown] = (
    MAJOR_US_CITIES
    + LARGE_US_CITIES
    + MEDIUM_US_CITIES
    + SMALL_US_CITIES
    + INTERNATIONAL_CITIES
)


# ──────────────────────────────────────────────
# SAMPLING / LOOKUP
# ──────────────────────────────────────────────

_hometown_pool: List[Hometown] = []


def create_hometown_weighted_pool() -> List[Hometown]:
    return build_weighted_pool(ALL_HOMETOWNS, lambda h: h.weight)


def get_random_hometown_entry(rng: random.Random = None) -> Hometown:
    global _hometown_pool
    if not _hometown_pool:
        _hometown_pool = create_hometown_weighted_pool()
    return weighted_choice(_hometown_pool, rng)


def get_random_hometown(rng: random.Random = None) -> str:
    """Weighted draw formatted as "City, ST" or "City, Country"."""
    return get_random_hometown_entry(rng).label


def get_hometown_info(hometown: str) -> Optional[Hometown]:
    city, _, location = hometown.partition(", ")
    for entry in ALL_HOMETOWNS:
        if entry.city == city and (entry.state == location or entry.country == location):
            return entry
    return None


def is_international_hometown(hometown: str) -> bool:
    info = get_hometown_info(hometown)
    return info.is_international if info else False
