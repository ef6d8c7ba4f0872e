"""
Fictional Player Name Generator

Builds "First Last" names from a cross product of first- and last-name
pools and tracks every name it has handed out so a league never contains
two players with the same name.

Each ``NameGenerator`` owns its own history; tests and separate leagues can
create independent instances.  A default instance is provided for callers
that just want "the league's" generator.

Usage:
    from hoops.names import NameGenerator

    names = NameGenerator(rng=random.Random(7))
    roster_names = names.generate_multiple_names(12)
    if names.is_name_pool_low():
        ...
    names.reset_used_names()     # new league, names may recycle
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Dict, List, Optional, Sequence, Set

_log = logging.getLogger("hoops.names")

MAX_NAME_ATTEMPTS = 1000


class NamePoolExhaustedError(RuntimeError):
    """Raised when no unused name turned up within MAX_NAME_ATTEMPTS draws."""


# ──────────────────────────────────────────────
# NAME POOLS
# ──────────────────────────────────────────────

_RAW_FIRST_NAMES = [
    "Marcus", "Jordan", "Tyler", "Brandon", "Kevin", "Michael", "David", "James", "Robert", "William",
    "Christopher", "Matthew", "Anthony", "Mark", "Donald", "Steven", "Paul", "Andrew", "Joshua", "Kenneth",
    "Daniel", "Brian", "Justin", "Sean", "Nathan", "Zachary", "Adam", "Patrick", "Noah", "Jeremy",
    "Ryan", "Nicholas", "Jacob", "Edward", "Jonathan", "Mason", "Logan", "Luke", "Gabriel", "Owen",
    "Liam", "Benjamin", "Henry", "Alexander", "Samuel", "Sebastian", "Oliver", "Ethan", "Carter", "Caleb",
    "Alejandro", "Diego", "Carlos", "Luis", "Miguel", "Rafael", "Antonio", "Francisco", "Jose", "Juan",
    "Andre", "Pierre", "Jean", "Claude", "Marcel", "Henri", "Philippe", "Olivier", "Nicolas", "Antoine",
    "Giovanni", "Marco", "Alessandro", "Lorenzo", "Matteo", "Luca", "Francesco", "Andrea", "Stefano", "Roberto",
    "Dmitri", "Viktor", "Alexei", "Mikhail", "Sergei", "Pavel", "Andrei", "Nikolai", "Ivan", "Boris",
    "Hiroshi", "Takeshi", "Kenji", "Yuki", "Akira", "Satoshi", "Taro", "Hideo", "Kazuki", "Ryota",
    "Ahmed", "Omar", "Hassan", "Ali", "Khalil", "Rashid", "Tariq", "Samir", "Karim", "Nasser",
    "Kwame", "Kofi", "Amos", "Emmanuel", "Samuel", "Isaac", "Moses", "Abraham", "Joseph", "Daniel",
    "Zion", "Phoenix", "Atlas", "Orion", "Sage", "River", "Storm", "Blaze", "Cruz", "Dash",
    "Knox", "Rex", "Zane", "Jax", "Kai", "Neo", "Ace", "Fox", "Max", "Axel"
]

_RAW_LAST_NAMES = [
    "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez", "Hernandez",
    "Lopez", "Gonzalez", "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee",
    "Perez", "Thompson", "White", "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker",
    "Young", "Allen", "King", "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores", "Green",
    "Adams", "Nelson", "Baker", "Hall", "Rivera", "Campbell", "Mitchell", "Carter", "Roberts", "Gomez",
    "Mueller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer", "Wagner", "Becker", "Schulz", "Hoffmann",
    "Rossi", "Russo", "Ferrari", "Esposito", "Bianchi", "Romano", "Colombo", "Ricci", "Marino", "Greco",
    "Dubois", "Martin", "Bernard", "Moreau", "Laurent", "Simon", "Michel", "Lefebvre", "Leroy", "Roux",
    "Smith", "Brown", "Taylor", "Wilson", "Evans", "Thomas", "Roberts", "Johnson", "Lewis", "Walker",
    "Petrov", "Ivanov", "Smirnov", "Kuznetsov", "Popov", "Volkov", "Sokolov", "Mikhailov", "Fedorov", "Morozov",
    "Yamamoto", "Tanaka", "Watanabe", "Ito", "Nakamura", "Kobayashi", "Kato", "Yoshida", "Yamada", "Sasaki",
    "Kim", "Park", "Lee", "Choi", "Jung", "Kang", "Cho", "Yoon", "Jang", "Lim",
    "Chen", "Wang", "Li", "Zhang", "Liu", "Yang", "Huang", "Zhao", "Wu", "Zhou",
    "Singh", "Kumar", "Sharma", "Gupta", "Verma", "Agarwal", "Jain", "Bansal", "Arora", "Chopra",
    "Sterling", "Cross", "Stone", "Rivers", "Woods", "Fields", "Banks", "Wells", "Fox", "Wolf",
    "Knight", "Bishop", "King", "Prince", "Duke", "Noble", "Strong", "Swift", "Sharp", "Bright"
]

# Some names appear in more than one regional group; keep the first.
FIRST_NAMES: List[str] = list(dict.fromkeys(_RAW_FIRST_NAMES))
LAST_NAMES: List[str] = list(dict.fromkeys(_RAW_LAST_NAMES))


# ──────────────────────────────────────────────
# GENERATOR
# ──────────────────────────────────────────────

class NameGenerator:
    """Unique-name allocator over FIRST_NAMES x LAST_NAMES."""

    def __init__(
        self,
        first_names: Optional[Sequence[str]] = None,
        last_names: Optional[Sequence[str]] = None,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_NAME_ATTEMPTS,
    ):
        self.first_names = list(first_names) if first_names is not None else FIRST_NAMES
        self.last_names = list(last_names) if last_names is not None else LAST_NAMES
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self._used_names: Set[str] = set()
        self._lock = threading.Lock()

    def generate_unique_name(self) -> str:
        with self._lock:
            for _ in range(self.max_attempts):
                first = self.rng.choice(self.first_names)
                last = self.rng.choice(self.last_names)
                full_name = f"{first} {last}"
                if full_name not in self._used_names:
                    self._used_names.add(full_name)
                    return full_name
        raise NamePoolExhaustedError(
            "Unable to generate unique name - name pool may be exhausted"
        )

    def generate_multiple_names(self, count: int) -> List[str]:
        """Generate up to ``count`` names, stopping early if the pool runs dry."""
        names: List[str] = []
        for _ in range(count):
            try:
                names.append(self.generate_unique_name())
            except NamePoolExhaustedError:
                _log.warning(f"Could only generate {len(names)} out of {count} requested names")
                break
        return names

    def generate_draft_class(self, count: int) -> List[str]:
        return self.generate_multiple_names(count)

    def generate_free_agents(self, count: int) -> List[str]:
        return self.generate_multiple_names(count)

    def mark_used(self, name: str):
        """Record a name that entered the league from elsewhere (loads, edits)."""
        with self._lock:
            self._used_names.add(name)

    def release(self, name: str):
        with self._lock:
            self._used_names.discard(name)

    def reset_used_names(self):
        with self._lock:
            self._used_names.clear()

    # ── pool statistics ──
    @property
    def used_name_count(self) -> int:
        return len(self._used_names)

    @property
    def total_possible_names(self) -> int:
        return len(self.first_names) * len(self.last_names)

    @property
    def available_name_count(self) -> int:
        return self.total_possible_names - self.used_name_count

    def is_name_pool_low(self, threshold: float = 0.1) -> bool:
        return self.available_name_count / self.total_possible_names < threshold

    def is_name_pool_exhausted(self) -> bool:
        return self.available_name_count <= 0

    def get_stats(self) -> Dict[str, object]:
        usage = self.used_name_count / self.total_possible_names * 100
        return {
            "used_names": self.used_name_count,
            "available_names": self.available_name_count,
            "total_possible": self.total_possible_names,
            "usage_percentage": f"{usage:.2f}%",
        }


name_generator = NameGenerator()
