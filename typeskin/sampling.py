"""
Random Sampling Discipline
==========================
Every descriptor generates inhabitants in one of two modes:

  COMPACT — small, human-legible values (used for early contract iterations
            and for forall counterexamples, so reports stay readable)
  FULL    — broad distribution, for coverage

All generators draw from one shared RNG so a run can be reproduced with
TYPESKIN_SEED.
"""

from __future__ import annotations

import random
from enum import Enum, auto
from typing import Any, Callable, Optional, Sequence

from .config import get_settings


class Mode(Enum):
    """Sampling mode."""
    COMPACT = auto()
    FULL = auto()


rng = random.Random(get_settings().seed)

CONSONANTS = "cdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"
HEX_DIGITS = "0123456789abcdef"


def reseed(seed: Optional[int]) -> None:
    """Reset the shared RNG (None = fresh OS entropy)."""
    rng.seed(seed)


def random_of(choices: Sequence[Any]) -> Any:
    return choices[rng.randrange(len(choices))]


def generate(count: int, make: Callable[[], Any]) -> list[Any]:
    """Call `make` `count` times and collect the results."""
    return [make() for _ in range(count)]


def syllable() -> str:
    return random_of(CONSONANTS) + random_of(VOWELS)


def chance(probability: float) -> bool:
    return rng.random() < probability
