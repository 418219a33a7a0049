"""
matchmaker.py
=============
Porutham (South Indian match-making) compatibility on a 10-point scale.

Both counts run from the girl's placement to the boy's, 1-based.

The 3 Poruthams scored:
  1. Dina   (+3)      — nakshatra count lands on a favourable day
  2. Rasi   (+4/+2/-1) — Moon sign count (7th = best, 6/8 = penalty)
  3. Rajju  (+3)      — flat baseline; the star-group table is not applied

The score is not clamped. ``generate_match`` and ``generate_match_by_names``
build the /match payloads from birth instants or from star and rasi names.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from graha_engine.core.errors import IndexOutOfRange
from graha_engine.core.sidereal import (
    AYANAMSA, NAKSHATRA_NAMES, RASI_NAMES, nakshatra_index, rasi_index,
)
from graha_engine.tools.horoscope import moon_position

log = logging.getLogger(__name__)

MAX_SCORE = 10

# Dina: favourable counts from the girl's star to the boy's
DINA_GOOD = frozenset({2, 4, 6, 8, 9, 11, 13, 15, 18, 20, 24, 26})
DINA_POINTS = 3

# Rasi: count from the girl's sign to the boy's
RASI_SAPTAMA = 7           # opposite signs
RASI_SAPTAMA_POINTS = 4
RASI_GOOD = frozenset({3, 4, 10, 11})
RASI_GOOD_POINTS = 2
RASI_SHASHTASHTAKA = frozenset({6, 8})
RASI_PENALTY = -1

RAJJU_BASELINE = 3

EXCELLENT_FROM = 7
POOR_BELOW = 4


class CompatibilityStatus(str, Enum):
    POOR = "Poor"
    AVERAGE = "Average"
    EXCELLENT = "Excellent"


@dataclass(frozen=True)
class CompatibilityResult:
    score: int
    status: CompatibilityStatus
    count_from_girl: int

    def to_dict(self) -> dict:
        return {
            "score": f"{self.score}/{MAX_SCORE}",
            "status": self.status.value,
            "count_from_girl": self.count_from_girl,
        }


# ── Porutham rules ───────────────────────────────────────────

def dina_count(boy_star: int, girl_star: int) -> int:
    return (boy_star - girl_star) % 27 + 1


def dina_score(count: int) -> int:
    return DINA_POINTS if count in DINA_GOOD else 0


def rasi_count(boy_rasi: int, girl_rasi: int) -> int:
    return (boy_rasi - girl_rasi) % 12 + 1


def rasi_score(count: int) -> int:
    if count == RASI_SAPTAMA:
        return RASI_SAPTAMA_POINTS
    if count in RASI_GOOD:
        return RASI_GOOD_POINTS
    if count in RASI_SHASHTASHTAKA:
        return RASI_PENALTY
    return 0


def classify(score: int) -> CompatibilityStatus:
    if score >= EXCELLENT_FROM:
        return CompatibilityStatus.EXCELLENT
    if score < POOR_BELOW:
        return CompatibilityStatus.POOR
    return CompatibilityStatus.AVERAGE


def _check(value: int, size: int, label: str):
    if not 0 <= value < size:
        raise IndexOutOfRange(f"{label} must be in 0..{size - 1}, got {value}")


# ── Main compatibility function ───────────────────────────────

def compute_compatibility(boy_star: int, girl_star: int,
                          boy_rasi: int, girl_rasi: int) -> CompatibilityResult:
    """
    Score a match from the boy's and girl's Moon nakshatra and rasi indexes.
    """
    _check(boy_star, 27, "boy nakshatra index")
    _check(girl_star, 27, "girl nakshatra index")
    _check(boy_rasi, 12, "boy rasi index")
    _check(girl_rasi, 12, "girl rasi index")

    count = dina_count(boy_star, girl_star)
    score = dina_score(count) + rasi_score(rasi_count(boy_rasi, girl_rasi)) + RAJJU_BASELINE

    log.debug("porutham: dina count %d, rasi count %d, score %d",
              count, rasi_count(boy_rasi, girl_rasi), score)
    return CompatibilityResult(score=score, status=classify(score), count_from_girl=count)


# ── Match payloads ────────────────────────────────────────────

def _match(boy_star: int, girl_star: int, boy_rasi: int, girl_rasi: int) -> dict:
    result = compute_compatibility(boy_star, girl_star, boy_rasi, girl_rasi)
    return {
        "boy": {"star": NAKSHATRA_NAMES[boy_star], "rasi": RASI_NAMES[boy_rasi]},
        "girl": {"star": NAKSHATRA_NAMES[girl_star], "rasi": RASI_NAMES[girl_rasi]},
        "compatibility": result.to_dict(),
    }


def generate_match(boy_birth: datetime, girl_birth: datetime,
                   ayanamsa: float = AYANAMSA) -> dict:
    """Porutham match from the two Moon placements at birth."""
    boy = moon_position(boy_birth, ayanamsa)
    girl = moon_position(girl_birth, ayanamsa)
    return _match(boy.mansion_index, girl.mansion_index, boy.sign_index, girl.sign_index)


def generate_match_by_names(boy_star: str, girl_star: str,
                            boy_rasi: str, girl_rasi: str) -> dict:
    """Porutham match when the stars and rasis are already known."""
    return _match(nakshatra_index(boy_star), nakshatra_index(girl_star),
                  rasi_index(boy_rasi), rasi_index(girl_rasi))
