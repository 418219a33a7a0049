"""
sidereal.py
===========
Tropical → sidereal conversion and rasi / nakshatra / pada lookup.

The ayanamsa is a single fixed value (approximate Lahiri). It does not drift
with the date; charts computed here are only as precise as that offset.
"""

import math
from dataclasses import dataclass

from .errors import IndexOutOfRange

# ── Constants ──────────────────────────────────────────────────

AYANAMSA = 24.12  # Lahiri (approx.)

MANSION_SPAN = 360.0 / 27.0      # 13.333... degrees per nakshatra
QUARTER_SPAN = MANSION_SPAN / 4  # 3.333... degrees per pada
SIGN_SPAN = 30.0

RASI_NAMES = (
    "Mesha", "Rishaba", "Mithuna", "Kataka", "Simha", "Kanya",
    "Thula", "Vrischika", "Dhanusu", "Makara", "Kumbha", "Meena",
)

NAKSHATRA_NAMES = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishta",
    "Shatabhisha", "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
)


@dataclass(frozen=True)
class MansionPosition:
    degrees: float
    mansion_index: int
    mansion_name: str
    quarter: int
    sign_index: int
    sign_name: str

    def to_dict(self) -> dict:
        return {
            "degrees": round(self.degrees, 4),
            "star": self.mansion_name,
            "star_index": self.mansion_index,
            "pada": self.quarter,
            "rasi": self.sign_name,
            "rasi_index": self.sign_index,
        }


# ── Conversion ─────────────────────────────────────────────────

def to_sidereal(tropical_degrees: float, ayanamsa: float = AYANAMSA) -> float:
    """Subtract the ayanamsa and fold the result into [0, 360)."""
    sidereal = (tropical_degrees - ayanamsa) % 360.0
    # -1e-17 % 360 rounds up to 360.0
    if sidereal >= 360.0:
        sidereal = 0.0
    return sidereal


def mansion_offset(sidereal_degrees: float):
    """
    Return (nakshatra index, degrees traveled into that nakshatra).

    The offset is taken from the index itself so the two always agree:
    a longitude that lands on a nakshatra start is 0.0 into the new one.
    """
    index = min(math.floor(sidereal_degrees / MANSION_SPAN), 26)
    traveled = sidereal_degrees - index * MANSION_SPAN
    return index, min(max(0.0, traveled), MANSION_SPAN)


def resolve_position(sidereal_degrees: float) -> MansionPosition:
    """
    Map a sidereal longitude to its nakshatra, pada and rasi.

    The input must already be normalized to [0, 360); anything else
    (including NaN) raises IndexOutOfRange.
    """
    if not 0.0 <= sidereal_degrees < 360.0:
        raise IndexOutOfRange(f"Sidereal longitude {sidereal_degrees!r} is outside [0, 360)")

    mansion_index, traveled = mansion_offset(sidereal_degrees)
    quarter = min(math.floor(traveled / QUARTER_SPAN), 3) + 1
    sign_index = math.floor(sidereal_degrees / SIGN_SPAN)

    return MansionPosition(
        degrees=sidereal_degrees,
        mansion_index=mansion_index,
        mansion_name=NAKSHATRA_NAMES[mansion_index],
        quarter=quarter,
        sign_index=sign_index,
        sign_name=RASI_NAMES[sign_index],
    )


def nakshatra_index(name: str) -> int:
    """Index of a nakshatra by name (case-insensitive)."""
    return _lookup(NAKSHATRA_NAMES, name, "nakshatra")


def rasi_index(name: str) -> int:
    """Index of a rasi by name (case-insensitive)."""
    return _lookup(RASI_NAMES, name, "rasi")


def _lookup(table, name: str, kind: str) -> int:
    wanted = name.strip().lower()
    for i, entry in enumerate(table):
        if entry.lower() == wanted:
            return i
    raise IndexOutOfRange(f"Unknown {kind} {name!r}")
