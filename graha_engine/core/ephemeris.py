"""
ephemeris.py  —  Apparent geocentric longitudes of the Sun and Moon
===================================================================
Uses Jean Meeus "Astronomical Algorithms" 2nd ed.

  Sun   Ch. 25 (low accuracy, geocentric)
  Moon  Ch. 47 (main periodic terms of Table 47.A)
  Nutation in longitude, Ch. 22 (four largest terms)

Accuracy is ~0.01° for the Sun and ~0.005° for the Moon between 1800 and
2100, well inside what a fixed-ayanamsa sidereal chart can resolve.
Universal Time is used in place of Dynamical Time (ΔT ignored).

The rest of the engine only ever calls ``ecliptic_longitude(body, instant)``.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Tuple

log = logging.getLogger(__name__)

# ── Constants ──────────────────────────────────────────────────
J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
DEG = math.pi / 180.0

BODIES = ("Sun", "Moon")


def _n(x):
    """Normalize angle to [0, 360)."""
    return x % 360.0


def _sin(deg):
    return math.sin(deg * DEG)


# ── Julian Day ─────────────────────────────────────────────────

def gregorian_to_jd(year: int, month: int, day: int, hour: float = 0.0) -> float:
    """Meeus Ch. 7."""
    if month <= 2:
        year -= 1
        month += 12
    a = int(year / 100)
    b = 2 - a + int(a / 4)
    return int(365.25 * (year + 4716)) + int(30.6001 * (month + 1)) + day + b - 1524.5 + hour / 24.0


def julian_day(instant: datetime) -> float:
    """Julian Day of an instant. Naive datetimes are read as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    else:
        instant = instant.astimezone(timezone.utc)
    hour = (instant.hour + instant.minute / 60.0
            + (instant.second + instant.microsecond / 1e6) / 3600.0)
    return gregorian_to_jd(instant.year, instant.month, instant.day, hour)


def julian_centuries(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_CENTURY


# ── Nutation (Meeus Ch. 22) ────────────────────────────────────

def nutation_in_longitude(T: float) -> float:
    """Δψ in degrees."""
    omega = _n(125.04452 - 1934.136261 * T + 0.0020708 * T * T)
    L0 = _n(280.4665 + 36000.7698 * T)
    Lm = _n(218.3165 + 481267.8813 * T)
    dpsi = (-17.20 * _sin(omega) - 1.32 * _sin(2 * L0)
            - 0.23 * _sin(2 * Lm) + 0.21 * _sin(2 * omega))
    return dpsi / 3600.0


# ── Sun (Meeus Ch. 25) ─────────────────────────────────────────

def sun_longitude(T: float) -> Tuple[float, float]:
    """Returns (apparent_longitude_deg, radius_AU)."""
    L0 = _n(280.46646 + 36000.76983 * T + 0.0003032 * T * T)
    M = _n(357.52911 + 35999.05029 * T - 0.0001537 * T * T)
    e = 0.016708634 - 0.000042037 * T - 0.0000001267 * T * T

    C = ((1.914602 - 0.004817 * T - 0.000014 * T * T) * _sin(M)
         + (0.019993 - 0.000101 * T) * _sin(2 * M)
         + 0.000289 * _sin(3 * M))

    true_lon = L0 + C
    R = (1.000001018 * (1 - e * e)) / (1 + e * math.cos((M + C) * DEG))

    # nutation + annual aberration
    apparent = _n(true_lon + nutation_in_longitude(T) - 20.4898 / 3600.0 / R)
    return apparent, R


# ── Moon (Meeus Ch. 47) ────────────────────────────────────────

# Table 47.A, longitude column: (D, M, M', F, Σl coefficient in 1e-6 deg)
MOON_LONGITUDE_TERMS = (
    (0, 0, 1, 0, 6288774), (2, 0, -1, 0, 1274027), (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618), (0, 1, 0, 0, -185116), (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793), (2, -1, -1, 0, 57066), (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758), (0, 1, -1, 0, -40923), (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383), (2, 0, 0, -2, 15327), (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980), (4, 0, -1, 0, 10675), (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548), (2, 1, -1, 0, -7888), (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163), (1, 1, 0, 0, 4987), (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994), (4, 0, 0, 0, 3861), (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689), (2, 0, -1, 2, -2602), (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348), (2, -2, 0, 0, 2236), (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069), (2, -2, -1, 0, 2048), (2, 0, 1, -2, -1773),
    (2, 0, 0, 2, -1595), (4, -1, -1, 0, 1215), (0, 0, 2, 2, -1110),
    (3, 0, -1, 0, -892), (2, 1, 1, 0, -810), (4, -1, -2, 0, 759),
    (0, 2, -1, 0, -713), (2, 2, -1, 0, -700), (2, 1, -2, 0, 691),
    (2, -1, 0, -2, 596), (4, 0, 1, 0, 549), (0, 0, 4, 0, 537),
    (4, -1, 0, 0, 520), (1, 0, -2, 0, -487), (2, 1, 0, -2, -399),
    (0, 0, 2, -2, -381), (1, 1, 1, 0, 351), (3, 0, -2, 0, -340),
    (4, 0, -3, 0, 330), (2, -1, 2, 0, 327), (0, 2, 1, 0, -323),
    (1, 1, -1, 0, 299), (2, 0, 3, 0, 294),
)


def moon_longitude(T: float) -> float:
    """Apparent geocentric longitude of the Moon in degrees."""
    Lp = _n(218.3164477 + 481267.88123421 * T - 0.0015786 * T * T
            + T ** 3 / 538841.0 - T ** 4 / 65194000.0)
    D = _n(297.8501921 + 445267.1114034 * T - 0.0018819 * T * T
           + T ** 3 / 545868.0 - T ** 4 / 113065000.0)
    M = _n(357.5291092 + 35999.0502909 * T - 0.0001536 * T * T
           + T ** 3 / 24490000.0)
    Mp = _n(134.9633964 + 477198.8675055 * T + 0.0087414 * T * T
            + T ** 3 / 69699.0 - T ** 4 / 14712000.0)
    F = _n(93.2720950 + 483202.0175233 * T - 0.0036539 * T * T
           - T ** 3 / 3526000.0 + T ** 4 / 863310000.0)

    # eccentricity of Earth's orbit, applied once per |M|
    E = 1.0 - 0.002516 * T - 0.0000074 * T * T

    sl = 0.0
    for d, m, mp, f, coeff in MOON_LONGITUDE_TERMS:
        term = coeff * _sin(d * D + m * M + mp * Mp + f * F)
        if m:
            term *= E ** abs(m)
        sl += term

    # Venus, Jupiter and flattening corrections
    A1 = _n(119.75 + 131.849 * T)
    A2 = _n(53.09 + 479264.290 * T)
    sl += 3958 * _sin(A1) + 1962 * _sin(Lp - F) + 318 * _sin(A2)

    return _n(Lp + sl / 1_000_000.0 + nutation_in_longitude(T))


# ── Public entry point ─────────────────────────────────────────

def ecliptic_longitude(body: str, instant: datetime) -> float:
    """
    Tropical apparent geocentric ecliptic longitude of ``body`` at ``instant``.

    Args:
        body: "Sun" or "Moon" (case-insensitive)
        instant: a datetime; naive values are treated as UTC

    Returns:
        Longitude in degrees, normalized to [0, 360).
    """
    T = julian_centuries(julian_day(instant))
    name = body.strip().capitalize()
    if name == "Sun":
        lon = sun_longitude(T)[0]
    elif name == "Moon":
        lon = moon_longitude(T)
    else:
        raise ValueError(f"Unsupported body {body!r}; expected one of {', '.join(BODIES)}")
    log.debug("%s tropical longitude at %s = %.6f", name, instant.isoformat(), lon)
    return lon
