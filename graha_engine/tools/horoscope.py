"""
horoscope.py
============
Birth-data orchestration for the HTTP layer.

Turns date/time strings into UTC instants, runs them through the ephemeris,
the sidereal conversion and the nakshatra/rasi resolver, and assembles the
JSON-ready dicts served by ``main.py``.

Usage:
    from graha_engine.tools.horoscope import parse_instant, generate_dasha

    birth = parse_instant("1998-05-15", "14:30")
    result = generate_dasha(birth)
"""

from datetime import datetime, timezone
from typing import Optional

from ..core.dasha import compute_dasha, current_period, dasha_timeline
from ..core.ephemeris import ecliptic_longitude
from ..core.errors import InvalidTimestamp
from ..core.sidereal import (
    AYANAMSA, MansionPosition, resolve_position, to_sidereal,
)


# ---------------------------------------------------------------------------
# Utility: timestamps
# ---------------------------------------------------------------------------

def parse_instant(date_str: str, time_str: Optional[str] = None) -> datetime:
    """
    Parse ``YYYY-MM-DD`` and an optional ``HH:MM`` (or ``HH:MM:SS``) as UTC.

    Raises InvalidTimestamp for anything that does not parse.
    """
    if not date_str or not date_str.strip():
        raise InvalidTimestamp("Invalid Date")
    text = date_str.strip()
    fmt = "%Y-%m-%d"
    if time_str and time_str.strip():
        clock = time_str.strip()
        text = f"{text} {clock}"
        fmt += " %H:%M:%S" if clock.count(":") == 2 else " %H:%M"
    try:
        parsed = datetime.strptime(text, fmt)
    except ValueError as e:
        raise InvalidTimestamp(f"Invalid Date: {text!r}") from e
    return parsed.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def date_string(instant: datetime) -> str:
    """Render like JavaScript's Date.toDateString(): 'Fri May 15 1998'."""
    return instant.strftime("%a %b %d %Y")


# ---------------------------------------------------------------------------
# Placements
# ---------------------------------------------------------------------------

def body_position(body: str, instant: datetime, ayanamsa: float = AYANAMSA) -> MansionPosition:
    return resolve_position(to_sidereal(ecliptic_longitude(body, instant), ayanamsa))


def moon_position(instant: datetime, ayanamsa: float = AYANAMSA) -> MansionPosition:
    return body_position("Moon", instant, ayanamsa)


def sun_position(instant: datetime, ayanamsa: float = AYANAMSA) -> MansionPosition:
    return body_position("Sun", instant, ayanamsa)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

def generate_horoscope(instant: datetime, ayanamsa: float = AYANAMSA) -> dict:
    sun = sun_position(instant, ayanamsa)
    moon = moon_position(instant, ayanamsa)
    return {
        "date": date_string(instant),
        "sun_sign": sun.sign_name,
        "moon_sign": moon.sign_name,
        "moon_star": moon.mansion_name,
        "moon_pada": moon.quarter,
    }


def generate_dasha(birth: datetime, now: Optional[datetime] = None,
                   ayanamsa: float = AYANAMSA) -> dict:
    """Current maha dasha for a birth instant."""
    now = now or utc_now()
    moon = moon_position(birth, ayanamsa)
    state = compute_dasha(moon.degrees, birth, now)

    status = {
        "running_dasha": state.lord.name,
        "time_remaining": state.to_dict()["ends_in"],
    }
    if state.started_ago is not None:
        status["started_ago"] = state.to_dict()["started_ago"]

    return {
        "birth_date": date_string(birth),
        "birth_star": moon.mansion_name,
        "current_status": status,
    }


def generate_dasha_timeline(birth: datetime, now: Optional[datetime] = None,
                            ayanamsa: float = AYANAMSA) -> dict:
    """All maha dashas from birth, with antardashas and the ones running now."""
    now = now or utc_now()
    moon = moon_position(birth, ayanamsa)
    periods = dasha_timeline(moon.degrees, birth)
    maha, antar = current_period(periods, now)
    return {
        "birth_date": date_string(birth),
        "birth_star": moon.mansion_name,
        "system": "Vimshottari",
        "current": {
            "maha_dasha": maha.lord.name if maha else None,
            "maha_dasha_start": maha.start.strftime("%Y-%m-%d") if maha else None,
            "maha_dasha_end": maha.end.strftime("%Y-%m-%d") if maha else None,
            "antardasha": antar.lord.name if antar else None,
            "antardasha_start": antar.start.strftime("%Y-%m-%d") if antar else None,
            "antardasha_end": antar.end.strftime("%Y-%m-%d") if antar else None,
        },
        "periods": [p.to_dict() for p in periods],
    }

