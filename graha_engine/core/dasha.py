"""
dasha.py
========
Vimshottari Dasha calculation system.

Vimshottari ("120 years") is the most widely used dasha system in Vedic astrology.
The dasha ruler and starting point are determined by the Moon's nakshatra at birth.

Dasha sequence: Ketu (7) → Venus (20) → Sun (6) → Moon (10) → Mars (7)
                → Rahu (18) → Jupiter (16) → Saturn (19) → Mercury (17)
Total = 120 years

The 27 nakshatras run through the nine lords three times, so the birth lord
is simply ``nakshatra_index % 9``. Only the unelapsed fraction of the birth
nakshatra is owed to the birth lord (the "balance"); every later period runs
its full length.

Years are fixed at 365.25 days. Period boundaries are half-open: an instant
exactly on a boundary belongs to the lord that starts there.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from .errors import InvalidTimestamp
from .sidereal import MANSION_SPAN, mansion_offset

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DashaLord:
    name: str
    years: int


DASHA_LORDS = (
    DashaLord("Ketu", 7),
    DashaLord("Venus", 20),
    DashaLord("Sun", 6),
    DashaLord("Moon", 10),
    DashaLord("Mars", 7),
    DashaLord("Rahu", 18),
    DashaLord("Jupiter", 16),
    DashaLord("Saturn", 19),
    DashaLord("Mercury", 17),
)

TOTAL_YEARS = sum(lord.years for lord in DASHA_LORDS)  # 120

DAYS_PER_YEAR = 365.25
SECONDS_PER_YEAR = DAYS_PER_YEAR * 86400


def _fmt_years(years: float) -> str:
    return f"{years:.2f} years"


@dataclass(frozen=True)
class DashaState:
    lord: DashaLord
    ends_in: float
    started_ago: Optional[float] = None

    def to_dict(self) -> dict:
        out = {"lord": self.lord.name}
        if self.started_ago is not None:
            out["started_ago"] = _fmt_years(self.started_ago)
        out["ends_in"] = _fmt_years(self.ends_in)
        return out


@dataclass(frozen=True)
class DashaPeriod:
    lord: DashaLord
    start: datetime
    end: datetime
    years: float
    antardashas: Tuple["DashaPeriod", ...] = ()

    def contains(self, instant: datetime) -> bool:
        return self.start <= _as_utc(instant) < self.end

    def to_dict(self) -> dict:
        out = {
            "lord": self.lord.name,
            "start": self.start.strftime("%Y-%m-%d"),
            "end": self.end.strftime("%Y-%m-%d"),
            "duration_years": round(self.years, 2),
        }
        if self.antardashas:
            out["antardashas"] = [a.to_dict() for a in self.antardashas]
        return out


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def years_between(start: datetime, end: datetime) -> float:
    return (_as_utc(end) - _as_utc(start)).total_seconds() / SECONDS_PER_YEAR


def birth_lord_index(moon_sidereal_lon: float) -> int:
    return mansion_offset(moon_sidereal_lon)[0] % 9


def balance_at_birth(moon_sidereal_lon: float) -> float:
    """Years of the birth lord's period still to run at birth."""
    index, traveled = mansion_offset(moon_sidereal_lon)
    lord = DASHA_LORDS[index % 9]
    fraction_traveled = traveled / MANSION_SPAN
    return lord.years * (1.0 - fraction_traveled)


# ---------------------------------------------------------------------------
# Current dasha
# ---------------------------------------------------------------------------

def compute_dasha(moon_sidereal_lon: float, birth_dt: datetime,
                  now_dt: datetime) -> DashaState:
    """
    Return the maha dasha running at ``now_dt`` for a native born at ``birth_dt``.

    Args:
        moon_sidereal_lon: Moon's sidereal longitude at birth, degrees (0–360)
        birth_dt: Birth instant (naive values are treated as UTC)
        now_dt: Instant to evaluate

    Returns:
        DashaState; ``started_ago`` is None while the birth lord's balance
        is still running.
    """
    if not math.isfinite(moon_sidereal_lon):
        raise InvalidTimestamp(f"Moon longitude is not a finite number: {moon_sidereal_lon!r}")
    age = years_between(birth_dt, now_dt)
    if age < 0:
        raise InvalidTimestamp("Birth instant is later than the evaluation instant")

    index = birth_lord_index(moon_sidereal_lon)
    balance = balance_at_birth(moon_sidereal_lon)
    log.debug("birth lord %s, balance %.4f years, age %.4f years",
              DASHA_LORDS[index].name, balance, age)

    if age < balance:
        return DashaState(lord=DASHA_LORDS[index], ends_in=balance - age)

    age -= balance
    index = (index + 1) % 9
    while True:
        lord = DASHA_LORDS[index]
        if age < lord.years:
            return DashaState(lord=lord, started_ago=age, ends_in=lord.years - age)
        age -= lord.years
        index = (index + 1) % 9


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

def _sequence_from(index: int) -> List[DashaLord]:
    return list(DASHA_LORDS[index:] + DASHA_LORDS[:index])


def _antardashas(maha_lord: DashaLord, start: datetime, years: float) -> Tuple[DashaPeriod, ...]:
    """
    Antardasha (Bhukti) periods within a maha dasha.
    Each sub-period is proportional to the sub-lord's years relative to 120;
    the sequence starts from the maha dasha lord itself.
    """
    out = []
    current = start
    for sub_lord in _sequence_from(DASHA_LORDS.index(maha_lord)):
        sub_years = years * sub_lord.years / TOTAL_YEARS
        end = current + timedelta(days=sub_years * DAYS_PER_YEAR)
        out.append(DashaPeriod(sub_lord, current, end, sub_years))
        current = end
    return tuple(out)


def dasha_timeline(moon_sidereal_lon: float, birth_dt: datetime,
                   cycles: int = 1) -> List[DashaPeriod]:
    """
    Maha dasha periods from birth, each with its nine antardashas.

    The first period is only the balance of the birth lord; antardashas of
    that period are laid out over the lord's full length and the ones that
    ended before birth are dropped, with the first surviving one clipped
    to birth.
    """
    birth = _as_utc(birth_dt)
    index = birth_lord_index(moon_sidereal_lon)
    balance = balance_at_birth(moon_sidereal_lon)

    periods = []
    first = DASHA_LORDS[index]
    elapsed = first.years - balance
    notional_start = birth - timedelta(days=elapsed * DAYS_PER_YEAR)
    end = birth + timedelta(days=balance * DAYS_PER_YEAR)
    subs = tuple(
        DashaPeriod(a.lord, max(a.start, birth), a.end, years_between(max(a.start, birth), a.end))
        for a in _antardashas(first, notional_start, first.years)
        if a.end > birth
    )
    periods.append(DashaPeriod(first, birth, end, balance, subs))

    current = end
    for lord in (_sequence_from(index) * cycles)[1:] + [first]:
        end = current + timedelta(days=lord.years * DAYS_PER_YEAR)
        periods.append(DashaPeriod(lord, current, end, float(lord.years),
                                   _antardashas(lord, current, lord.years)))
        current = end
    return periods


def current_period(periods: List[DashaPeriod],
                   on_date: datetime) -> Tuple[Optional[DashaPeriod], Optional[DashaPeriod]]:
    """Return the active (maha dasha, antardasha) for a given instant."""
    for period in periods:
        if period.contains(on_date):
            for sub in period.antardashas:
                if sub.contains(on_date):
                    return period, sub
            return period, None
    return None, None
