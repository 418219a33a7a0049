# Graha Engine - Core modules
from .ephemeris import ecliptic_longitude, gregorian_to_jd, julian_day
from .sidereal import (
    AYANAMSA, MansionPosition, NAKSHATRA_NAMES, RASI_NAMES,
    mansion_offset, resolve_position, to_sidereal,
)
from .dasha import (
    DASHA_LORDS, DashaLord, DashaPeriod, DashaState,
    compute_dasha, current_period, dasha_timeline,
)
from .errors import GrahaError, IndexOutOfRange, InvalidTimestamp, MissingRequiredField

__all__ = [
    "ecliptic_longitude", "gregorian_to_jd", "julian_day",
    "AYANAMSA", "MansionPosition", "NAKSHATRA_NAMES", "RASI_NAMES",
    "mansion_offset", "resolve_position", "to_sidereal",
    "DASHA_LORDS", "DashaLord", "DashaPeriod", "DashaState",
    "compute_dasha", "current_period", "dasha_timeline",
    "GrahaError", "IndexOutOfRange", "InvalidTimestamp", "MissingRequiredField",
]
