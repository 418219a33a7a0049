"""
Graha Engine
============
Vedic placements and Vimshottari dasha.

Quick start:
    from graha_engine import parse_instant, generate_dasha

    birth = parse_instant("1998-05-15", "14:30")
    result = generate_dasha(birth)
"""

from .tools.horoscope import (
    generate_dasha, generate_dasha_timeline, generate_horoscope, parse_instant,
)

__version__ = "3.0.0"
__all__ = [
    "generate_dasha", "generate_dasha_timeline", "generate_horoscope", "parse_instant",
]
