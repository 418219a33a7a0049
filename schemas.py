from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    error: str


# ── /horoscope ─────────────────────────────────────────────────

class HoroscopeResponse(BaseModel):
    model_config = ConfigDict(json_schema_extra={
        "examples": [{
            "date": "Sun Apr 12 1992", "sun_sign": "Meena", "moon_sign": "Kataka",
            "moon_star": "Ashlesha", "moon_pada": 1,
        }]
    })

    date: str
    sun_sign: str
    moon_sign: str
    moon_star: str
    moon_pada: int = Field(..., ge=1, le=4)


# ── /dasha ─────────────────────────────────────────────────────

class DashaStatus(BaseModel):
    running_dasha: str
    time_remaining: str
    started_ago: Optional[str] = None


class DashaResponse(BaseModel):
    birth_date: str
    birth_star: str
    current_status: DashaStatus


class CurrentPeriod(BaseModel):
    maha_dasha: Optional[str] = None
    maha_dasha_start: Optional[str] = None
    maha_dasha_end: Optional[str] = None
    antardasha: Optional[str] = None
    antardasha_start: Optional[str] = None
    antardasha_end: Optional[str] = None


class Period(BaseModel):
    lord: str
    start: str
    end: str
    duration_years: float
    antardashas: Optional[List[Period]] = None


class DashaTimelineResponse(BaseModel):
    birth_date: str
    birth_star: str
    system: str = "Vimshottari"
    current: CurrentPeriod
    periods: List[Period]


# ── /match ─────────────────────────────────────────────────────

class Placement(BaseModel):
    star: str
    rasi: str


class Compatibility(BaseModel):
    score: str = Field(..., description='Points out of ten, e.g. "7/10"')
    status: str = Field(..., pattern="^(Poor|Average|Excellent)$")
    count_from_girl: int = Field(..., ge=1, le=27)


class MatchResponse(BaseModel):
    boy: Placement
    girl: Placement
    compatibility: Compatibility
