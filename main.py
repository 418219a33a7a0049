"""
Graha.dev — FastAPI Backend v3.0
================================
Endpoints:
  GET /                 — Liveness banner
  GET /api/health       — Health check
  GET /horoscope        — Sun sign, Moon sign and Moon star for a date
  GET /dasha            — Running Vimshottari dasha for a birth date/time
  GET /dasha/timeline   — All maha dashas + antardashas from birth
  GET /match            — Porutham compatibility (by birth dates or by star names)
  GET /report           — PDF dasha report

Dates are YYYY-MM-DD and times HH:MM, both read as UTC.
"""

import io
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from graha_engine import (
    generate_dasha, generate_dasha_timeline, generate_horoscope, parse_instant,
)
from graha_engine.core.errors import GrahaError, IndexOutOfRange, MissingRequiredField
from graha_engine.tools.horoscope import utc_now
from matchmaker import generate_match, generate_match_by_names
from middleware import LoggingMiddleware, RequestIDMiddleware
from pdf_report import generate_pdf_report
from schemas import (
    DashaResponse, DashaTimelineResponse, ErrorResponse, HoroscopeResponse, MatchResponse,
)
from settings import (
    APP_NAME, APP_VERSION, AYANAMSA, CORS_ALLOW_ORIGINS, DEFAULT_BIRTH_TIME,
    LOG_LEVEL, PORT, REQUEST_LOGGING,
)

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger("graha")

ENDPOINTS = [
    "GET /horoscope?date=YYYY-MM-DD",
    "GET /dasha?date=YYYY-MM-DD&time=HH:MM",
    "GET /dasha/timeline?date=YYYY-MM-DD&time=HH:MM",
    "GET /match?b_date=YYYY-MM-DD&g_date=YYYY-MM-DD",
    "GET /match?boy_star=..&girl_star=..&boy_rasi=..&girl_rasi=..",
    "GET /report?date=YYYY-MM-DD&time=HH:MM&name=..",
]

ERRORS = {400: {"model": ErrorResponse}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("%s v%s starting (ayanamsa %.2f°)", APP_NAME, APP_VERSION, AYANAMSA)
    yield
    log.info("%s shutting down", APP_NAME)


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description="Vedic birth star, Vimshottari dasha and Porutham matching",
    lifespan=lifespan,
)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(LoggingMiddleware, mode=REQUEST_LOGGING)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error envelope ─────────────────────────────────────────────

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(GrahaError)
async def on_graha_error(request: Request, exc: GrahaError):
    if exc.status_code >= 500:
        log.error("%s on %s", type(exc).__name__, request.url.path, exc_info=exc)
    return _error(exc.status_code, str(exc))


@app.exception_handler(StarletteHTTPException)
async def on_http_exception(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) and exc.detail else str(exc)
    return _error(exc.status_code, detail)


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    return _error(422, f"Validation error: {exc.errors()}")


@app.exception_handler(Exception)
async def on_any_error(request: Request, exc: Exception):
    log.exception("Unhandled error on %s", request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


# ── Endpoints ──────────────────────────────────────────────────

@app.get("/", response_class=PlainTextResponse)
def root():
    return "Graha.dev API is Live! endpoints: /horoscope, /dasha, /match"


@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "service": APP_NAME,
        "version": APP_VERSION,
        "endpoints": ENDPOINTS,
    }


@app.get("/horoscope", response_model=HoroscopeResponse, responses=ERRORS)
def horoscope_endpoint(date: Optional[str] = None):
    instant = parse_instant(date) if date is not None else utc_now()
    return generate_horoscope(instant, AYANAMSA)


@app.get("/dasha", response_model=DashaResponse, response_model_exclude_none=True, responses=ERRORS)
def dasha_endpoint(date: Optional[str] = None, time: Optional[str] = None):
    if not date:
        raise MissingRequiredField("date", "Please provide ?date=YYYY-MM-DD")
    birth = parse_instant(date, time or DEFAULT_BIRTH_TIME)
    return generate_dasha(birth, utc_now(), AYANAMSA)


@app.get("/dasha/timeline", response_model=DashaTimelineResponse,
         response_model_exclude_none=True, responses=ERRORS)
def dasha_timeline_endpoint(date: Optional[str] = None, time: Optional[str] = None):
    if not date:
        raise MissingRequiredField("date", "Please provide ?date=YYYY-MM-DD")
    birth = parse_instant(date, time or DEFAULT_BIRTH_TIME)
    return generate_dasha_timeline(birth, utc_now(), AYANAMSA)


@app.get("/match", response_model=MatchResponse, responses=ERRORS)
def match_endpoint(
    b_date: Optional[str] = None,
    g_date: Optional[str] = None,
    b_time: Optional[str] = None,
    g_time: Optional[str] = None,
    boy_star: Optional[str] = None,
    girl_star: Optional[str] = None,
    boy_rasi: Optional[str] = None,
    girl_rasi: Optional[str] = None,
):
    # Method A: birth dates
    if b_date and g_date:
        return generate_match(parse_instant(b_date, b_time), parse_instant(g_date, g_time), AYANAMSA)

    # Method B: stars and rasis by name
    if boy_star and girl_star and boy_rasi and girl_rasi:
        try:
            return generate_match_by_names(boy_star, girl_star, boy_rasi, girl_rasi)
        except IndexOutOfRange as e:
            raise HTTPException(status_code=400, detail=str(e))

    raise MissingRequiredField(
        "b_date", "Please provide birth dates: ?b_date=YYYY-MM-DD&g_date=YYYY-MM-DD"
    )


@app.get("/report", responses=ERRORS)
def report_endpoint(
    date: Optional[str] = None,
    time: Optional[str] = None,
    name: str = Query("Native", max_length=80),
):
    if not date:
        raise MissingRequiredField("date", "Please provide ?date=YYYY-MM-DD")
    birth = parse_instant(date, time or DEFAULT_BIRTH_TIME)
    now = utc_now()
    pdf_bytes = generate_pdf_report(
        generate_horoscope(birth, AYANAMSA),
        generate_dasha_timeline(birth, now, AYANAMSA),
        name,
    )
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=dasha_{birth:%Y%m%d}.pdf"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
