"""FastAPI application exposing the almanac engine."""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from almanac import ConvergenceError, Location, datetime_from_moment, get_config
from almanac.calendar import fixed_from_gregorian, gregorian_new_year
from almanac.events import lunar_phase, lunar_phase_events, seasons_of_year
from almanac.riseset import (
    dawn,
    daytime_temporal_hour,
    depression_status,
    dusk,
    moonrise,
    moonset,
    nighttime_temporal_hour,
    sunrise,
    sunset,
    twilight_depression,
)
from almanac.timescales import universal_from_standard
from almanac.visibility import visible_crescent
from models import (
    ErrorResponse,
    HealthResponse,
    MoonQueryParams,
    MoonResponse,
    ObserverQueryParams,
    PhaseItem,
    PhasesResponse,
    SeasonsResponse,
    SunQueryParams,
    SunResponse,
    YearQueryParams,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("almanac-api")

APP_DESCRIPTION = "Sunrise, sunset, twilight, moon phase and season calculations"

CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.environ.get("ALMANAC_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        config = get_config()
    except ValueError as exc:
        LOGGER.error(json.dumps({"event": "config_load_failed", "error": str(exc)}))
        raise
    LOGGER.info(json.dumps({"event": "startup", "sidereal_start": config.sidereal_start}))
    yield


app = FastAPI(
    title="Almanac API",
    description=APP_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _format_utc(moment: float) -> str:
    return datetime_from_moment(moment).isoformat().replace("+00:00", "Z")


def _format_standard(moment: Optional[float], location: Location) -> Optional[str]:
    if moment is None:
        return None
    return datetime_from_moment(moment, location.zone).isoformat()


def _minutes(days: Optional[float]) -> Optional[float]:
    if days is None:
        return None
    return round(days * 1440.0, 3)


def _location(params: ObserverQueryParams) -> Location:
    return Location.from_hours(params.lat, params.lon, params.elev_m, params.zone_hours)


def _fixed_date(params: ObserverQueryParams) -> int:
    day = params.local_date
    return fixed_from_gregorian(day.year, day.month, day.day)


def _log_request(event: str, start_time: float, **fields) -> None:
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(json.dumps({"event": event, **fields, "duration_ms": round(duration_ms, 3)}))


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return _error_response(400, "http_400", str(exc))


@app.exception_handler(ConvergenceError)
async def convergence_exception_handler(request: Request, exc: ConvergenceError) -> JSONResponse:
    return _error_response(500, "not_converged", str(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    config = asdict(get_config())
    sidereal_start = config.pop("sidereal_start")
    return HealthResponse(ok=True, sidereal_start=sidereal_start, limits=config)


@app.get("/sun", response_model=SunResponse, responses=ERROR_RESPONSES)
def sun_endpoint(params: SunQueryParams = Depends()) -> SunResponse:
    start_time = time.perf_counter()
    location = _location(params)
    date = _fixed_date(params)
    alpha = twilight_depression(params.twilight.value)

    response = SunResponse(
        status=depression_status(date, location, alpha),
        local_date=params.local_date,
        latitude=params.lat,
        longitude=params.lon,
        elevation_m=params.elev_m,
        zone_hours=params.zone_hours,
        twilight=params.twilight,
        sunrise=_format_standard(sunrise(date, location), location),
        sunset=_format_standard(sunset(date, location), location),
        dawn=_format_standard(dawn(date, location, alpha), location),
        dusk=_format_standard(dusk(date, location, alpha), location),
        daytime_hour_minutes=_minutes(daytime_temporal_hour(date, location)),
        nighttime_hour_minutes=_minutes(nighttime_temporal_hour(date, location)),
    )

    _log_request(
        "sun",
        start_time,
        lat=params.lat,
        lon=params.lon,
        date=params.local_date.isoformat(),
        twilight=params.twilight.value,
        status=response.status,
    )
    return response


@app.get("/moon", response_model=MoonResponse, responses=ERROR_RESPONSES)
def moon_endpoint(params: MoonQueryParams = Depends()) -> MoonResponse:
    start_time = time.perf_counter()
    location = _location(params)
    date = _fixed_date(params)

    response = MoonResponse(
        local_date=params.local_date,
        latitude=params.lat,
        longitude=params.lon,
        phase_angle=round(lunar_phase(universal_from_standard(date, location)), 6),
        moonrise=_format_standard(moonrise(date, location), location),
        moonset=_format_standard(moonset(date, location), location),
        crescent_visible=visible_crescent(date, location),
    )

    _log_request(
        "moon",
        start_time,
        lat=params.lat,
        lon=params.lon,
        date=params.local_date.isoformat(),
        phase_angle=response.phase_angle,
    )
    return response


@app.get("/seasons", response_model=SeasonsResponse, responses=ERROR_RESPONSES)
def seasons_endpoint(params: YearQueryParams = Depends()) -> SeasonsResponse:
    start_time = time.perf_counter()
    seasons = seasons_of_year(params.year)
    response = SeasonsResponse(
        year=params.year,
        spring=_format_utc(seasons.spring),
        summer=_format_utc(seasons.summer),
        autumn=_format_utc(seasons.autumn),
        winter=_format_utc(seasons.winter),
    )
    _log_request("seasons", start_time, year=params.year)
    return response


@app.get("/phases", response_model=PhasesResponse, responses=ERROR_RESPONSES)
def phases_endpoint(params: YearQueryParams = Depends()) -> PhasesResponse:
    start_time = time.perf_counter()
    events = lunar_phase_events(gregorian_new_year(params.year), gregorian_new_year(params.year + 1))
    response = PhasesResponse(
        year=params.year,
        phases=[
            PhaseItem(name=event.name, phase=event.phase, moment_utc=_format_utc(event.moment))
            for event in events
        ],
    )
    _log_request("phases", start_time, year=params.year, count=len(response.phases))
    return response
