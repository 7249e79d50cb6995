"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Twilight(str, Enum):
    """Enumeration of supported twilight definitions."""

    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"


class ObserverQueryParams(BaseModel):
    """Observer position and calendar date shared by ``/sun`` and ``/moon``."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., gt=-180.0, le=180.0, description="Longitude in degrees")
    local_date: date = Field(..., alias="date", description="Local calendar date (YYYY-MM-DD)")
    elev_m: float = Field(0.0, ge=0.0, description="Observer elevation in meters")
    zone_hours: float = Field(
        0.0,
        gt=-24.0,
        lt=24.0,
        description="Offset of the location's standard time from UT, in hours",
    )


class SunQueryParams(ObserverQueryParams):
    """Validated query parameters for the ``/sun`` endpoint."""

    twilight: Twilight = Field(Twilight.civil, description="Twilight definition for dawn and dusk")


class MoonQueryParams(ObserverQueryParams):
    """Validated query parameters for the ``/moon`` endpoint."""


class YearQueryParams(BaseModel):
    """Gregorian year for ``/seasons`` and ``/phases``."""

    year: int = Field(..., ge=1, le=9998, description="Gregorian year")


class SunResponse(BaseModel):
    """Sunrise, sunset and twilight for one date, in the location's standard time."""

    ok: bool = True
    status: str = Field(..., description="ok, polar_day or polar_night")
    local_date: date = Field(..., description="Requested local date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    elevation_m: float = Field(..., description="Elevation above mean sea level")
    zone_hours: float = Field(..., description="Standard-time offset in hours")
    twilight: Twilight = Field(..., description="Applied twilight definition")
    sunrise: Optional[str] = Field(None, description="Sunrise (ISO-8601, standard time)")
    sunset: Optional[str] = Field(None, description="Sunset (ISO-8601, standard time)")
    dawn: Optional[str] = Field(None, description="Start of morning twilight")
    dusk: Optional[str] = Field(None, description="End of evening twilight")
    daytime_hour_minutes: Optional[float] = Field(
        None, description="Length of a daytime temporal hour in minutes"
    )
    nighttime_hour_minutes: Optional[float] = Field(
        None, description="Length of the following nighttime temporal hour in minutes"
    )


class MoonResponse(BaseModel):
    """Lunar phase, moonrise and moonset for one date."""

    ok: bool = True
    local_date: date = Field(..., description="Requested local date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    phase_angle: float = Field(..., description="Lunar phase at local midnight, degrees")
    moonrise: Optional[str] = Field(None, description="Moonrise (ISO-8601, standard time)")
    moonset: Optional[str] = Field(None, description="Moonset (ISO-8601, standard time)")
    crescent_visible: bool = Field(..., description="Whether a new crescent is visible on the eve of the date")


class SeasonsResponse(BaseModel):
    """Equinoxes and solstices of one year, in UTC."""

    ok: bool = True
    year: int
    spring: str
    summer: str
    autumn: str
    winter: str


class PhaseItem(BaseModel):
    name: str
    phase: float
    moment_utc: str


class PhasesResponse(BaseModel):
    """Principal lunar phases of one year, in time order."""

    ok: bool = True
    year: int
    phases: List[PhaseItem]


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    sidereal_start: float
    limits: Dict[str, int]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
