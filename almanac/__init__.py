"""Solar and lunar event engine for the Almanac API."""

from .calendar import datetime_from_moment, fixed_from_gregorian, gregorian_from_fixed
from .config import EngineConfig, get_config
from .events import lunar_phase, lunar_phase_events, new_moon_at_or_after, new_moon_before, seasons_of_year
from .location import Location
from .riseset import dawn, depression_status, dusk, moonrise, moonset, sunrise, sunset
from .rootfinding import AstronomyError, ConvergenceError
from .visibility import phasis_on_or_after, phasis_on_or_before, visible_crescent

__all__ = [
    "AstronomyError",
    "ConvergenceError",
    "EngineConfig",
    "Location",
    "datetime_from_moment",
    "dawn",
    "depression_status",
    "dusk",
    "fixed_from_gregorian",
    "get_config",
    "gregorian_from_fixed",
    "lunar_phase",
    "lunar_phase_events",
    "moonrise",
    "moonset",
    "new_moon_at_or_after",
    "new_moon_before",
    "phasis_on_or_after",
    "phasis_on_or_before",
    "seasons_of_year",
    "sunrise",
    "sunset",
    "visible_crescent",
]
