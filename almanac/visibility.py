"""Evening visibility of the young crescent moon."""

from __future__ import annotations

import json
import logging
import math
from typing import Optional

from .angles import arccos_degrees, cos_degrees
from .config import EngineConfig, get_config
from .events import FIRST_QUARTER, NEW, lunar_phase, lunar_phase_at_or_before
from .location import Location
from .lunar import lunar_altitude, lunar_latitude
from .riseset import dusk
from .rootfinding import next_satisfying
from .timescales import universal_from_standard

__all__ = [
    "arc_of_light",
    "phasis_on_or_after",
    "phasis_on_or_before",
    "shaukat_criterion",
    "simple_best_view",
    "visible_crescent",
]

LOGGER = logging.getLogger(__name__)

BEST_VIEW_DEPRESSION = 4.5
MIN_ARC_OF_LIGHT = 10.6
MAX_ARC_OF_LIGHT = 90.0
MIN_LUNAR_ALTITUDE = 4.1


def arc_of_light(tee: float) -> float:
    """Angular separation of the sun and moon at moment *tee*, in degrees."""

    return arccos_degrees(cos_degrees(lunar_latitude(tee)) * cos_degrees(lunar_phase(tee)))


def simple_best_view(date: int, location: Location) -> float:
    """Universal time on the evening of *date* best suited to sighting the crescent."""

    dark = dusk(date, location, BEST_VIEW_DEPRESSION)
    best = date + 1 if dark is None else dark
    return universal_from_standard(best, location)


def shaukat_criterion(date: int, location: Location) -> bool:
    """S. K. Shaukat's test for a visible crescent on the eve of *date*.

    Not intended for high elevations or polar regions.
    """

    tee = simple_best_view(date - 1, location)
    phase = lunar_phase(tee)
    h = lunar_altitude(tee, location)
    arcl = arc_of_light(tee)
    return (
        NEW < phase < FIRST_QUARTER
        and MIN_ARC_OF_LIGHT <= arcl <= MAX_ARC_OF_LIGHT
        and h > MIN_LUNAR_ALTITUDE
    )


def visible_crescent(date: int, location: Location) -> bool:
    return shaukat_criterion(date, location)


def _scan_for_crescent(start: int, location: Location, config: EngineConfig) -> Optional[int]:
    found = next_satisfying(
        start, lambda d: visible_crescent(d, location), config.max_phasis_scan_days
    )
    if found is None:
        LOGGER.info(
            json.dumps(
                {"event": "crescent_not_found", "start": start, "latitude": location.latitude,
                 "days": config.max_phasis_scan_days}
            )
        )
    return found


def phasis_on_or_before(
    date: int, location: Location, config: Optional[EngineConfig] = None
) -> Optional[int]:
    """Fixed date on or before *date* when the crescent first became visible.

    Returns ``None`` if no visible crescent turns up within
    ``config.max_phasis_scan_days`` days of the starting guess.
    """

    config = config or get_config()
    moon = math.floor(lunar_phase_at_or_before(NEW, date))
    age = date - moon
    tau = moon - 30 if age <= 3 and not visible_crescent(date, location) else moon
    return _scan_for_crescent(tau, location, config)


def phasis_on_or_after(
    date: int, location: Location, config: Optional[EngineConfig] = None
) -> Optional[int]:
    """Fixed date on or after *date* on whose eve the crescent first became visible."""

    config = config or get_config()
    moon = math.floor(lunar_phase_at_or_before(NEW, date))
    age = date - moon
    tau = moon + 29 if age >= 4 and visible_crescent(date - 1, location) else date
    return _scan_for_crescent(tau, location, config)
