"""Sunrise, sunset, twilight, moonrise and moonset.

All event functions take a fixed date and a :class:`~almanac.location.Location`
and return a moment in the location's standard time, or ``None`` when the
event does not happen on that date.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Callable, Dict, Optional, Tuple

from .angles import (
    angle,
    arccos_degrees,
    arcsin_degrees,
    cos_degrees,
    hr,
    mod3,
    sec,
    sin_degrees,
    tan_degrees,
    time_from_moment,
)
from .config import EngineConfig, get_config
from .events import FULL, lunar_phase
from .location import Location
from .lunar import topocentric_lunar_altitude
from .rootfinding import ConvergenceError, binary_search, is_bracketed
from .solar import declination, local_from_apparent, midday, solar_longitude
from .timescales import (
    standard_from_local,
    standard_from_universal,
    universal_from_local,
    universal_from_standard,
)

__all__ = [
    "ASTRONOMICAL",
    "CIVIL",
    "NAUTICAL",
    "TWILIGHT_DEPRESSIONS",
    "approx_moment_of_depression",
    "dawn",
    "daytime_temporal_hour",
    "depression_status",
    "dusk",
    "moment_of_depression",
    "moonrise",
    "moonset",
    "nighttime_temporal_hour",
    "observed_lunar_altitude",
    "refraction",
    "sine_offset",
    "standard_from_sundial",
    "sunrise",
    "sunset",
    "twilight_depression",
]

LOGGER = logging.getLogger(__name__)

CIVIL = 6.0
NAUTICAL = 12.0
ASTRONOMICAL = 18.0

TWILIGHT_DEPRESSIONS: Dict[str, float] = {
    "civil": CIVIL,
    "nautical": NAUTICAL,
    "astronomical": ASTRONOMICAL,
}

EARTH_MEAN_RADIUS_M = 6.372e6
SOLAR_SEMI_DIAMETER = angle(0, 16, 0)
LUNAR_SEMI_DIAMETER = angle(0, 16, 0)
LUNAR_SCAN_STEPS = 24


def twilight_depression(name: str) -> float:
    """Solar depression angle, in degrees, for a named twilight."""

    try:
        return TWILIGHT_DEPRESSIONS[name.lower()]
    except KeyError as exc:
        raise ValueError(f"Unsupported twilight option: {name}") from exc


def sine_offset(tee: float, location: Location, alpha: float) -> float:
    """Sine of the hour-angle offset between 6 a.m./p.m. and a solar depression of *alpha*.

    *tee* is local mean time. A result outside ``[-1, 1]`` means the depression
    is never reached that day.
    """

    phi = location.latitude
    tee_prime = universal_from_local(tee, location)
    delta = declination(tee_prime, 0.0, solar_longitude(tee_prime))
    return tan_degrees(phi) * tan_degrees(delta) + sin_degrees(alpha) / (
        cos_degrees(delta) * cos_degrees(phi)
    )


def approx_moment_of_depression(
    tee: float, location: Location, alpha: float, early: bool
) -> Optional[float]:
    """Local moment near *tee* when the sun is *alpha* degrees below the horizon.

    *early* selects the morning event, otherwise the evening one. Returns
    ``None`` when the depression is not reached.
    """

    attempt = sine_offset(tee, location, alpha)
    date = math.floor(tee)
    if alpha >= 0:
        alternate = date if early else date + 1
    else:
        alternate = date + hr(12)
    value = sine_offset(alternate, location, alpha) if abs(attempt) > 1 else attempt
    if abs(value) > 1:
        return None
    offset = mod3(arcsin_degrees(value) / 360, hr(-12), hr(12))
    apparent = date + (hr(6) - offset if early else hr(18) + offset)
    return local_from_apparent(apparent, location)


def moment_of_depression(
    approx: float,
    location: Location,
    alpha: float,
    early: bool,
    config: Optional[EngineConfig] = None,
) -> Optional[float]:
    """Refine :func:`approx_moment_of_depression` until successive estimates agree within 30 s.

    Raises
    ------
    ConvergenceError
        If the estimates have not settled after
        ``config.max_depression_iterations`` refinements.
    """

    config = config or get_config()
    current = approx
    for iteration in range(1, config.max_depression_iterations + 1):
        tee = approx_moment_of_depression(current, location, alpha, early)
        if tee is None:
            return None
        if abs(current - tee) < sec(30):
            LOGGER.debug(json.dumps({"event": "depression_converged", "alpha": alpha, "iterations": iteration}))
            return tee
        current = tee
    LOGGER.warning(
        json.dumps(
            {"event": "depression_not_converged", "approx": approx, "alpha": alpha,
             "latitude": location.latitude, "iterations": config.max_depression_iterations}
        )
    )
    raise ConvergenceError(
        "moment_of_depression", f"no fixed point after {config.max_depression_iterations} iterations"
    )


def dawn(date: int, location: Location, alpha: float) -> Optional[float]:
    """Standard time in the morning of *date* when the solar depression is *alpha*."""

    result = moment_of_depression(date + hr(6), location, alpha, True)
    if result is None:
        return None
    return standard_from_local(result, location)


def dusk(date: int, location: Location, alpha: float) -> Optional[float]:
    """Standard time in the evening of *date* when the solar depression is *alpha*."""

    result = moment_of_depression(date + hr(18), location, alpha, False)
    if result is None:
        return None
    return standard_from_local(result, location)


def refraction(location: Location) -> float:
    """Refraction at the horizon plus the dip for the observer's elevation, in degrees."""

    h = max(0.0, location.elevation)
    dip = arccos_degrees(EARTH_MEAN_RADIUS_M / (EARTH_MEAN_RADIUS_M + h))
    return angle(0, 34, 0) + dip + angle(0, 0, 19) * math.sqrt(h)


def _horizon_depression(location: Location) -> float:
    return refraction(location) + SOLAR_SEMI_DIAMETER


def sunrise(date: int, location: Location) -> Optional[float]:
    return dawn(date, location, _horizon_depression(location))


def sunset(date: int, location: Location) -> Optional[float]:
    return dusk(date, location, _horizon_depression(location))


def depression_status(date: int, location: Location, alpha: float) -> str:
    """Classify the solar depression *alpha* on *date* at *location*.

    Returns ``"ok"`` when both the morning and evening events occur,
    otherwise ``"polar_day"`` if the sun stays above the depression at local
    noon or ``"polar_night"`` if it stays below.
    """

    if dawn(date, location, alpha) is not None and dusk(date, location, alpha) is not None:
        return "ok"
    noon = midday(date, location)
    delta = declination(noon, 0.0, solar_longitude(noon))
    noon_altitude = 90.0 - abs(location.latitude - delta)
    return "polar_night" if noon_altitude < -alpha else "polar_day"


def observed_lunar_altitude(tee: float, location: Location) -> float:
    """Altitude of the moon's upper limb seen from *location*, with refraction and elevation."""

    return topocentric_lunar_altitude(tee, location) + refraction(location) + LUNAR_SEMI_DIAMETER


def _lunar_offset(tee: float, location: Location) -> float:
    alt = observed_lunar_altitude(tee, location)
    polar_distance = 90 - abs(location.latitude)
    if polar_distance <= 0:
        return 0.0
    return alt / (4 * polar_distance)


def _scan_for_crossing(
    tee: float, predicate: Callable[[float], bool]
) -> Optional[Tuple[float, float]]:
    """First hourly bracket in ``[tee, tee + 1]`` where *predicate* turns true."""

    previous = tee
    for step in range(1, LUNAR_SCAN_STEPS + 1):
        current = tee + step / LUNAR_SCAN_STEPS
        if is_bracketed(previous, current, predicate):
            return previous, current
        previous = current
    return None


def _lunar_crossing(
    approx: float,
    tee: float,
    predicate: Callable[[float], bool],
    config: EngineConfig,
) -> Optional[float]:
    lower, upper = approx - hr(6), approx + hr(6)
    if not is_bracketed(lower, upper, predicate):
        bracket = _scan_for_crossing(tee, predicate)
        if bracket is None:
            return None
        lower, upper = bracket
    return binary_search(lower, upper, predicate, hr(1 / 60), config.max_bisection_steps)


def moonrise(date: int, location: Location, config: Optional[EngineConfig] = None) -> Optional[float]:
    """Standard time of moonrise on *date*, or ``None`` if the moon does not rise."""

    config = config or get_config()
    tee = universal_from_standard(date, location)
    waning = lunar_phase(tee) > FULL
    offset = _lunar_offset(tee, location)
    if waning and offset > 0:
        approx = tee + 1 - offset
    elif waning:
        approx = tee - offset
    else:
        approx = tee + 0.5 + offset
    rise = _lunar_crossing(approx, tee, lambda x: observed_lunar_altitude(x, location) > 0, config)
    if rise is None or rise >= tee + 1:
        return None
    return max(standard_from_universal(rise, location), date)


def moonset(date: int, location: Location, config: Optional[EngineConfig] = None) -> Optional[float]:
    """Standard time of moonset on *date*, or ``None`` if the moon does not set."""

    config = config or get_config()
    tee = universal_from_standard(date, location)
    waxing = lunar_phase(tee) < FULL
    offset = _lunar_offset(tee, location)
    if waxing and offset > 0:
        approx = tee + offset
    elif waxing:
        approx = tee + 1 + offset
    else:
        approx = tee - offset + 0.5
    moment = _lunar_crossing(approx, tee, lambda x: observed_lunar_altitude(x, location) < 0, config)
    if moment is None or moment >= tee + 1:
        return None
    return max(standard_from_universal(moment, location), date)


def daytime_temporal_hour(date: int, location: Location) -> Optional[float]:
    """One twelfth of the time between sunrise and sunset on *date*, in days."""

    rise = sunrise(date, location)
    down = sunset(date, location)
    if rise is None or down is None:
        return None
    return (down - rise) / 12


def nighttime_temporal_hour(date: int, location: Location) -> Optional[float]:
    """One twelfth of the time between sunset on *date* and the next sunrise, in days."""

    down = sunset(date, location)
    rise = sunrise(date + 1, location)
    if rise is None or down is None:
        return None
    return (rise - down) / 12


def standard_from_sundial(tee: float, location: Location) -> Optional[float]:
    """Standard time of the temporal (seasonal-hour) moment *tee* at *location*.

    Temporal hour 6 is sunrise and 18 is sunset. Returns ``None`` when the
    relevant temporal hour is undefined.
    """

    date = math.floor(tee)
    hour = 24 * time_from_moment(tee)
    if 6 <= hour <= 18:
        h = daytime_temporal_hour(date, location)
        if h is None:
            return None
        return sunrise(date, location) + (hour - 6) * h
    if hour < 6:
        h = nighttime_temporal_hour(date - 1, location)
        if h is None:
            return None
        return sunset(date - 1, location) + (hour + 6) * h
    h = nighttime_temporal_hour(date, location)
    if h is None:
        return None
    return sunset(date, location) + (hour - 18) * h
