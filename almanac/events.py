"""Solstices, equinoxes, new moons and lunar phases."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import json
import logging
from typing import Dict, List, Optional

import numpy as np

from .angles import mod, poly, sin_degrees
from .calendar import gregorian_new_year
from .config import EngineConfig, get_config
from .lunar import MEAN_SYNODIC_MONTH, lunar_longitude
from .rootfinding import ConvergenceError, final_satisfying, invert_angular, next_satisfying
from .series import SeriesTable
from .solar import AUTUMN, MEAN_TROPICAL_YEAR, SPRING, SUMMER, WINTER, solar_longitude
from .timescales import J2000, universal_from_dynamical

__all__ = [
    "FIRST_QUARTER",
    "FULL",
    "LAST_QUARTER",
    "LUNAR_PHASES",
    "NEW",
    "PhaseEvent",
    "Seasons",
    "lunar_phase",
    "lunar_phase_at_or_after",
    "lunar_phase_at_or_before",
    "lunar_phase_events",
    "new_moon_at_or_after",
    "new_moon_before",
    "nth_new_moon",
    "seasons_of_year",
    "solar_longitude_after",
]

LOGGER = logging.getLogger(__name__)

NEW = 0.0
FIRST_QUARTER = 90.0
FULL = 180.0
LAST_QUARTER = 270.0

LUNAR_PHASES: Dict[str, float] = {
    "new_moon": NEW,
    "first_quarter": FIRST_QUARTER,
    "full_moon": FULL,
    "last_quarter": LAST_QUARTER,
}

# Index of the new moon of January 11, 1 (R.D.) counted from the mean new
# moon nearest J2000.
NEW_MOON_EPOCH_INDEX = 24724
LUNATIONS_PER_CENTURY = 1236.85

# Columns: amplitude (days), power of E, multiples of M, M' and F.
NEW_MOON_PERIODIC_TERMS = SeriesTable(
    [
        -0.40720, 0.17241, 0.01608, 0.01039, 0.00739, -0.00514,
        0.00208, -0.00111, -0.00057, 0.00056, -0.00042, 0.00042,
        0.00038, -0.00024, -0.00007, 0.00004, 0.00004, 0.00003,
        0.00003, -0.00003, 0.00003, -0.00002, -0.00002, 0.00002,
    ],
    [0, 1, 0, 0, 1, 1, 2, 0, 0, 1, 0, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 1, 0, 0, -1, 1, 2, 0, 0, 1, 0, 1, 1, -1, 2, 0, 3, 1, 0, 1, -1, -1, 1, 0],
    [1, 0, 2, 0, 1, 1, 0, 1, 1, 2, 3, 0, 0, 2, 1, 2, 0, 1, 2, 1, 1, 1, 3, 4],
    [0, 0, 0, 2, 0, 0, 0, -2, 2, 0, 0, 2, -2, 0, 0, -2, 0, -2, 2, 2, 2, -2, 0, 0],
)

# Planetary arguments. Columns: phase (degrees), rate (degrees per lunation),
# amplitude (days).
NEW_MOON_ADDITIONAL_TERMS = SeriesTable(
    [
        251.88, 251.83, 349.42, 84.66, 141.74, 207.14, 154.84,
        34.52, 207.19, 291.34, 161.72, 239.56, 331.55,
    ],
    [
        0.016321, 26.651886, 36.412478, 18.206239, 53.303771, 2.453732, 7.306860,
        27.261239, 0.121824, 1.844379, 24.198154, 25.513099, 3.592518,
    ],
    [
        0.000165, 0.000164, 0.000126, 0.000110, 0.000062, 0.000060, 0.000056,
        0.000047, 0.000042, 0.000040, 0.000037, 0.000035, 0.000023,
    ],
)


@dataclass(frozen=True)
class Seasons:
    """Moments (UT) at which the sun reaches each cardinal longitude in a year."""

    spring: float
    summer: float
    autumn: float
    winter: float


@dataclass(frozen=True)
class PhaseEvent:
    name: str
    phase: float
    moment: float


def solar_longitude_after(lam: float, tee: float) -> float:
    """First moment (UT) at or after *tee* when the solar longitude is *lam* degrees."""

    rate = MEAN_TROPICAL_YEAR / 360
    tau = tee + rate * mod(lam - solar_longitude(tee), 360)
    lower = max(tee, tau - 5)
    upper = tau + 5
    return invert_angular(solar_longitude, lam, lower, upper)


def seasons_of_year(year: int) -> Seasons:
    """Equinoxes and solstices of the Gregorian *year*."""

    start = gregorian_new_year(year)
    return Seasons(
        spring=solar_longitude_after(SPRING, start),
        summer=solar_longitude_after(SUMMER, start),
        autumn=solar_longitude_after(AUTUMN, start),
        winter=solar_longitude_after(WINTER, start),
    )


@lru_cache(maxsize=4096)
def nth_new_moon(n: int) -> float:
    """Moment (UT) of the *n*-th new moon after (or before) that of R.D. 1-01-11.

    Meeus, *Astronomical Algorithms*, corrected 2nd edn. (2005), ch. 49. This
    is a closed-form approximation, not a search.
    """

    k = n - NEW_MOON_EPOCH_INDEX
    c = k / LUNATIONS_PER_CENTURY
    approx = J2000 + poly(
        c, [5.09766, MEAN_SYNODIC_MONTH * LUNATIONS_PER_CENTURY, 0.00015437, -0.000000150, 0.00000000073]
    )
    e = poly(c, [1, -0.002516, -0.0000074])
    solar_anomaly = poly(c, [2.5534, 29.10535670 * LUNATIONS_PER_CENTURY, -0.0000014, -0.00000011])
    lunar_anomaly = poly(
        c, [201.5643, 385.81693528 * LUNATIONS_PER_CENTURY, 0.0107582, 0.00001238, -0.000000058]
    )
    moon_argument = poly(
        c, [160.7108, 390.67050284 * LUNATIONS_PER_CENTURY, -0.0016118, -0.00000227, 0.000000011]
    )
    omega = poly(c, [124.7746, -1.56375588 * LUNATIONS_PER_CENTURY, 0.0020672, 0.00000215])

    correction = -0.00017 * sin_degrees(omega) + NEW_MOON_PERIODIC_TERMS.evaluate(
        lambda v, w, x, y, z: (
            v * e ** w * np.sin(np.radians(x * solar_anomaly + y * lunar_anomaly + z * moon_argument))
        )
    )
    extra = 0.000325 * sin_degrees(poly(c, [299.77, 132.8475848, -0.009173]))
    additional = NEW_MOON_ADDITIONAL_TERMS.evaluate(
        lambda i, j, amplitude: amplitude * np.sin(np.radians(i + j * k))
    )
    return universal_from_dynamical(approx + correction + extra + additional)


def lunar_phase(tee: float) -> float:
    """Lunar phase in ``[0, 360)`` at moment *tee*.

    0 is new moon, 90 first quarter, 180 full moon and 270 last quarter. Near
    a wrap-around the elongation is checked against the phase implied by the
    nearest enumerated new moon, keeping the function monotonic.
    """

    phi = mod(lunar_longitude(tee) - solar_longitude(tee), 360)
    t0 = nth_new_moon(0)
    n = round((tee - t0) / MEAN_SYNODIC_MONTH)
    phi_prime = 360 * mod((tee - nth_new_moon(n)) / MEAN_SYNODIC_MONTH, 1)
    if abs(phi - phi_prime) > 180:
        return phi_prime
    return phi


def lunar_phase_at_or_before(phi: float, tee: float) -> float:
    """Last moment (UT) at or before *tee* when the lunar phase was *phi* degrees."""

    tau = tee - (MEAN_SYNODIC_MONTH / 360) * mod(lunar_phase(tee) - phi, 360)
    lower = tau - 2
    upper = min(tee, tau + 2)
    return invert_angular(lunar_phase, phi, lower, upper)


def lunar_phase_at_or_after(phi: float, tee: float) -> float:
    """First moment (UT) at or after *tee* when the lunar phase is *phi* degrees."""

    tau = tee + (MEAN_SYNODIC_MONTH / 360) * mod(phi - lunar_phase(tee), 360)
    lower = max(tee, tau - 2)
    upper = tau + 2
    return invert_angular(lunar_phase, phi, lower, upper)


def _estimated_lunation(tee: float) -> int:
    t0 = nth_new_moon(0)
    return round((tee - t0) / MEAN_SYNODIC_MONTH - lunar_phase(tee) / 360)


def new_moon_before(tee: float, config: Optional[EngineConfig] = None) -> float:
    """Moment (UT) of the last new moon before *tee*."""

    config = config or get_config()
    n = _estimated_lunation(tee)
    k = final_satisfying(n - 1, lambda i: nth_new_moon(i) < tee, config.max_new_moon_scan)
    if k is None:
        LOGGER.warning(json.dumps({"event": "new_moon_scan_exhausted", "tee": tee, "start": n - 1}))
        raise ConvergenceError("new_moon_before", f"no bracket within {config.max_new_moon_scan} lunations")
    return nth_new_moon(k)


def new_moon_at_or_after(tee: float, config: Optional[EngineConfig] = None) -> float:
    """Moment (UT) of the first new moon at or after *tee*."""

    config = config or get_config()
    n = _estimated_lunation(tee)
    k = next_satisfying(n, lambda i: nth_new_moon(i) >= tee, config.max_new_moon_scan)
    if k is None:
        LOGGER.warning(json.dumps({"event": "new_moon_scan_exhausted", "tee": tee, "start": n}))
        raise ConvergenceError(
            "new_moon_at_or_after", f"no bracket within {config.max_new_moon_scan} lunations"
        )
    return nth_new_moon(k)


def lunar_phase_events(start: float, end: float) -> List[PhaseEvent]:
    """Principal lunar phases with moments in ``[start, end)``, in time order."""

    events: List[PhaseEvent] = []
    for name, phase in LUNAR_PHASES.items():
        moment = lunar_phase_at_or_after(phase, start)
        while moment < end:
            events.append(PhaseEvent(name=name, phase=phase, moment=moment))
            moment = lunar_phase_at_or_after(phase, moment + 1)
    events.sort(key=lambda event: event.moment)
    LOGGER.debug(json.dumps({"event": "lunar_phase_events", "start": start, "end": end, "count": len(events)}))
    return events
