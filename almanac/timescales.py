"""Conversions between universal, dynamical, standard and local time."""

from __future__ import annotations

from functools import lru_cache
import math

from .angles import hr, poly
from .calendar import gregorian_date_difference, gregorian_year_from_fixed
from .location import Location

__all__ = [
    "J2000",
    "dynamical_from_universal",
    "ephemeris_correction",
    "julian_centuries",
    "local_from_standard",
    "local_from_universal",
    "standard_from_local",
    "standard_from_universal",
    "universal_from_dynamical",
    "universal_from_local",
    "universal_from_standard",
    "zone_from_longitude",
]

SECONDS_PER_DAY = 86400.0
DAYS_PER_CENTURY = 36525.0

# Noon at the start of Gregorian year 2000.
J2000 = hr(12) + 730120


def zone_from_longitude(longitude: float) -> float:
    """Difference between UT and local mean time at *longitude*, in days."""

    return longitude / 360.0


def universal_from_local(tee_ell: float, location: Location) -> float:
    return tee_ell - zone_from_longitude(location.longitude)


def local_from_universal(tee_rom_u: float, location: Location) -> float:
    return tee_rom_u + zone_from_longitude(location.longitude)


def standard_from_universal(tee_rom_u: float, location: Location) -> float:
    return tee_rom_u + location.zone


def universal_from_standard(tee_rom_s: float, location: Location) -> float:
    return tee_rom_s - location.zone


def standard_from_local(tee_ell: float, location: Location) -> float:
    return standard_from_universal(universal_from_local(tee_ell, location), location)


def local_from_standard(tee_rom_s: float, location: Location) -> float:
    return local_from_universal(universal_from_standard(tee_rom_s, location), location)


def _centuries_from_1900(year: int) -> float:
    return gregorian_date_difference((1900, 1, 1), (year, 7, 1)) / DAYS_PER_CENTURY


@lru_cache(maxsize=None)
def _delta_t_for_year(year: int) -> float:
    """Dynamical minus universal time (days) for the Gregorian *year*.

    Meeus, *Astronomical Algorithms* (1991) for 1600-1986 and the NASA eclipse
    polynomials elsewhere. The models are not blended at range boundaries.
    """

    y2000 = year - 2000
    y1820 = (year - 1820) / 100.0

    if 2051 <= year <= 2150:
        return (-20 + 32 * y1820 ** 2 - 0.5628 * (2150 - year)) / SECONDS_PER_DAY
    if 2006 <= year <= 2050:
        return poly(y2000, [62.92, 0.32217, 0.005589]) / SECONDS_PER_DAY
    if 1987 <= year <= 2005:
        return poly(
            y2000, [63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599]
        ) / SECONDS_PER_DAY
    if 1900 <= year <= 1986:
        return poly(
            _centuries_from_1900(year),
            [-0.00002, 0.000297, 0.025184, -0.181133, 0.553040, -0.861938, 0.677066, -0.212591],
        )
    if 1800 <= year <= 1899:
        return poly(
            _centuries_from_1900(year),
            [
                -0.000009, 0.003844, 0.083563, 0.865736, 4.867575, 15.845535,
                31.332267, 38.291999, 28.316289, 11.636204, 2.043794,
            ],
        )
    if 1700 <= year <= 1799:
        return poly(
            year - 1700, [8.118780842, -0.005092142, 0.003336121, -0.0000266484]
        ) / SECONDS_PER_DAY
    if 1600 <= year <= 1699:
        return poly(year - 1600, [120, -0.9808, -0.01532, 0.000140272128]) / SECONDS_PER_DAY
    if 500 <= year <= 1599:
        return poly(
            (year - 1000) / 100.0,
            [1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073],
        ) / SECONDS_PER_DAY
    if -500 < year < 500:
        return poly(
            year / 100.0,
            [10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521],
        ) / SECONDS_PER_DAY
    return poly(y1820, [-20, 0, 32]) / SECONDS_PER_DAY


def ephemeris_correction(tee: float) -> float:
    """Dynamical time minus universal time (in days) for moment *tee*."""

    return _delta_t_for_year(gregorian_year_from_fixed(math.floor(tee)))


def universal_from_dynamical(tee: float) -> float:
    return tee - ephemeris_correction(tee)


def dynamical_from_universal(tee_rom_u: float) -> float:
    return tee_rom_u + ephemeris_correction(tee_rom_u)


def julian_centuries(tee: float) -> float:
    """Julian centuries of dynamical time since J2000 at universal moment *tee*."""

    return (dynamical_from_universal(tee) - J2000) / DAYS_PER_CENTURY
