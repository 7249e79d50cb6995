"""Position of the sun and the Earth-orientation quantities derived with it.

Longitudes follow Bretagnon & Simon, *Planetary Programs and Tables from -4000
to +2800* (1986); the remaining expressions are from Meeus, *Astronomical
Algorithms*, 2nd edn. (1998). All angles are in degrees.
"""

from __future__ import annotations

import math

import numpy as np

from .angles import (
    angle,
    arcsin_degrees,
    arctan_degrees,
    cos_degrees,
    hr,
    mod,
    mod3,
    poly,
    sin_degrees,
    tan_degrees,
)
from .calendar import fixed_from_gregorian
from .location import Location
from .series import SeriesTable
from .timescales import J2000, julian_centuries, universal_from_local

__all__ = [
    "AUTUMN",
    "MEAN_SIDEREAL_YEAR",
    "MEAN_TROPICAL_YEAR",
    "SPRING",
    "SUMMER",
    "WINTER",
    "aberration",
    "apparent_from_local",
    "compute_sidereal_start",
    "declination",
    "equation_of_time",
    "estimate_prior_solar_longitude",
    "local_from_apparent",
    "midday",
    "midnight",
    "nutation",
    "obliquity",
    "precession",
    "right_ascension",
    "sidereal_from_moment",
    "sidereal_solar_longitude",
    "solar_longitude",
    "universal_from_apparent",
]

MEAN_TROPICAL_YEAR = 365.242189
MEAN_SIDEREAL_YEAR = 365.25636

SPRING = 0.0
SUMMER = 90.0
AUTUMN = 180.0
WINTER = 270.0

# Columns: amplitude (1e-7 rad), phase (degrees), rate (degrees per Julian century).
SOLAR_LONGITUDE_TERMS = SeriesTable(
    [
        403406, 195207, 119433, 112392, 3891, 2819, 1721,
        660, 350, 334, 314, 268, 242, 234, 158, 132, 129, 114,
        99, 93, 86, 78, 72, 68, 64, 46, 38, 37, 32, 29, 28, 27, 27,
        25, 24, 21, 21, 20, 18, 17, 14, 13, 13, 13, 12, 10, 10, 10, 10,
    ],
    [
        270.54861, 340.19128, 63.91854, 331.26220,
        317.843, 86.631, 240.052, 310.26, 247.23,
        260.87, 297.82, 343.14, 166.79, 81.53,
        3.50, 132.75, 182.95, 162.03, 29.8,
        266.4, 249.2, 157.6, 257.8, 185.1, 69.9,
        8.0, 197.1, 250.4, 65.3, 162.7, 341.5,
        291.6, 98.5, 146.7, 110.0, 5.2, 342.6,
        230.9, 256.1, 45.3, 242.9, 115.2, 151.8,
        285.3, 53.3, 126.6, 205.7, 85.9, 146.1,
    ],
    [
        0.9287892, 35999.1376958, 35999.4089666,
        35998.7287385, 71998.20261, 71998.4403,
        36000.35726, 71997.4812, 32964.4678,
        -19.4410, 445267.1117, 45036.8840, 3.1008,
        22518.4434, -19.9739, 65928.9345,
        9038.0293, 3034.7684, 33718.148, 3034.448,
        -2280.773, 29929.992, 31556.493, 149.588,
        9037.750, 107997.405, -4444.176, 151.771,
        67555.316, 31556.080, -4561.540,
        107996.706, 1221.655, 62894.167,
        31437.369, 14578.298, -31931.757,
        34777.243, 1221.999, 62894.511,
        -4442.039, 107997.909, 119.066, 16859.071,
        -4.578, 26895.292, -39.127, 12297.536, 90073.778,
    ],
)


def obliquity(tee: float) -> float:
    """Obliquity of the ecliptic at moment *tee*."""

    c = julian_centuries(tee)
    return angle(23, 26, 21.448) + poly(
        c, [0, angle(0, 0, -46.8150), angle(0, 0, -0.00059), angle(0, 0, 0.001813)]
    )


def equation_of_time(tee: float) -> float:
    """Equation of time, as a fraction of a day, at moment *tee*.

    Meeus (1998), p. 185. The magnitude is saturated at half a day, keeping
    the sign.
    """

    c = julian_centuries(tee)
    longitude = poly(c, [280.46645, 36000.76983, 0.0003032])
    anomaly = poly(c, [357.52910, 35999.05030, -0.0001559, -0.00000048])
    eccentricity = poly(c, [0.016708617, -0.000042037, -0.0000001236])
    y = tan_degrees(obliquity(tee) / 2) ** 2
    equation = (1 / (2 * math.pi)) * (
        y * sin_degrees(2 * longitude)
        - 2 * eccentricity * sin_degrees(anomaly)
        + 4 * eccentricity * y * sin_degrees(anomaly) * cos_degrees(2 * longitude)
        - 0.5 * y ** 2 * sin_degrees(4 * longitude)
        - 1.25 * eccentricity ** 2 * sin_degrees(2 * anomaly)
    )
    return math.copysign(min(abs(equation), hr(12)), equation)


def local_from_apparent(tee: float, location: Location) -> float:
    """Local mean time from sundial time *tee* at *location*."""

    return tee - equation_of_time(universal_from_local(tee, location))


def apparent_from_local(tee: float, location: Location) -> float:
    return tee + equation_of_time(universal_from_local(tee, location))


def universal_from_apparent(tee: float, location: Location) -> float:
    return universal_from_local(local_from_apparent(tee, location), location)


def midnight(date: int, location: Location) -> float:
    """Universal time of true (apparent) midnight starting fixed *date*."""

    return universal_from_apparent(date, location)


def midday(date: int, location: Location) -> float:
    return universal_from_apparent(date + hr(12), location)


def sidereal_from_moment(tee: float) -> float:
    """Mean sidereal time at moment *tee*, as an hour angle in ``[0, 360)``.

    Meeus (1998), p. 88.
    """

    c = (tee - J2000) / 36525
    return mod(
        poly(c, [280.46061837, 36525 * 360.98564736629, 0.000387933, -1 / 38710000]), 360
    )


def declination(tee: float, beta: float, lam: float) -> float:
    """Declination at moment *tee* of ecliptic latitude *beta*, longitude *lam*."""

    epsilon = obliquity(tee)
    return arcsin_degrees(
        sin_degrees(beta) * cos_degrees(epsilon)
        + cos_degrees(beta) * sin_degrees(epsilon) * sin_degrees(lam)
    )


def right_ascension(tee: float, beta: float, lam: float) -> float:
    """Right ascension in ``[0, 360)`` of ecliptic latitude *beta*, longitude *lam*."""

    epsilon = obliquity(tee)
    return arctan_degrees(
        sin_degrees(lam) * cos_degrees(epsilon) - tan_degrees(beta) * sin_degrees(epsilon),
        cos_degrees(lam),
    )


def nutation(tee: float) -> float:
    """Longitudinal nutation at moment *tee*."""

    c = julian_centuries(tee)
    a = poly(c, [124.90, -1934.134, 0.002063])
    b = poly(c, [201.11, 72001.5377, 0.00057])
    return -0.004778 * sin_degrees(a) - 0.0003667 * sin_degrees(b)


def aberration(tee: float) -> float:
    c = julian_centuries(tee)
    return 0.0000974 * cos_degrees(177.63 + 35999.01848 * c) - 0.005575


def solar_longitude(tee: float) -> float:
    """Apparent geocentric longitude of the sun in ``[0, 360)`` at moment *tee*."""

    c = julian_centuries(tee)
    correction = SOLAR_LONGITUDE_TERMS.evaluate(
        lambda x, y, z: x * np.sin(np.radians(y + z * c))
    )
    lam = 282.7771834 + 36000.76953744 * c + 0.000005729577951308232 * correction
    return mod(lam + aberration(tee) + nutation(tee), 360)


def precession(tee: float) -> float:
    """Precession in longitude at moment *tee*, taking J2000 coordinates as 0, 0.

    Meeus (1998), pp. 136-137.
    """

    c = julian_centuries(tee)
    eta = mod(
        poly(c, [0, angle(0, 0, 47.0029), angle(0, 0, -0.03302), angle(0, 0, 0.000060)]), 360
    )
    cap_p = mod(poly(c, [174.876384, angle(0, 0, -869.8089), angle(0, 0, 0.03536)]), 360)
    p = mod(
        poly(c, [0, angle(0, 0, 5029.0966), angle(0, 0, 1.11113), angle(0, 0, 0.000006)]), 360
    )
    arg = arctan_degrees(cos_degrees(eta) * sin_degrees(cap_p), cos_degrees(cap_p))
    return mod(p + cap_p - arg, 360)


def compute_sidereal_start() -> float:
    """Offset of the sidereal zodiac, fixed at the spring equinox of 1956."""

    reference = fixed_from_gregorian(1956, 3, 21)
    return precession(reference) + nutation(reference) - angle(23, 15, 0)


def sidereal_solar_longitude(tee: float, sidereal_start: float) -> float:
    """Sidereal longitude of the sun in ``[0, 360)`` at moment *tee*.

    *sidereal_start* is the value of :func:`compute_sidereal_start`, normally
    read from :attr:`almanac.config.EngineConfig.sidereal_start`.
    """

    return mod(solar_longitude(tee) - precession(tee) - nutation(tee) + sidereal_start, 360)


def estimate_prior_solar_longitude(lam: float, tee: float) -> float:
    """Approximate moment at or before *tee* when the solar longitude just exceeded *lam*."""

    rate = MEAN_TROPICAL_YEAR / 360
    tau = tee - rate * mod(solar_longitude(tee) - lam, 360)
    delta = mod3(solar_longitude(tau) - lam, -180, 180)
    return min(tee, tau - rate * delta)
