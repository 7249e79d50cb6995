"""Position of the moon.

Mean elements and the periodic terms for longitude, latitude and distance are
from Meeus, *Astronomical Algorithms*, 2nd edn. (1998), pp. 337-342. Angles are
in degrees and the mean elements take Julian centuries as their argument.
"""

from __future__ import annotations

import numpy as np

from .angles import arcsin_degrees, cos_degrees, mod, mod3, poly, sin_degrees
from .location import Location
from .series import SeriesTable
from .solar import declination, nutation, right_ascension, sidereal_from_moment
from .timescales import julian_centuries

__all__ = [
    "MEAN_SYNODIC_MONTH",
    "lunar_altitude",
    "lunar_anomaly",
    "lunar_distance",
    "lunar_elongation",
    "lunar_latitude",
    "lunar_longitude",
    "lunar_parallax",
    "mean_lunar_longitude",
    "moon_node",
    "solar_anomaly",
    "topocentric_lunar_altitude",
]

MEAN_SYNODIC_MONTH = 29.530588861

EARTH_EQUATORIAL_RADIUS_M = 6378140.0
MEAN_LUNAR_DISTANCE_M = 385000560.0

# Columns: amplitude (1e-6 degree), then multiples of D, M, M' and F.
LUNAR_LONGITUDE_TERMS = SeriesTable(
    [
        6288774, 1274027, 658314, 213618, -185116, -114332,
        58793, 57066, 53322, 45758, -40923, -34720, -30383,
        15327, -12528, 10980, 10675, 10034, 8548, -7888,
        -6766, -5163, 4987, 4036, 3994, 3861, 3665, -2689,
        -2602, 2390, -2348, 2236, -2120, -2069, 2048, -1773,
        -1595, 1215, -1110, -892, -810, 759, -713, -700, 691,
        596, 549, 537, 520, -487, -399, -381, 351, -340, 330,
        327, -323, 299, 294,
    ],
    [
        0, 2, 2, 0, 0, 0, 2, 2, 2, 2, 0, 1, 0, 2, 0, 0, 4, 0, 4, 2, 2, 1,
        1, 2, 2, 4, 2, 0, 2, 2, 1, 2, 0, 0, 2, 2, 2, 4, 0, 3, 2, 4, 0, 2,
        2, 2, 4, 0, 4, 1, 2, 0, 1, 3, 4, 2, 0, 1, 2,
    ],
    [
        0, 0, 0, 0, 1, 0, 0, -1, 0, -1, 1, 0, 1, 0, 0, 0, 0, 0, 0, 1, 1,
        0, 1, -1, 0, 0, 0, 1, 0, -1, 0, -2, 1, 2, -2, 0, 0, -1, 0, 0, 1,
        -1, 2, 2, 1, -1, 0, 0, -1, 0, 1, 0, 1, 0, 0, -1, 2, 1, 0,
    ],
    [
        1, -1, 0, 2, 0, 0, -2, -1, 1, 0, -1, 0, 1, 0, 1, 1, -1, 3, -2,
        -1, 0, -1, 0, 1, 2, 0, -3, -2, -1, -2, 1, 0, 2, 0, -1, 1, 0,
        -1, 2, -1, 1, -2, -1, -1, -2, 0, 1, 4, 0, -2, 0, 2, 1, -2, -3,
        2, 1, -1, 3,
    ],
    [
        0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, -2, 2, -2, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, -2, 2, 0, 2, 0, 0, 0, 0,
        0, 0, -2, 0, 0, 0, 0, -2, -2, 0, 0, 0, 0, 0, 0, 0,
    ],
)

# Columns: amplitude (1e-6 degree), then multiples of D, M, M' and F.
LUNAR_LATITUDE_TERMS = SeriesTable(
    [
        5128122, 280602, 277693, 173237, 55413, 46271, 32573,
        17198, 9266, 8822, 8216, 4324, 4200, -3359, 2463, 2211,
        2065, -1870, 1828, -1794, -1749, -1565, -1491, -1475,
        -1410, -1344, -1335, 1107, 1021, 833, 777, 671, 607,
        596, 491, -451, 439, 422, 421, -366, -351, 331, 315,
        302, -283, -229, 223, 223, -220, -220, -185, 181,
        -177, 176, 166, -164, 132, -119, 115, 107,
    ],
    [
        0, 0, 0, 2, 2, 2, 2, 0, 2, 0, 2, 2, 2, 2, 2, 2, 2, 0, 4, 0, 0, 0,
        1, 0, 0, 0, 1, 0, 4, 4, 0, 4, 2, 2, 2, 2, 0, 2, 2, 2, 2, 4, 2, 2,
        0, 2, 1, 1, 0, 2, 1, 2, 0, 4, 4, 1, 4, 1, 4, 2,
    ],
    [
        0, 0, 0, 0, 0, 0, 0, 0, 0, 0, -1, 0, 0, 1, -1, -1, -1, 1, 0, 1,
        0, 1, 0, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, -1, 0, 0, 0, 0, 1, 1,
        0, -1, -2, 0, 1, 1, 1, 1, 1, 0, -1, 1, 0, -1, 0, 0, 0, -1, -2,
    ],
    [
        0, 1, 1, 0, -1, -1, 0, 2, 1, 2, 0, -2, 1, 0, -1, 0, -1, -1, -1,
        0, 0, -1, 0, 1, 1, 0, 0, 3, 0, -1, 1, -2, 0, 2, 1, -2, 3, 2, -3,
        -1, 0, 0, 1, 0, 1, 1, 0, 0, -2, -1, 1, -2, 2, -2, -1, 1, 1, -1,
        0, 0,
    ],
    [
        1, 1, -1, -1, 1, -1, 1, 1, -1, -1, -1, -1, 1, -1, 1, 1, -1, -1,
        -1, 1, 3, 1, 1, 1, -1, -1, -1, 1, -1, 1, -3, 1, -3, -1, -1, 1,
        -1, 1, -1, 1, 1, 1, 1, -1, 3, -1, -1, 1, -1, -1, 1, -1, 1, -1,
        -1, -1, -1, -1, -1, 1,
    ],
)

# Columns: amplitude (meters), then multiples of D, M, M' and F.
LUNAR_DISTANCE_TERMS = SeriesTable(
    [
        -20905355, -3699111, -2955968, -569925, 48888, -3149,
        246158, -152138, -170733, -204586, -129620, 108743,
        104755, 10321, 0, 79661, -34782, -23210, -21636, 24208,
        30824, -8379, -16675, -12831, -10445, -11650, 14403,
        -7003, 0, 10056, 6322, -9884, 5751, 0, -4950, 4130, 0,
        -3958, 0, 3258, 2616, -1897, -2117, 2354, 0, 0, -1423,
        -1117, -1571, -1739, 0, -4421, 0, 0, 0, 0, 1165, 0, 0, 8752,
    ],
    [
        0, 2, 2, 0, 0, 0, 2, 2, 2, 2, 0, 1, 0, 2, 0, 0, 4, 0, 4, 2, 2, 1,
        1, 2, 2, 4, 2, 0, 2, 2, 1, 2, 0, 0, 2, 2, 2, 4, 0, 3, 2, 4, 0, 2,
        2, 2, 4, 0, 4, 1, 2, 0, 1, 3, 4, 2, 0, 1, 2, 2,
    ],
    [
        0, 0, 0, 0, 1, 0, 0, -1, 0, -1, 1, 0, 1, 0, 0, 0, 0, 0, 0, 1, 1,
        0, 1, -1, 0, 0, 0, 1, 0, -1, 0, -2, 1, 2, -2, 0, 0, -1, 0, 0, 1,
        -1, 2, 2, 1, -1, 0, 0, -1, 0, 1, 0, 1, 0, 0, -1, 2, 1, 0, 0,
    ],
    [
        1, -1, 0, 2, 0, 0, -2, -1, 1, 0, -1, 0, 1, 0, 1, 1, -1, 3, -2,
        -1, 0, -1, 0, 1, 2, 0, -3, -2, -1, -2, 1, 0, 2, 0, -1, 1, 0,
        -1, 2, -1, 1, -2, -1, -1, -2, 0, 1, 4, 0, -2, 0, 2, 1, -2, -3,
        2, 1, -1, 3, -1,
    ],
    [
        0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, -2, 2, -2, 0, 0, 0, 0, 0,
        0, 0, 0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, -2, 2, 0, 2, 0, 0, 0, 0,
        0, 0, -2, 0, 0, 0, 0, -2, -2, 0, 0, 0, 0, 0, 0, 0, -2,
    ],
)


def mean_lunar_longitude(c: float) -> float:
    return mod(poly(c, [218.3164477, 481267.88123421, -0.0015786, 1 / 538841, -1 / 65194000]), 360)


def lunar_elongation(c: float) -> float:
    return mod(poly(c, [297.8501921, 445267.1114034, -0.0018819, 1 / 545868, -1 / 113065000]), 360)


def solar_anomaly(c: float) -> float:
    return mod(poly(c, [357.5291092, 35999.0502909, -0.0001536, 1 / 24490000]), 360)


def lunar_anomaly(c: float) -> float:
    return mod(poly(c, [134.9633964, 477198.8675055, 0.0087414, 1 / 69699, -1 / 14712000]), 360)


def moon_node(c: float) -> float:
    """Moon's argument of latitude."""

    return mod(poly(c, [93.2720950, 483202.0175233, -0.0036539, -1 / 3526000, 1 / 863310000]), 360)


def _eccentricity_factor(c: float) -> float:
    return poly(c, [1, -0.002516, -0.0000074])


def _periodic_terms(table: SeriesTable, c: float, wave=np.sin) -> float:
    """Sum *table* at Julian century *c*, damping each term by E**|M multiple|."""

    d = lunar_elongation(c)
    m = solar_anomaly(c)
    m_prime = lunar_anomaly(c)
    f = moon_node(c)
    e = _eccentricity_factor(c)
    return table.evaluate(
        lambda v, w, x, y, z: (
            v * e ** np.abs(x) * wave(np.radians(w * d + x * m + y * m_prime + z * f))
        )
    )


def lunar_longitude(tee: float) -> float:
    """Geocentric longitude of the moon in ``[0, 360)`` at moment *tee*."""

    c = julian_centuries(tee)
    l_prime = mean_lunar_longitude(c)
    correction = _periodic_terms(LUNAR_LONGITUDE_TERMS, c) / 1000000
    venus = (3958 / 1000000) * sin_degrees(119.75 + c * 131.849)
    jupiter = (318 / 1000000) * sin_degrees(53.09 + c * 479264.29)
    flat_earth = (1962 / 1000000) * sin_degrees(l_prime - moon_node(c))
    return mod(l_prime + correction + venus + jupiter + flat_earth + nutation(tee), 360)


def lunar_latitude(tee: float) -> float:
    """Geocentric latitude of the moon at moment *tee*."""

    c = julian_centuries(tee)
    l_prime = mean_lunar_longitude(c)
    m_prime = lunar_anomaly(c)
    f = moon_node(c)
    beta = _periodic_terms(LUNAR_LATITUDE_TERMS, c) / 1000000
    venus = (175 / 1000000) * (
        sin_degrees(119.75 + c * 131.849 + f) + sin_degrees(119.75 + c * 131.849 - f)
    )
    flat_earth = (
        (-2235 / 1000000) * sin_degrees(l_prime)
        + (127 / 1000000) * sin_degrees(l_prime - m_prime)
        - (115 / 1000000) * sin_degrees(l_prime + m_prime)
    )
    extra = (382 / 1000000) * sin_degrees(313.45 + c * 481266.484)
    return beta + venus + flat_earth + extra


def lunar_distance(tee: float) -> float:
    """Distance from the Earth's center to the moon's, in meters."""

    c = julian_centuries(tee)
    return MEAN_LUNAR_DISTANCE_M + _periodic_terms(LUNAR_DISTANCE_TERMS, c, wave=np.cos)


def lunar_altitude(tee: float, location: Location) -> float:
    """Geocentric altitude of the moon in ``[-180, 180)``, ignoring parallax and refraction."""

    lam = lunar_longitude(tee)
    beta = lunar_latitude(tee)
    alpha = right_ascension(tee, beta, lam)
    delta = declination(tee, beta, lam)
    theta0 = sidereal_from_moment(tee)
    hour_angle = mod(theta0 + location.longitude - alpha, 360)
    altitude = arcsin_degrees(
        sin_degrees(location.latitude) * sin_degrees(delta)
        + cos_degrees(location.latitude) * cos_degrees(delta) * cos_degrees(hour_angle)
    )
    return mod3(altitude, -180, 180)


def lunar_parallax(tee: float, location: Location) -> float:
    geo = lunar_altitude(tee, location)
    ratio = EARTH_EQUATORIAL_RADIUS_M / lunar_distance(tee)
    return arcsin_degrees(ratio * cos_degrees(geo))


def topocentric_lunar_altitude(tee: float, location: Location) -> float:
    """Altitude of the moon seen from *location*, ignoring refraction."""

    return lunar_altitude(tee, location) - lunar_parallax(tee, location)
