from __future__ import annotations

import pytest

from almanac.calendar import fixed_from_gregorian
from almanac.location import Location
from almanac.lunar import (
    lunar_altitude,
    lunar_distance,
    lunar_latitude,
    lunar_longitude,
    lunar_parallax,
    topocentric_lunar_altitude,
)

START = fixed_from_gregorian(2024, 1, 1)
SAMPLE_MOMENTS = [START + 2.7 * i for i in range(12)]


@pytest.mark.parametrize("tee", SAMPLE_MOMENTS)
def test_lunar_position_ranges(tee):
    assert 0.0 <= lunar_longitude(tee) < 360.0
    assert -5.4 < lunar_latitude(tee) < 5.4
    # Perigee and apogee distances in meters.
    assert 356_000_000 < lunar_distance(tee) < 407_000_000


def test_lunar_longitude_advances_about_13_degrees_per_day():
    tee = fixed_from_gregorian(2024, 5, 1)
    step = (lunar_longitude(tee + 1) - lunar_longitude(tee)) % 360
    assert 11.5 < step < 15.5


def test_lunar_parallax_and_topocentric_altitude():
    location = Location(51.4769, 0.0)
    for tee in SAMPLE_MOMENTS:
        geocentric = lunar_altitude(tee, location)
        parallax = lunar_parallax(tee, location)
        assert -180.0 <= geocentric < 180.0
        assert 0.0 <= parallax < 1.1
        assert topocentric_lunar_altitude(tee, location) == pytest.approx(geocentric - parallax)
