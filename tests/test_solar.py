from __future__ import annotations

import math

import erfa
import pytest

from almanac.angles import hr, mn, mod3
from almanac.calendar import fixed_from_gregorian
from almanac.config import load_config
from almanac.events import solar_longitude_after
from almanac.location import Location
from almanac.solar import (
    SPRING,
    declination,
    equation_of_time,
    estimate_prior_solar_longitude,
    midday,
    nutation,
    obliquity,
    right_ascension,
    sidereal_from_moment,
    sidereal_solar_longitude,
    solar_longitude,
)
from almanac.timescales import dynamical_from_universal

# A fixed date d begins at Julian date d + JD_RD_OFFSET.
JD_RD_OFFSET = 1721424.5

SAMPLE_MOMENTS = [
    fixed_from_gregorian(1600, 1, 1) + 0.25,
    fixed_from_gregorian(1900, 6, 30),
    fixed_from_gregorian(2000, 1, 1) + 0.5,
    fixed_from_gregorian(2024, 3, 20) + 0.1,
    fixed_from_gregorian(2100, 9, 23) + 0.75,
]


def _angular_gap(a: float, b: float) -> float:
    return abs(mod3(a - b, -180.0, 180.0))


@pytest.mark.parametrize("tee", SAMPLE_MOMENTS)
def test_solar_longitude_range(tee):
    lam = solar_longitude(tee)
    assert 0.0 <= lam < 360.0


def test_march_2024_equinox():
    start = fixed_from_gregorian(2024, 3, 20)
    equinox = solar_longitude_after(SPRING, start)
    assert start <= equinox < start + 1
    # Published moment: 2024-03-20 03:06 UT.
    assert abs(equinox - (start + hr(3) + mn(6))) < mn(15)
    lam = solar_longitude(equinox)
    assert min(lam, 360.0 - lam) < 1e-4
    assert mod3(solar_longitude(equinox - 0.001), -180.0, 180.0) < 0.0


def test_estimate_prior_solar_longitude_brackets_equinox():
    start = fixed_from_gregorian(2024, 3, 20)
    equinox = solar_longitude_after(SPRING, start)
    estimate = estimate_prior_solar_longitude(SPRING, fixed_from_gregorian(2024, 4, 15))
    assert abs(estimate - equinox) < 1.0


@pytest.mark.parametrize("tee", SAMPLE_MOMENTS)
def test_obliquity_matches_erfa(tee):
    reference = math.degrees(erfa.obl80(JD_RD_OFFSET, dynamical_from_universal(tee)))
    assert obliquity(tee) == pytest.approx(reference, abs=1e-8)


@pytest.mark.parametrize("tee", SAMPLE_MOMENTS)
def test_nutation_matches_erfa_within_series_truncation(tee):
    dpsi, _ = erfa.nut80(JD_RD_OFFSET, dynamical_from_universal(tee))
    assert nutation(tee) == pytest.approx(math.degrees(dpsi), abs=1e-3)


@pytest.mark.parametrize("tee", SAMPLE_MOMENTS)
def test_sidereal_time_matches_erfa(tee):
    reference = math.degrees(erfa.gmst82(JD_RD_OFFSET, tee))
    assert _angular_gap(sidereal_from_moment(tee), reference) < 1e-5


def test_equation_of_time_known_extremes():
    # Sundials run about 14 minutes slow in mid February and 16 minutes fast in early November.
    february = equation_of_time(fixed_from_gregorian(2024, 2, 11))
    november = equation_of_time(fixed_from_gregorian(2024, 11, 3))
    assert -15.0 < february * 1440 < -13.5
    assert 16.0 < november * 1440 < 17.0


@pytest.mark.parametrize("year", [-3000, -1000, 0, 1000, 2000, 3000])
def test_equation_of_time_is_bounded(year):
    start = fixed_from_gregorian(year, 1, 1)
    for day in range(0, 365, 30):
        assert abs(equation_of_time(start + day)) <= hr(12)


def test_midday_near_noon_on_greenwich():
    date = fixed_from_gregorian(2024, 2, 11)
    noon = midday(date, Location(0.0, 0.0))
    # True noon is mean noon shifted back by the equation of time.
    assert noon - (date + 0.5) == pytest.approx(-equation_of_time(date + 0.5), abs=mn(0.1))


def test_equatorial_coordinates_at_solstice_longitude():
    tee = fixed_from_gregorian(2024, 6, 20)
    assert declination(tee, 0.0, 90.0) == pytest.approx(obliquity(tee), abs=1e-9)
    assert right_ascension(tee, 0.0, 90.0) == pytest.approx(90.0, abs=1e-9)
    assert right_ascension(tee, 0.0, 270.0) == pytest.approx(270.0, abs=1e-9)


def test_sidereal_solar_longitude_range():
    sidereal_start = load_config({}).sidereal_start
    for tee in SAMPLE_MOMENTS:
        value = sidereal_solar_longitude(tee, sidereal_start)
        assert 0.0 <= value < 360.0
        # The sidereal zodiac trails the tropical one by roughly 24 degrees in this era.
        assert _angular_gap(value, solar_longitude(tee)) < 30.0
