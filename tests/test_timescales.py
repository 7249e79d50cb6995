from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from almanac.angles import hr
from almanac.calendar import (
    datetime_from_moment,
    fixed_from_gregorian,
    gregorian_date_difference,
    gregorian_from_fixed,
    gregorian_year_from_fixed,
    moment_from_datetime,
)
from almanac.location import Location
from almanac.timescales import (
    J2000,
    dynamical_from_universal,
    ephemeris_correction,
    julian_centuries,
    local_from_standard,
    standard_from_local,
    standard_from_universal,
    universal_from_dynamical,
    universal_from_local,
    universal_from_standard,
    zone_from_longitude,
)


def test_fixed_date_epochs():
    assert fixed_from_gregorian(1, 1, 1) == 1
    assert fixed_from_gregorian(1970, 1, 1) == 719163
    assert fixed_from_gregorian(2000, 1, 1) == 730120
    assert J2000 == 730120.5


def test_gregorian_from_fixed_inverts_fixed_from_gregorian():
    for ymd in [(1, 1, 1), (1582, 10, 15), (1900, 2, 28), (2000, 2, 29), (2024, 12, 31)]:
        assert gregorian_from_fixed(fixed_from_gregorian(*ymd)) == ymd
    assert gregorian_year_from_fixed(fixed_from_gregorian(2024, 12, 31)) == 2024
    assert gregorian_date_difference((2024, 1, 1), (2025, 1, 1)) == 366


@pytest.mark.parametrize("ymd", [(2023, 2, 29), (2024, 13, 1), (-5000, 1, 1)])
def test_invalid_gregorian_date_rejected(ymd):
    with pytest.raises(ValueError):
        fixed_from_gregorian(*ymd)


def test_datetime_round_trip():
    moment = fixed_from_gregorian(2000, 1, 1) + 0.5
    assert datetime_from_moment(moment) == datetime(2000, 1, 1, 12, tzinfo=timezone.utc)

    local = datetime(2000, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
    assert moment_from_datetime(local) == pytest.approx(730120 + hr(10), abs=1e-9)

    shifted = datetime_from_moment(730120 + hr(14), offset_days=hr(2))
    assert shifted.utcoffset() == timedelta(hours=2)
    assert shifted.hour == 14

    with pytest.raises(ValueError):
        moment_from_datetime(datetime(2000, 1, 1))


def test_standard_universal_round_trip():
    location = Location.from_hours(35.6762, 139.6503, zone_hours=9)
    for tee in [730120.0, 738000.3, 700000.75]:
        assert universal_from_standard(standard_from_universal(tee, location), location) == pytest.approx(
            tee, abs=1e-12
        )
        assert local_from_standard(standard_from_local(tee, location), location) == pytest.approx(
            tee, abs=1e-12
        )
    assert zone_from_longitude(90.0) == 0.25
    assert universal_from_local(1.25, Location(0.0, 90.0)) == 1.0


def test_ephemeris_correction_near_2000():
    tee = fixed_from_gregorian(2000, 1, 1)
    assert ephemeris_correction(tee) == pytest.approx(63.86 / 86400.0)
    assert universal_from_dynamical(dynamical_from_universal(tee + 0.3)) == pytest.approx(tee + 0.3, abs=1e-12)
    assert julian_centuries(J2000) == pytest.approx(0.0, abs=1e-6)


def test_ephemeris_correction_is_plausible_across_history():
    # Delta T was about 1.6 hours in 500 and stays within minutes from 1600 to 2100.
    assert 5000 < ephemeris_correction(fixed_from_gregorian(500, 6, 1)) * 86400 < 6500
    for year in [1650, 1750, 1850, 1950, 2020, 2100]:
        assert -30 < ephemeris_correction(fixed_from_gregorian(year, 6, 1)) * 86400 < 300


def _seconds(tee):
    return ephemeris_correction(tee) * 86400.0


def _poly(x, coefficients):
    return sum(coefficient * x ** power for power, coefficient in enumerate(coefficients))


def test_ephemeris_correction_keeps_range_boundaries():
    before = _seconds(fixed_from_gregorian(2005, 12, 31))
    after = _seconds(fixed_from_gregorian(2006, 1, 1))
    assert before == pytest.approx(
        _poly(5, [63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599])
    )
    assert after == pytest.approx(_poly(6, [62.92, 0.32217, 0.005589]))
    assert after - before > 0.2

    before = _seconds(fixed_from_gregorian(2050, 12, 31))
    after = _seconds(fixed_from_gregorian(2051, 1, 1))
    assert before == pytest.approx(_poly(50, [62.92, 0.32217, 0.005589]))
    assert after == pytest.approx(-20 + 32 * 2.31 ** 2 - 0.5628 * 99)
    assert after - before > 1.0

    # 1900-1986 is a polynomial in centuries from 1900 to mid-year, in days.
    c = (fixed_from_gregorian(1986, 7, 1) - fixed_from_gregorian(1900, 1, 1)) / 36525.0
    before = _seconds(fixed_from_gregorian(1986, 12, 31))
    after = _seconds(fixed_from_gregorian(1987, 1, 1))
    assert before == pytest.approx(
        86400.0
        * _poly(c, [-0.00002, 0.000297, 0.025184, -0.181133, 0.553040, -0.861938, 0.677066, -0.212591])
    )
    assert after == pytest.approx(
        _poly(-13, [63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599])
    )
    assert before != after


def test_location_validation():
    with pytest.raises(ValueError):
        Location(91.0, 0.0)
    with pytest.raises(ValueError):
        Location(0.0, -180.0)
    with pytest.raises(ValueError):
        Location(0.0, 0.0, elevation=-1.0)
    with pytest.raises(ValueError):
        Location.from_hours(0.0, 0.0, zone_hours=24.0)
    assert Location.from_hours(0.0, 180.0, zone_hours=12.0).zone == 0.5
