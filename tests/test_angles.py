from __future__ import annotations

import numpy as np
import pytest

from almanac.angles import (
    angle,
    arccos_degrees,
    arcsin_degrees,
    arctan_degrees,
    hr,
    mn,
    mod,
    mod3,
    poly,
    sec,
    time_from_moment,
)
from almanac.series import SeriesTable, sigma


def test_duration_helpers():
    assert hr(12) == 0.5
    assert mn(1440) == 1.0
    assert sec(30) == pytest.approx(30 / 86400)
    assert angle(23, 26, 21.448) == pytest.approx(23.4392911, abs=1e-7)


def test_mod_is_floored_and_never_returns_divisor():
    assert mod(-30.0, 360.0) == 330.0
    assert mod(725.0, 360.0) == 5.0
    assert mod(-1e-20, 360.0) == 0.0
    assert mod3(190.0, -180.0, 180.0) == -170.0
    assert mod3(-180.0, -180.0, 180.0) == -180.0
    assert mod3(5.0, 3.0, 3.0) == 3.0
    assert time_from_moment(730120.25) == pytest.approx(0.25)


def test_inverse_trig_clamps_arguments():
    assert arcsin_degrees(1.0000001) == 90.0
    assert arccos_degrees(-1.0000001) == 180.0


def test_arctan_quadrants():
    assert arctan_degrees(1.0, 1.0) == pytest.approx(45.0)
    assert arctan_degrees(-1.0, -1.0) == pytest.approx(225.0)
    assert arctan_degrees(-1.0, 1.0) == pytest.approx(315.0)
    with pytest.raises(ValueError):
        arctan_degrees(0.0, 0.0)


def test_poly_ascending_coefficients():
    assert poly(2.0, [1.0, 2.0, 3.0]) == 17.0
    assert poly(0.5, [4.0]) == 4.0


def test_series_table_evaluates_rows():
    table = SeriesTable([1, 2], [3, 4])
    assert len(table) == 2
    assert table.evaluate(lambda a, b: a * b) == 11.0
    assert table.evaluate(lambda a, b: a * np.sin(np.radians(90 * b))) == pytest.approx(-1.0)


def test_series_table_rejects_ragged_columns():
    with pytest.raises(ValueError):
        SeriesTable([1, 2, 3], [1, 2])
    with pytest.raises(ValueError):
        sigma([np.zeros(2), np.zeros(3)], lambda a, b: a + b)


def test_series_table_columns_are_read_only():
    table = SeriesTable([1.0, 2.0])
    with pytest.raises(ValueError):
        table.columns[0][0] = 5.0
