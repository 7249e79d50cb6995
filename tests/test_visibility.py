from __future__ import annotations

from almanac.angles import hr
from almanac.calendar import fixed_from_gregorian
from almanac.config import EngineConfig
from almanac.events import FULL, lunar_phase_at_or_after, new_moon_at_or_after
from almanac.visibility import (
    arc_of_light,
    phasis_on_or_after,
    phasis_on_or_before,
    shaukat_criterion,
    simple_best_view,
    visible_crescent,
)


def test_arc_of_light_at_new_and_full_moon():
    new_moon = new_moon_at_or_after(fixed_from_gregorian(2024, 1, 1))
    full_moon = lunar_phase_at_or_after(FULL, fixed_from_gregorian(2024, 1, 1))
    # At conjunction the separation is at most the lunar latitude.
    assert arc_of_light(new_moon) < 5.4
    assert arc_of_light(full_moon) > 174.0


def test_simple_best_view_is_evening(london):
    date = fixed_from_gregorian(2024, 1, 12)
    best = simple_best_view(date, london)
    # Sun 4.5 degrees down in mid January is shortly before 17:00 UT.
    assert date + hr(16) < best < date + hr(17.5)


def test_crescent_not_visible_on_eve_of_conjunction(london):
    # The eve of January 12 is a few hours after the new moon of January 11.
    assert not shaukat_criterion(fixed_from_gregorian(2024, 1, 12), london)
    assert not visible_crescent(fixed_from_gregorian(2024, 1, 11), london)


def test_phasis_after_january_2024_new_moon(london):
    first = phasis_on_or_after(fixed_from_gregorian(2024, 1, 5), london)
    assert first is not None
    assert fixed_from_gregorian(2024, 1, 13) <= first <= fixed_from_gregorian(2024, 1, 15)
    assert visible_crescent(first, london)
    assert not visible_crescent(first - 1, london)
    assert phasis_on_or_before(fixed_from_gregorian(2024, 1, 20), london) == first


def test_phasis_scan_budget_returns_none(london):
    config = EngineConfig(sidereal_start=0.0, max_phasis_scan_days=1)
    assert phasis_on_or_after(fixed_from_gregorian(2024, 1, 5), london, config=config) is None
