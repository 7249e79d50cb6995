"""Proleptic Gregorian calendar conversions on the R.D. fixed-day count.

R.D. 1 is Monday, January 1 of year 1 (Gregorian). Conversions go through
ERFA's Julian-date routines; a fixed date *d* starts at Julian date
``d + 1721424.5``, i.e. at MJD ``d - 678576``.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import erfa

__all__ = [
    "RD_MJD_OFFSET",
    "datetime_from_moment",
    "fixed_from_gregorian",
    "gregorian_date_difference",
    "gregorian_from_fixed",
    "gregorian_new_year",
    "gregorian_year_from_fixed",
    "moment_from_datetime",
]

RD_MJD_OFFSET = 678576
MJD_ZERO = 2400000.5

GregorianDate = Tuple[int, int, int]


def fixed_from_gregorian(year: int, month: int, day: int) -> int:
    """Fixed day number of the Gregorian date ``year-month-day``.

    Raises
    ------
    ValueError
        If the date is not a valid Gregorian date or lies before -4799.
    """

    try:
        _, mjd = erfa.cal2jd(int(year), int(month), int(day))
    except erfa.ErfaError as exc:
        raise ValueError(f"Invalid Gregorian date {year}-{month}-{day}: {exc}") from exc
    return int(round(float(mjd))) + RD_MJD_OFFSET


def gregorian_from_fixed(date: int) -> GregorianDate:
    """Gregorian ``(year, month, day)`` of the fixed day *date*."""

    # Query at noon so the day boundary never depends on rounding.
    year, month, day, _ = erfa.jd2cal(MJD_ZERO, float(date - RD_MJD_OFFSET) + 0.5)
    return int(year), int(month), int(day)


def gregorian_year_from_fixed(date: int) -> int:
    return gregorian_from_fixed(date)[0]


def gregorian_new_year(year: int) -> int:
    return fixed_from_gregorian(year, 1, 1)


def gregorian_date_difference(first: GregorianDate, second: GregorianDate) -> int:
    """Number of days from Gregorian date *first* to *second*."""

    return fixed_from_gregorian(*second) - fixed_from_gregorian(*first)


def datetime_from_moment(tee: float, offset_days: Optional[float] = None) -> datetime:
    """Timezone-aware datetime for moment *tee*.

    *offset_days* is the offset of the time scale *tee* is expressed in, e.g.
    a location's zone for standard time; ``None`` means universal time.
    """

    date = math.floor(tee)
    year, month, day = gregorian_from_fixed(date)
    tzinfo = timezone.utc if offset_days is None else timezone(timedelta(days=offset_days))
    return datetime(year, month, day, tzinfo=tzinfo) + timedelta(days=tee - date)


def moment_from_datetime(dt: datetime) -> float:
    """Universal moment of a timezone-aware datetime."""

    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    dt_utc = dt.astimezone(timezone.utc)
    midnight = dt_utc.replace(hour=0, minute=0, second=0, microsecond=0)
    fraction = (dt_utc - midnight) / timedelta(days=1)
    return fixed_from_gregorian(dt_utc.year, dt_utc.month, dt_utc.day) + fraction
