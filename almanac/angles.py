"""Degree-based trigonometry and small arithmetic helpers shared by every model."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

__all__ = [
    "angle",
    "arccos_degrees",
    "arcsin_degrees",
    "arctan_degrees",
    "cos_degrees",
    "hr",
    "mn",
    "mod",
    "mod3",
    "poly",
    "sec",
    "sin_degrees",
    "tan_degrees",
    "time_from_moment",
]

DEGREES_PER_CIRCLE = 360.0


def hr(x: float) -> float:
    """Duration of *x* hours, in days."""

    return x / 24.0


def mn(x: float) -> float:
    return x / 1440.0


def sec(x: float) -> float:
    return x / 86400.0


def angle(degrees: float, minutes: float, seconds: float) -> float:
    """Angle given in degrees, arc minutes and arc seconds, as decimal degrees."""

    return degrees + (minutes + seconds / 60.0) / 60.0


def mod(x: float, y: float) -> float:
    """Floor modulus; the result always lies in ``[0, y)`` for positive *y*."""

    result = x % y
    # Rounding can land exactly on y for tiny negative x.
    if result == y:
        return 0.0
    return result


def mod3(x: float, a: float, b: float) -> float:
    """Shift *x* into the half-open range ``[a, b)``."""

    if a == b:
        return a
    return a + mod(x - a, b - a)


def time_from_moment(tee: float) -> float:
    return mod(tee, 1.0)


def poly(x: float, coefficients: Sequence[float]) -> float:
    """Evaluate the polynomial with *coefficients* in ascending order at *x*."""

    return float(np.polynomial.polynomial.polyval(x, coefficients))


def sin_degrees(theta: float) -> float:
    return math.sin(math.radians(theta))


def cos_degrees(theta: float) -> float:
    return math.cos(math.radians(theta))


def tan_degrees(theta: float) -> float:
    return math.tan(math.radians(theta))


def arcsin_degrees(x: float) -> float:
    return math.degrees(math.asin(float(np.clip(x, -1.0, 1.0))))


def arccos_degrees(x: float) -> float:
    return math.degrees(math.acos(float(np.clip(x, -1.0, 1.0))))


def arctan_degrees(y: float, x: float) -> float:
    """Arctangent of ``y / x`` in degrees, placed in the quadrant of ``(x, y)``.

    The result lies in ``[0, 360)``. Both arguments zero is undefined and
    raises :class:`ValueError`.
    """

    if x == 0 and y == 0:
        raise ValueError("arctan_degrees is undefined for the origin")
    return mod(math.degrees(math.atan2(y, x)), DEGREES_PER_CIRCLE)
