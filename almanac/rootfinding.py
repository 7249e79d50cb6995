"""Bracketed searches used to invert the position models."""

from __future__ import annotations

import json
import logging
from typing import Callable, Optional

from .angles import mod, mod3

__all__ = [
    "AstronomyError",
    "ConvergenceError",
    "binary_search",
    "invert_angular",
    "is_bracketed",
    "final_satisfying",
    "next_satisfying",
]

LOGGER = logging.getLogger(__name__)

ANGULAR_PRECISION_DAYS = 1e-5
ANGULAR_RESIDUAL_TOLERANCE = 0.01  # degrees
DEFAULT_MAX_STEPS = 64


class AstronomyError(RuntimeError):
    """Base class for errors raised by the almanac engine."""


class ConvergenceError(AstronomyError):
    """Raised when an iterative search exhausts its budget or misses its target."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


def binary_search(
    lower: float,
    upper: float,
    predicate: Callable[[float], bool],
    tolerance: float,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> float:
    """Bisect ``[lower, upper]`` for the point where *predicate* turns true.

    *predicate* must be false at *lower* and true at *upper*; callers whose
    bracket may hold no change check it first with :func:`is_bracketed`. The
    midpoint of the final bracket is returned once the bracket is narrower
    than *tolerance*.

    Raises
    ------
    ValueError
        If *lower* exceeds *upper*.
    ConvergenceError
        If *max_steps* halvings do not bring the bracket below *tolerance*.
    """

    if lower > upper:
        raise ValueError(f"Invalid bracket [{lower}, {upper}]")
    low, high = lower, upper
    for _ in range(max_steps):
        mid = (low + high) / 2
        if high - low < tolerance:
            return mid
        if predicate(mid):
            high = mid
        else:
            low = mid
    LOGGER.warning(
        json.dumps(
            {"event": "bisection_budget_exhausted", "lower": lower, "upper": upper,
             "tolerance": tolerance, "max_steps": max_steps}
        )
    )
    raise ConvergenceError("binary_search", f"bracket still {high - low} wide after {max_steps} steps")


def is_bracketed(lower: float, upper: float, predicate: Callable[[float], bool]) -> bool:
    """True when *predicate* is false at *lower* and true at *upper*."""

    return not predicate(lower) and predicate(upper)


def invert_angular(
    function: Callable[[float], float],
    target: float,
    lower: float,
    upper: float,
    precision: float = ANGULAR_PRECISION_DAYS,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> float:
    """Moment in ``[lower, upper]`` at which the angle *function* equals *target*.

    *function* must increase through *target* (mod 360) exactly once in the
    bracket; the search bisects on the sign of the angular residual.

    Raises
    ------
    ConvergenceError
        If the result does not reproduce *target*, i.e. the bracket did not
        contain a crossing.
    """

    result = binary_search(
        lower,
        upper,
        lambda x: mod(function(x) - target, 360) < 180,
        precision,
        max_steps,
    )
    residual = mod3(function(result) - target, -180, 180)
    if abs(residual) > ANGULAR_RESIDUAL_TOLERANCE:
        LOGGER.warning(
            json.dumps(
                {"event": "angle_not_bracketed", "target": target, "lower": lower,
                 "upper": upper, "residual": residual}
            )
        )
        raise ConvergenceError(
            "invert_angular", f"angle {target} not crossed in [{lower}, {upper}] (residual {residual})"
        )
    return result


def next_satisfying(start: int, predicate: Callable[[int], bool], limit: int) -> Optional[int]:
    """First integer ``k >= start`` satisfying *predicate*, scanning at most *limit* values."""

    for k in range(start, start + limit):
        if predicate(k):
            return k
    return None


def final_satisfying(start: int, predicate: Callable[[int], bool], limit: int) -> Optional[int]:
    """Last ``k`` such that *predicate* holds for every integer in ``start..k``.

    Returns ``start - 1`` when *predicate* fails at *start*, and ``None`` when
    it still holds after *limit* values.
    """

    for k in range(start, start + limit):
        if not predicate(k):
            return k - 1
    return None
