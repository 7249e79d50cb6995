"""Weighted trigonometric series over parallel coefficient tables."""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

import numpy as np

__all__ = ["SeriesTable", "sigma"]

Term = Callable[..., np.ndarray]


def sigma(columns: Sequence[np.ndarray], term: Term) -> float:
    """Sum ``term`` over the aligned rows of *columns*.

    ``term`` receives one argument per column and is evaluated on whole
    columns at once, so it must be written with numpy operations; element *i*
    of its result is the contribution of row *i*.

    Raises
    ------
    ValueError
        If the columns do not all have the same length.
    """

    lengths = {len(column) for column in columns}
    if len(lengths) != 1:
        raise ValueError(f"Series columns must have equal lengths, got {sorted(lengths)}")
    return float(np.sum(term(*columns)))


class SeriesTable:
    """Read-only set of equal-length columns, one row per series term."""

    __slots__ = ("_columns",)

    def __init__(self, *columns: Sequence[float]) -> None:
        arrays = []
        for column in columns:
            array = np.array(column, dtype=float)
            array.setflags(write=False)
            arrays.append(array)
        lengths = {len(array) for array in arrays}
        if len(lengths) != 1:
            raise ValueError(f"Series columns must have equal lengths, got {sorted(lengths)}")
        self._columns: Tuple[np.ndarray, ...] = tuple(arrays)

    @property
    def columns(self) -> Tuple[np.ndarray, ...]:
        return self._columns

    def __len__(self) -> int:
        return len(self._columns[0])

    def evaluate(self, term: Term) -> float:
        return sigma(self._columns, term)
