"""Symmetric pheromone table over design-element indices.

The matrix stores raw values only. Symmetry is maintained by the writers
(every write to (i, j) is mirrored to (j, i) by the caller), and range
clamping is likewise the caller's job.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .errors import InvariantViolation

logger = logging.getLogger(__name__)


def checked_index(value: int, size: int) -> int:
    """Return ``value`` as a plain int once it is known to address a row of a size-``size`` matrix."""
    index = int(value)
    if index != value or not 0 <= index < size:
        raise InvariantViolation(f"node index {value!r} outside [0, {size})")
    return index


class PheromoneMatrix:
    """Dense N x N table of pheromone 'probabilities'."""

    def __init__(self, size: int, initial: float = 0.0):
        if size < 1:
            raise InvariantViolation(f"pheromone matrix size must be >= 1, got {size}")
        self._table = np.full((size, size), float(initial), dtype=float)

    @classmethod
    def uniform(cls, size: int, value: float) -> "PheromoneMatrix":
        return cls(size, initial=value)

    @classmethod
    def from_array(cls, values) -> "PheromoneMatrix":
        arr = np.array(values, dtype=float)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise InvariantViolation(f"pheromone matrix must be square, got shape {arr.shape}")
        m = cls(arr.shape[0])
        m._table[:, :] = arr
        return m

    def size(self) -> int:
        return self._table.shape[0]

    def get_at(self, i: int, j: int) -> float:
        return float(self._table[i, j])

    def set_at(self, i: int, j: int, value: float) -> None:
        self._table[i, j] = value

    @property
    def values(self) -> np.ndarray:
        """A copy of the underlying table."""
        return self._table.copy()

    def snapshot(self) -> np.ndarray:
        return self._table.copy()

    def lowest(self) -> float:
        return float(self._table.min())

    def highest(self) -> float:
        return float(self._table.max())

    def mean(self) -> float:
        return float(self._table.mean())

    def is_symmetric(self, atol: Optional[float] = None) -> bool:
        if atol is None:
            return bool(np.array_equal(self._table, self._table.T))
        return bool(np.allclose(self._table, self._table.T, atol=atol, rtol=0.0))

    def show(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            with np.printoptions(precision=4, suppress=True, linewidth=160):
                logger.debug("pheromone matrix (%d x %d):\n%s", self.size(), self.size(), self._table)

    def __repr__(self):
        return f"PheromoneMatrix(size={self.size()}, lowest={self.lowest():.4g}, highest={self.highest():.4g})"
