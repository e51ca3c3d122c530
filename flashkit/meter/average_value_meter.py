"""A meter tracking the mean and variance of a stream of values."""

from __future__ import annotations

from typing import List

import numpy as np


class AverageValueMeter:
    """Accumulates count, sum and sum of squares of the values added."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Set all counters to zero."""
        self._n = 0
        self._sum = 0.0
        self._sq_sum = 0.0

    def add(self, val: float, n: int = 1) -> None:
        """Add ``val`` as if it occurred ``n`` times."""
        self._sum += n * val
        self._sq_sum += n * val * val
        self._n += n

    def add_array(self, vals) -> None:
        """Add every element of ``vals``."""
        arr = np.asarray(vals, dtype=np.float64)
        self._sum += float(arr.sum())
        self._sq_sum += float((arr * arr).sum())
        self._n += int(arr.size)

    def value(self) -> List[float]:
        """Return ``[mean, unbiased variance, count]``."""
        mean = self._sum / self._n if self._n > 0 else 0.0
        var = (self._sq_sum - self._n * mean * mean) / (self._n - 1) if self._n > 1 else 0.0
        return [mean, var, float(self._n)]