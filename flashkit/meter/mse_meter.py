"""A meter for the mean squared error between predictions and targets."""

from __future__ import annotations

import numpy as np


class MSEMeter:
    """Averages, over calls to :meth:`add`, the summed squared error of each pair."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Set all counters to zero."""
        self._n = 0
        self._value = 0.0

    def add(self, output, target) -> None:
        """Accumulate the summed squared difference of two arrays of equal shape."""
        out = np.asarray(output, dtype=np.float64)
        tgt = np.asarray(target, dtype=np.float64)
        if out.shape != tgt.shape:
            raise ValueError("dimension mismatch in MSEMeter")
        diff = out - tgt
        self._n += 1
        self._value = (self._value * (self._n - 1) + float((diff * diff).sum())) / self._n

    def value(self) -> float:
        """Return the current mean."""
        return self._value