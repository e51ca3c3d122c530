"""A meter for element-wise mismatch between predictions and targets."""

from __future__ import annotations

import numpy as np


class FrameErrorMeter:
    """Reports the percentage of mismatched frames, or accuracy if ``accuracy`` is set."""

    def __init__(self, accuracy: bool = False):
        self._accuracy = accuracy
        self.reset()

    def reset(self) -> None:
        """Set all counters to zero."""
        self._n = 0
        self._sum = 0

    def add(self, output, target) -> None:
        """Count mismatches between two 1-dimensional arrays of equal shape."""
        out = np.asarray(output)
        tgt = np.asarray(target)
        if out.shape != tgt.shape:
            raise ValueError("dimension mismatch in FrameErrorMeter")
        if tgt.ndim != 1:
            raise ValueError("output/target must be 1-dimensional for FrameErrorMeter")
        self._sum += int(np.count_nonzero(out != tgt))
        self._n += tgt.shape[0]

    def value(self) -> float:
        """Return the error (or accuracy) as a percentage."""
        error = self._sum * 100.0 / self._n if self._n > 0 else 0.0
        return 100.0 - error if self._accuracy else error