"""Array helpers."""

from __future__ import annotations

import numpy as np


def all_close(a, b, abs_tolerance: float = 1e-5) -> bool:
    """Return True if both arrays share dtype and shape and differ by less than the tolerance."""
    a = np.asarray(a)
    b = np.asarray(b)
    if a.dtype != b.dtype:
        return False
    if a.shape != b.shape:
        return False
    if a.size == 0 and b.size == 0:
        return True
    diff = np.abs(a.astype(np.float64) - b.astype(np.float64))
    return bool(diff.max() < abs_tolerance)