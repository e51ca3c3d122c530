"""A meter keeping a running total per category."""

from __future__ import annotations

from typing import List


class CountMeter:
    """Keeps one integer total for each of ``num`` categories."""

    def __init__(self, num: int):
        self._counts: List[int] = [0] * num

    def add(self, category: int, val: int) -> None:
        """Add ``val`` to the total of ``category``, which must lie in ``[0, num)``."""
        if not 0 <= category < len(self._counts):
            raise IndexError("invalid id to update count for")
        self._counts[category] += val

    def value(self) -> List[int]:
        """Return a copy of the totals, one per category."""
        return list(self._counts)

    def reset(self) -> None:
        """Set every total to zero."""
        self._counts = [0] * len(self._counts)