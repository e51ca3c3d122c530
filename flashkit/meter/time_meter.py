"""A wall-clock timer meter that can also average time per unit of work."""

from __future__ import annotations

import time


class TimeMeter:
    """Measures elapsed wall-clock time while running.

    With ``unit`` set, :meth:`value` reports time per unit counted with
    :meth:`inc_unit`; otherwise it reports total time. The timer starts stopped.
    """

    def __init__(self, unit: bool = False):
        self._use_unit = unit
        self._start = 0.0
        self.reset()

    def reset(self) -> None:
        """Zero the counters and stop the timer."""
        self._n = 0
        self._value = 0.0
        self._stopped = True

    def set(self, val: float, num: int = 1) -> None:
        """Set the accumulated time to ``val`` and the unit count to ``num``."""
        self._value = val
        self._n = num

    def value(self) -> float:
        """Return total time, or time per unit; a running timer keeps running."""
        if not self._stopped:
            now = time.perf_counter()
            self._value += now - self._start
            self._start = now
        if self._use_unit:
            return self._value / self._n if self._n > 0 else 0.0
        return self._value

    def stop(self) -> None:
        """Stop the timer, adding the time since it was resumed."""
        if self._stopped:
            return
        self._value += time.perf_counter() - self._start
        self._stopped = True

    def resume(self) -> None:
        """Start the timer if it is stopped."""
        if not self._stopped:
            return
        self._start = time.perf_counter()
        self._stopped = False

    def inc_unit(self, num: int = 1) -> None:
        """Increase the unit count by ``num``."""
        self._n += num

    def stop_and_inc_unit(self, num: int = 1) -> None:
        """Stop the timer and increase the unit count by ``num``."""
        self.stop()
        self.inc_unit(num)