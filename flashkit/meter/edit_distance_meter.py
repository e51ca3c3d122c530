"""A meter for edit-distance error rates between predictions and targets."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence

import numpy as np


@dataclass(frozen=True)
class ErrorState:
    """Counts of deletion, insertion and substitution errors."""

    ndel: int = 0
    nins: int = 0
    nsub: int = 0

    def sum(self) -> int:
        """Total number of errors."""
        return self.ndel + self.nins + self.nsub


def _as_sequence(values) -> Sequence:
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ValueError("output and target must be 1-dimensional for EditDistanceMeter")
        return values.tolist()
    return list(values)


def levenshtein_distance(output, target) -> ErrorState:
    """Return the edit operations that turn ``output`` into ``target``.

    Ties between operations are broken in favour of deletion, then insertion,
    then match or substitution. Deletions count target items missing from
    ``output``; insertions count extra items in ``output``.
    """
    out = _as_sequence(output)
    tgt = _as_sequence(target)
    column: List[ErrorState] = [ErrorState(nins=i) for i in range(len(out) + 1)]

    for x, tgt_item in enumerate(tgt, start=1):
        last_diagonal = column[0]
        column[0] = replace(column[0], ndel=x)
        for y, out_item in enumerate(out, start=1):
            old_diagonal = column[y]
            same = out_item == tgt_item
            possibilities = (
                column[y].sum() + 1,
                column[y - 1].sum() + 1,
                last_diagonal.sum() + (0 if same else 1),
            )
            choice = possibilities.index(min(possibilities))
            if choice == 0:
                column[y] = replace(column[y], ndel=column[y].ndel + 1)
            elif choice == 1:
                column[y] = replace(column[y - 1], nins=column[y - 1].nins + 1)
            elif same:
                column[y] = last_diagonal
            else:
                column[y] = replace(last_diagonal, nsub=last_diagonal.nsub + 1)
            last_diagonal = old_diagonal

    return column[len(out)]


class EditDistanceMeter:
    """Accumulates target length and edit errors over many pairs."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Set all counters to zero."""
        self._n = 0
        self._ndel = 0
        self._nins = 0
        self._nsub = 0

    def add(self, output, target) -> None:
        """Compute the edit distance of ``output`` against ``target`` and accumulate it."""
        tgt = _as_sequence(target)
        self.add_error_state(levenshtein_distance(output, tgt), len(tgt))

    def add_counts(self, n: int, ndel: int, nins: int, nsub: int) -> None:
        """Add raw counts: target length and the three kinds of error."""
        self._n += n
        self._ndel += ndel
        self._nins += nins
        self._nsub += nsub

    def add_error_state(self, state: ErrorState, n: int) -> None:
        """Add the errors of ``state`` for a target of length ``n``."""
        self.add_counts(n, state.ndel, state.nins, state.nsub)

    def value(self) -> List[float]:
        """Return ``[error rate, total length, deletion, insertion, substitution rates]``.

        Rates are percentages of the total target length.
        """
        if self._n > 0:
            rate = lambda count: count * 100.0 / self._n  # noqa: E731
        else:
            rate = lambda count: 0.0  # noqa: E731
        total = self._ndel + self._nins + self._nsub
        return [rate(total), float(self._n), rate(self._ndel), rate(self._nins), rate(self._nsub)]