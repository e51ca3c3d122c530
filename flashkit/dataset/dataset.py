"""The abstract dataset: a sized mapping from index to a sample of arrays."""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Sequence

import numpy as np

Sample = List[np.ndarray]

PermutationFunction = Callable[[int], int]
TransformFunction = Callable[[np.ndarray], np.ndarray]
LoadFunction = Callable[[str], np.ndarray]
BatchFunction = Callable[[Sequence[np.ndarray]], np.ndarray]
DataTransformFunction = Callable[[bytes, tuple, np.dtype], np.ndarray]


class Dataset(ABC):
    """A mapping from indices in ``[0, len(self))`` to samples (lists of arrays).

    Subclasses implement ``__len__`` and ``get``; indexing and iteration
    follow from those.
    """

    @abstractmethod
    def __len__(self) -> int:
        """Number of samples."""

    @abstractmethod
    def get(self, idx: int) -> Sample:
        """Return the sample at ``idx``, which must lie in ``[0, len(self))``."""

    def __getitem__(self, idx: int) -> Sample:
        return self.get(operator.index(idx))

    def __iter__(self) -> Iterator[Sample]:
        for idx in range(len(self)):
            yield self.get(idx)

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < len(self):
            raise IndexError("Dataset idx out of range")