"""A view of a dataset with its indices randomly permuted."""

from __future__ import annotations

import random

from flashkit.dataset.dataset import Dataset
from flashkit.dataset.resample_dataset import ResampleDataset


class ShuffleDataset(ResampleDataset):
    """Presents the samples of ``dataset`` in a seeded random order."""

    def __init__(self, dataset: Dataset, seed: int = 0):
        super().__init__(dataset)
        self._rng = random.Random(seed)
        self.resample()

    def resample(self) -> None:
        """Draw a new random permutation."""
        indices = list(range(len(self)))
        self._rng.shuffle(indices)
        self._set_permutation(indices)

    def set_seed(self, seed: int) -> None:
        """Reseed the random generator used by :meth:`resample`."""
        self._rng.seed(seed)