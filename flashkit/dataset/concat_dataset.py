"""A dataset that chains several datasets one after another."""

from __future__ import annotations

import bisect
from typing import List, Sequence

from flashkit.dataset.dataset import Dataset, Sample


class ConcatDataset(Dataset):
    """Indexes the samples of ``datasets`` in sequence."""

    def __init__(self, datasets: Sequence[Dataset]):
        if not datasets:
            raise ValueError("cannot concat 0 datasets")
        self._datasets: List[Dataset] = list(datasets)
        self._cumulative: List[int] = [0]
        for dataset in self._datasets:
            self._cumulative.append(self._cumulative[-1] + len(dataset))

    def __len__(self) -> int:
        return self._cumulative[-1]

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        which = bisect.bisect_right(self._cumulative, idx) - 1
        return self._datasets[which].get(idx - self._cumulative[which])