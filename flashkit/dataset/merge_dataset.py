"""A dataset combining the fields of several datasets index by index."""

from __future__ import annotations

from typing import List, Sequence

from flashkit.dataset.dataset import Dataset, Sample


class MergeDataset(Dataset):
    """Sample ``i`` is the concatenation of sample ``i`` of each dataset that has one.

    The size is the largest size among the datasets.
    """

    def __init__(self, datasets: Sequence[Dataset]):
        self._datasets: List[Dataset] = list(datasets)
        self._size = max((len(d) for d in self._datasets), default=0)

    def __len__(self) -> int:
        return self._size

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        result: Sample = []
        for dataset in self._datasets:
            if idx < len(dataset):
                result.extend(dataset.get(idx))
        return result