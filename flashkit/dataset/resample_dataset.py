"""A view of a dataset with its indices remapped."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Union

from flashkit.dataset.dataset import Dataset, Sample

Permutation = Union[Sequence[int], Callable[[int], int]]


class ResampleDataset(Dataset):
    """Sample ``i`` is sample ``permutation[i]`` of the underlying dataset.

    ``permutation`` may be None (identity), a sequence of indices, or a
    deterministic function from index to index.
    """

    def __init__(self, dataset: Dataset, permutation: Optional[Permutation] = None):
        if dataset is None:
            raise ValueError("dataset to be resampled is null")
        self._dataset = dataset
        size = len(dataset)
        if permutation is None:
            indices = list(range(size))
        elif callable(permutation):
            indices = [permutation(i) for i in range(size)]
        else:
            indices = list(permutation)
        self._set_permutation(indices)

    def _set_permutation(self, indices: List[int]) -> None:
        if len(indices) != len(self):
            raise ValueError("wrong vector size for `resample`")
        self._permutation = indices

    def __len__(self) -> int:
        return len(self._dataset)

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        return self._dataset.get(self._permutation[idx])

    def resample(self, permutation: Sequence[int]) -> None:
        """Replace the index mapping; it must have one entry per sample."""
        self._set_permutation(list(permutation))