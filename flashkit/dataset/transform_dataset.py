"""A view of a dataset with per-field transformations applied."""

from __future__ import annotations

from typing import List, Optional, Sequence

from flashkit.dataset.dataset import Dataset, Sample, TransformFunction


class TransformDataset(Dataset):
    """Applies ``transforms[i]`` to field ``i`` of every sample.

    A missing or None transform leaves its field unchanged.
    """

    def __init__(self, dataset: Dataset, transforms: Sequence[Optional[TransformFunction]]):
        if dataset is None:
            raise ValueError("dataset to be transformed is null")
        self._dataset = dataset
        self._transforms: List[Optional[TransformFunction]] = list(transforms)

    def __len__(self) -> int:
        return len(self._dataset)

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        sample = self._dataset.get(idx)
        return [
            self._transforms[i](value)
            if i < len(self._transforms) and self._transforms[i] is not None
            else value
            for i, value in enumerate(sample)
        ]