"""A dataset made by slicing arrays along their last non-singleton axis."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from flashkit.dataset.dataset import Dataset, Sample


def _last_axis(arr: np.ndarray) -> int:
    """Index of the last axis whose size is not 1 (0 if every axis is 1)."""
    for axis in range(arr.ndim - 1, -1, -1):
        if arr.shape[axis] != 1:
            return axis
    return 0


class TensorDataset(Dataset):
    """Unpacks each array along its last non-singleton axis.

    Sample ``i`` holds the ``i``-th slice of each array, keeping the sliced
    axis with size 1. The dataset is as long as the longest array along that
    axis; shorter arrays contribute an empty array past their end.
    """

    def __init__(self, tensors: Sequence[np.ndarray]):
        self._tensors: List[np.ndarray] = [np.atleast_1d(np.asarray(t)) for t in tensors]
        if not self._tensors:
            raise ValueError("no tensors passed to TensorDataset")
        self._axes: List[int] = []
        size = 0
        for tensor in self._tensors:
            if tensor.size == 0:
                raise ValueError("tensor for TensorDataset can't be empty")
            axis = _last_axis(tensor)
            self._axes.append(axis)
            size = max(size, tensor.shape[axis])
        self._size = size

    def __len__(self) -> int:
        return self._size

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        return [
            np.take(tensor, [idx], axis=axis)
            if idx < tensor.shape[axis]
            else np.empty((0,), dtype=tensor.dtype)
            for tensor, axis in zip(self._tensors, self._axes)
        ]