"""A view of a dataset whose samples are packed into batches."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from flashkit.dataset.dataset import BatchFunction, Dataset, Sample


class BatchDatasetPolicy(Enum):
    """How to treat trailing samples when the size is not divisible by the batch size."""

    INCLUDE_LAST = 0
    """Pack the trailing samples into a smaller last batch."""
    SKIP_LAST = 1
    """Drop the trailing samples."""
    DIVISIBLE_ONLY = 2
    """Refuse datasets whose size is not divisible by the batch size."""


def _batch_axis(arr: np.ndarray) -> int:
    """First axis after the last non-singleton one; 0 for arrays of at most one element."""
    if arr.size <= 1:
        return 0
    for axis in range(arr.ndim - 1, -1, -1):
        if arr.shape[axis] != 1:
            return axis + 1
    return 0


def _default_batch(data: Sequence[np.ndarray]) -> np.ndarray:
    if not data:
        return np.empty((0,))
    first = np.asarray(data[0])
    shape = first.shape
    for item in data:
        if np.shape(item) != shape:
            raise ValueError("dimension mismatch while batching dataset")
    axis = _batch_axis(first)
    rest = shape[axis + 1 :] if axis < first.ndim else ()
    piece_shape = shape[:axis] + (1,) + rest
    pieces = [np.asarray(item).reshape(piece_shape) for item in data]
    return np.concatenate(pieces, axis=axis).astype(first.dtype, copy=False)


class BatchDataset(Dataset):
    """Packs consecutive samples of ``dataset`` into batches of ``batch_size``.

    By default each field is batched along the first singleton axis after
    its last non-singleton axis; all arrays of a field must share a shape.
    ``batch_fns[i]``, when given and not None, batches field ``i`` instead.
    """

    def __init__(
        self,
        dataset: Dataset,
        batch_size: int,
        policy: BatchDatasetPolicy = BatchDatasetPolicy.INCLUDE_LAST,
        batch_fns: Optional[Sequence[Optional[BatchFunction]]] = None,
    ):
        if dataset is None:
            raise ValueError("dataset to be batched is null")
        if batch_size <= 0:
            raise ValueError("invalid batch size")
        self._dataset = dataset
        self._batch_size = batch_size
        self._policy = policy
        self._batch_fns = list(batch_fns or [])
        self._pre_batch_size = len(dataset)

        if policy is BatchDatasetPolicy.INCLUDE_LAST:
            self._size = -(-self._pre_batch_size // batch_size)
        elif policy is BatchDatasetPolicy.SKIP_LAST:
            self._size = self._pre_batch_size // batch_size
        elif policy is BatchDatasetPolicy.DIVISIBLE_ONLY:
            if self._pre_batch_size % batch_size != 0:
                raise ValueError("dataset is not evenly divisible into batches")
            self._size = self._pre_batch_size // batch_size
        else:
            raise ValueError("unknown BatchDatasetPolicy")

    def __len__(self) -> int:
        return self._size

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        start = self._batch_size * idx
        end = min(start + self._batch_size, self._pre_batch_size)

        fields: List[List[np.ndarray]] = []
        for sample_idx in range(start, end):
            sample = self._dataset.get(sample_idx)
            while len(fields) < len(sample):
                fields.append([])
            for field, value in zip(fields, sample):
                field.append(value)

        return [
            self._make_batch(data, self._batch_fns[i] if i < len(self._batch_fns) else None)
            for i, data in enumerate(fields)
        ]

    @staticmethod
    def _make_batch(data: Sequence[np.ndarray], batch_fn: Optional[BatchFunction]) -> np.ndarray:
        if batch_fn is not None:
            return batch_fn(data)
        return _default_batch(data)