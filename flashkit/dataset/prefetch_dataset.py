"""A dataset view that loads upcoming samples in background threads."""

from __future__ import annotations

from collections import deque
from concurrent.futures import Future
from typing import Deque, Optional

from flashkit.common.serialization import dumps, loads
from flashkit.common.threadpool import ThreadPool
from flashkit.dataset.dataset import Dataset, Sample


class PrefetchDataset(Dataset):
    """Prefetches the next ``prefetch_size`` samples on ``num_threads`` threads.

    Meant for sequential access: a request for an index other than the one
    following the last request discards the prefetched samples. With both
    counts zero, requests go straight to the underlying dataset.
    """

    def __init__(self, dataset: Dataset, num_threads: int, prefetch_size: int):
        if dataset is None:
            raise ValueError("dataset to be prefetched is null")
        valid = (num_threads > 0 and prefetch_size > 0) or (num_threads == 0 and prefetch_size == 0)
        if not valid:
            raise ValueError("invalid num_threads or prefetch_size")
        self._dataset = dataset
        self._num_threads = num_threads
        self._prefetch_size = prefetch_size
        self._pool: Optional[ThreadPool] = ThreadPool(num_threads) if num_threads > 0 else None
        self._cache: Deque[Future] = deque()
        self._cur_idx = -1

    def __len__(self) -> int:
        return len(self._dataset)

    def _fetch(self, idx: int) -> bytes:
        return dumps(self._dataset.get(idx))

    def get(self, idx: int) -> Sample:
        self._check_index(idx)
        if self._pool is None:
            return self._dataset.get(idx)

        while self._cache and idx != self._cur_idx:
            self._cache.popleft()
            self._cur_idx += 1

        size = len(self)
        while len(self._cache) < self._prefetch_size:
            fetch_idx = idx + len(self._cache)
            if fetch_idx >= size:
                break
            self._cache.append(self._pool.enqueue(self._fetch, fetch_idx))

        future = self._cache.popleft()
        self._cur_idx = idx + 1
        (sample,) = loads(future.result())
        return sample

    def close(self) -> None:
        """Stop the background threads after pending fetches finish."""
        if self._pool is not None:
            self._pool.shutdown()