"""Enumerations and constants shared across the package."""

from __future__ import annotations

from enum import Enum
from typing import Final


class ReduceMode(Enum):
    """Reduction applied by losses such as cross entropy."""

    NONE = 0
    MEAN = 1
    SUM = 2


class PoolingMode(Enum):
    """Pooling method."""

    MAX = 0
    """Maximum value inside the pooling window."""
    AVG_INCLUDE_PADDING = 1
    """Average value, padding included, inside the pooling window."""
    AVG_EXCLUDE_PADDING = 2
    """Average value, padding excluded, inside the pooling window."""


class RnnMode(Enum):
    """Recurrent network cell type."""

    RELU = 0
    TANH = 1
    LSTM = 2
    GRU = 3


class PaddingMode(Enum):
    """Special padding values."""

    SAME = -1
    """Smallest padding such that out_size == ceil(in_size / stride)."""


class DistributedBackend(Enum):
    """Communication backend for distributed training."""

    GLOO = 0
    NCCL = 1


class DistributedInit(Enum):
    """Rendezvous method used to set up distributed training."""

    MPI = 0
    FILE_SYSTEM = 1


class DistributedConstants:
    """Parameter names and sizes used by the distributed setup."""

    MAX_DEVICE_PER_NODE: Final[str] = "MAX_DEVICE_PER_NODE"
    FILE_PATH: Final[str] = "FILE_PATH"
    COALESCE_CACHE_SIZE: Final[int] = 20 << 20  # 20 MB