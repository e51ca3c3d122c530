"""An abstract dataset storing arrays in one binary blob together with an index.

Layout of a blob (all integers are little-endian int64)::

    magic number (0x31626f6c423a6c66, the bytes "fl:Blob1")
    offset of the index
    ---- raw data ----
    raw array bytes, one block per stored array
    ---- index ----
    number of samples (size)
    number of stored arrays (entries)
    size values: number of arrays in each sample
    size values: first entry of each sample in the entry table
    6 * entries values: {type, dim0, dim1, dim2, dim3, offset} per array

Arrays hold at most four dimensions; their shape is stored padded with 1s,
and trailing singleton dimensions are dropped when an array is read back.
"""

from __future__ import annotations

import struct
import threading
from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from flashkit.dataset.dataset import DataTransformFunction, Dataset, Sample

MAGIC_NUMBER = 0x31626F6C423A6C66
DEFAULT_CHUNK_SIZE = 104857600

_MAX_DIMS = 4
_INT64 = struct.Struct("<q")
_HEADER = struct.Struct("<qq")
_ENTRY = struct.Struct("<6q")
_HEADER_SIZE = _HEADER.size

_DTYPES: Dict[int, np.dtype] = {
    0: np.dtype("<f4"),
    1: np.dtype("<c8"),
    2: np.dtype("<f8"),
    3: np.dtype("<c16"),
    4: np.dtype("?"),
    5: np.dtype("<i4"),
    6: np.dtype("<u4"),
    7: np.dtype("u1"),
    8: np.dtype("<i8"),
    9: np.dtype("<u8"),
    10: np.dtype("<i2"),
    11: np.dtype("<u2"),
    12: np.dtype("<f2"),
}
_CODES: Dict[np.dtype, int] = {dtype: code for code, dtype in _DTYPES.items()}


def _storage_dtype(dtype: np.dtype) -> np.dtype:
    normalized = np.dtype(dtype).newbyteorder("<")
    if normalized not in _CODES:
        raise TypeError(f"unsupported array type for BlobDataset: {dtype}")
    return _DTYPES[_CODES[normalized]]


def _dims_of(arr: np.ndarray) -> Tuple[int, int, int, int]:
    if arr.ndim > _MAX_DIMS:
        raise ValueError(f"BlobDataset arrays must have at most {_MAX_DIMS} dimensions")
    return tuple(arr.shape) + (1,) * (_MAX_DIMS - arr.ndim)  # type: ignore[return-value]


@dataclass(frozen=True)
class BlobDatasetEntry:
    """Location and layout of one stored array."""

    dtype: np.dtype
    dims: Tuple[int, int, int, int]
    offset: int

    @property
    def elements(self) -> int:
        result = 1
        for dim in self.dims:
            result *= dim
        return result

    @property
    def nbytes(self) -> int:
        return self.elements * self.dtype.itemsize

    @property
    def shape(self) -> Tuple[int, ...]:
        dims = list(self.dims)
        while len(dims) > 1 and dims[-1] == 1:
            dims.pop()
        return tuple(dims)

    def pack(self) -> bytes:
        return _ENTRY.pack(_CODES[self.dtype], *self.dims, self.offset)

    @classmethod
    def unpack(cls, fields: Sequence[int]) -> "BlobDatasetEntry":
        code, d0, d1, d2, d3, offset = fields
        if code not in _DTYPES:
            raise ValueError(f"unknown array type code in blob index: {code}")
        return cls(_DTYPES[code], (d0, d1, d2, d3), offset)

    def shifted(self, delta: int) -> "BlobDatasetEntry":
        return BlobDatasetEntry(self.dtype, self.dims, self.offset + delta)


class BlobDataset(Dataset):
    """A dataset of heterogeneous samples kept in a single binary blob.

    Samples may hold any number of arrays of any supported type. Add samples
    with :meth:`add`; call :meth:`write_index` before the blob is reopened.
    Subclasses provide the storage through :meth:`write_data`,
    :meth:`read_data`, :meth:`flush_data` and :meth:`is_empty_data`, which
    must be thread-safe; they call :meth:`read_index` once storage is ready.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: List[BlobDatasetEntry] = []
        self._sizes: List[int] = []
        self._offsets: List[int] = []
        self._index_offset = _HEADER_SIZE
        self._host_transforms: Dict[int, DataTransformFunction] = {}

    @abstractmethod
    def write_data(self, offset: int, data: bytes) -> int:
        """Write ``data`` at byte ``offset`` of the blob; return the bytes written."""

    @abstractmethod
    def read_data(self, offset: int, size: int) -> bytes:
        """Read ``size`` bytes at byte ``offset`` of the blob."""

    @abstractmethod
    def flush_data(self) -> None:
        """Make sure everything written has reached the blob."""

    @abstractmethod
    def is_empty_data(self) -> bool:
        """Return True if the blob holds no bytes."""

    def __len__(self) -> int:
        return len(self._offsets)

    def _read_exact(self, offset: int, size: int) -> bytes:
        data = self.read_data(offset, size)
        if len(data) != size:
            raise ValueError("blob data is truncated")
        return data

    def get_entries(self, idx: int) -> List[BlobDatasetEntry]:
        """Return the entries of the arrays stored for sample ``idx``."""
        self._check_index(idx)
        start = self._offsets[idx]
        return self._entries[start : start + self._sizes[idx]]

    def _read_raw(self, entry: BlobDatasetEntry) -> bytes:
        if entry.elements <= 0:
            return b""
        return self._read_exact(entry.offset, entry.nbytes)

    def _read_array(self, entry: BlobDatasetEntry, field: int) -> np.ndarray:
        if entry.elements <= 0:
            return np.empty((0,), dtype=entry.dtype)
        raw = self._read_raw(entry)
        transform = self._host_transforms.get(field)
        if transform is not None:
            return transform(raw, entry.shape, entry.dtype)
        return np.frombuffer(raw, dtype=entry.dtype).reshape(entry.shape).copy()

    def get(self, idx: int) -> Sample:
        return [self._read_array(entry, i) for i, entry in enumerate(self.get_entries(idx))]

    def raw_get(self, idx: int) -> List[bytes]:
        """Return the raw bytes of each array of sample ``idx``; see :meth:`get_entries`."""
        return [self._read_raw(entry) for entry in self.get_entries(idx)]

    def add(self, sample: Sequence[np.ndarray]) -> None:
        """Append a sample; its data is only guaranteed stored after :meth:`flush`."""
        prepared = []
        for value in sample:
            arr = np.asarray(value)
            dtype = _storage_dtype(arr.dtype)
            dims = _dims_of(arr)
            prepared.append((dtype, dims, np.ascontiguousarray(arr, dtype=dtype).tobytes()))

        placed = []
        with self._lock:
            self._offsets.append(len(self._entries))
            self._sizes.append(len(prepared))
            for dtype, dims, data in prepared:
                entry = BlobDatasetEntry(dtype, dims, self._index_offset)
                self._index_offset += len(data)
                self._entries.append(entry)
                placed.append((entry, data))

        for entry, data in placed:
            if data:
                self.write_data(entry.offset, data)

    def add_blob(self, blob: "BlobDataset", chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """Append every sample of ``blob``, copying its data in chunks of ``chunk_size`` bytes."""
        with self._lock:
            if chunk_size <= 0:
                raise ValueError("chunk_size must be positive")
            entries = list(blob._entries)
            sizes = list(blob._sizes)
            offsets = list(blob._offsets)
            source_end = blob._index_offset

            base_entry = len(self._entries)
            shift = self._index_offset - _HEADER_SIZE
            self._sizes.extend(sizes)
            self._offsets.extend(offset + base_entry for offset in offsets)
            self._entries.extend(entry.shifted(shift) for entry in entries)

            source_offset = _HEADER_SIZE
            while source_offset < source_end:
                size = min(chunk_size, source_end - source_offset)
                chunk = blob._read_exact(source_offset, size)
                source_offset += size
                self.write_data(self._index_offset, chunk)
                self._index_offset += size

    def flush(self) -> None:
        """Flush written data to the blob."""
        self.flush_data()

    def write_index(self) -> None:
        """Write the header and index, then flush."""
        with self._lock:
            self.write_data(0, _HEADER.pack(MAGIC_NUMBER, self._index_offset))
            parts = [_HEADER.pack(len(self._offsets), len(self._entries))]
            parts.extend(_INT64.pack(size) for size in self._sizes)
            parts.extend(_INT64.pack(offset) for offset in self._offsets)
            parts.extend(entry.pack() for entry in self._entries)
            self.write_data(self._index_offset, b"".join(parts))
            self.flush_data()

    def read_index(self) -> None:
        """Load the index from the blob; an empty blob gives an empty dataset."""
        with self._lock:
            self._entries = []
            self._sizes = []
            self._offsets = []
            if self.is_empty_data():
                self._index_offset = _HEADER_SIZE
                return

            magic, index_offset = _HEADER.unpack(self._read_exact(0, _HEADER_SIZE))
            if magic != MAGIC_NUMBER:
                raise ValueError("not a BlobDataset")
            self._index_offset = index_offset

            offset = index_offset
            size, entry_count = _HEADER.unpack(self._read_exact(offset, _HEADER_SIZE))
            offset += _HEADER_SIZE
            if size < 0 or entry_count < 0:
                raise ValueError("corrupt BlobDataset index")

            table = struct.Struct(f"<{size}q")
            self._sizes = list(table.unpack(self._read_exact(offset, table.size)))
            offset += table.size
            self._offsets = list(table.unpack(self._read_exact(offset, table.size)))
            offset += table.size

            raw_entries = self._read_exact(offset, _ENTRY.size * entry_count)
            self._entries = [BlobDatasetEntry.unpack(fields) for fields in _ENTRY.iter_unpack(raw_entries)]

    def set_host_transform(self, field: int, func: DataTransformFunction) -> None:
        """Build field ``field`` with ``func(raw_bytes, shape, dtype)`` instead of the default."""
        self._host_transforms[field] = func