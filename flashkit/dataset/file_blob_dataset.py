"""A blob dataset stored in a file."""

from __future__ import annotations

import os
import threading
from typing import Union

from flashkit.dataset.blob_dataset import BlobDataset


class FileBlobDataset(BlobDataset):
    """A :class:`BlobDataset` kept in the file ``name``.

    With ``rw`` the file must exist (unless ``truncate`` is given) and may be
    written to; otherwise it is opened read-only. ``truncate`` empties the
    file first. Sequential access is the most efficient.
    """

    def __init__(self, name: Union[str, os.PathLike], rw: bool = False, truncate: bool = False):
        super().__init__()
        self._name = os.fspath(name)
        self._file_lock = threading.Lock()
        try:
            if truncate:
                with open(self._name, "wb"):
                    pass
            self._file = open(self._name, "r+b" if rw else "rb")
        except OSError as exc:
            raise OSError(f"could not open file {self._name}") from exc
        try:
            self.read_index()
        except BaseException:
            self._file.close()
            raise

    def write_data(self, offset: int, data: bytes) -> int:
        with self._file_lock:
            self._file.seek(offset)
            self._file.write(data)
            return self._file.tell() - offset

    def read_data(self, offset: int, size: int) -> bytes:
        with self._file_lock:
            self._file.seek(offset)
            data = self._file.read(size)
        if len(data) != size:
            raise EOFError(f"unexpected end of file in {self._name}")
        return data

    def flush_data(self) -> None:
        with self._file_lock:
            self._file.flush()

    def is_empty_data(self) -> bool:
        with self._file_lock:
            return self._file.seek(0, os.SEEK_END) == 0

    def close(self) -> None:
        """Close the underlying file."""
        with self._file_lock:
            self._file.close()

    def __enter__(self) -> "FileBlobDataset":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()