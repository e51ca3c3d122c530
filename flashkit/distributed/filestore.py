"""A key-value store on a shared directory, used for process rendezvous."""

from __future__ import annotations

import hashlib
import os
import time
from typing import Union

DEFAULT_TIMEOUT = 120.0
_POLL_INTERVAL = 0.01


def _encode_name(name: str) -> str:
    return hashlib.sha256(name.encode("utf-8")).hexdigest()


class FileStore:
    """Stores each key as a file in ``path``; ``get`` blocks until the key exists."""

    def __init__(self, path: Union[str, os.PathLike], timeout: float = DEFAULT_TIMEOUT):
        self._base_path = os.fspath(path)
        self._timeout = timeout

    def _object_path(self, key: str) -> str:
        return os.path.join(self._base_path, _encode_name(key))

    def _tmp_path(self, key: str) -> str:
        return os.path.join(self._base_path, "." + _encode_name(key))

    def set(self, key: str, data: bytes) -> None:
        """Write ``data`` under ``key``; fails if the key already exists."""
        path = self._object_path(key)
        tmp = self._tmp_path(key)
        # Not race free: another process may create the key between check and rename.
        if os.path.exists(path):
            raise FileExistsError(f"FileStore set: file already exists: {path}")
        with open(tmp, "wb") as fh:
            fh.write(bytes(data))
        try:
            os.replace(tmp, path)
        except OSError as exc:
            raise RuntimeError("FileStore set: rename failed") from exc

    def get(self, key: str) -> bytes:
        """Wait for ``key`` to be set and return its data."""
        self._wait(key)
        path = self._object_path(key)
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise RuntimeError(f"FileStore get: file open failed: {path}") from exc
        if not data:
            raise RuntimeError(f"FileStore get: file is empty: {path}")
        return data

    def clear(self, key: str) -> None:
        """Remove ``key`` if present."""
        try:
            os.remove(self._object_path(key))
        except OSError:
            pass

    def _check(self, key: str) -> bool:
        path = self._object_path(key)
        try:
            fd = os.open(path, os.O_RDONLY)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise RuntimeError(f"FileStore check: file open failed: {path}") from exc
        os.close(fd)
        return True

    def _wait(self, key: str) -> None:
        # Polling rather than file notifications, which fail on shared filesystems.
        start = time.monotonic()
        while not self._check(key):
            if time.monotonic() - start > self._timeout:
                raise TimeoutError(f"FileStore timed out for key: {key}")
            time.sleep(_POLL_INTERVAL)