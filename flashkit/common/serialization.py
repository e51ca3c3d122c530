"""Binary serialization of plain values and numpy arrays, with versioned field helpers.

Objects describe what they persist as a list of field specifications:
attribute names, :func:`versioned` wrappers that only apply within a range
of format versions, and :func:`serialize_as` wrappers that convert a value
on the way out and back in. :func:`save_fields` turns an object into a list
of values and :func:`load_fields` restores it from such a list.
"""

from __future__ import annotations

import io
import os
import struct
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

MAX_VERSION = 0xFFFFFFFF

_MAGIC = b"FKS1"

_TAG_NONE = b"N"
_TAG_BOOL = b"?"
_TAG_INT = b"i"
_TAG_FLOAT = b"f"
_TAG_STR = b"s"
_TAG_BYTES = b"b"
_TAG_LIST = b"l"
_TAG_TUPLE = b"t"
_TAG_DICT = b"d"
_TAG_ARRAY = b"a"

_INT64 = struct.Struct("<q")
_FLOAT64 = struct.Struct("<d")


@dataclass(frozen=True)
class SerializeAs:
    """A field stored as another kind, converted on save and on load."""

    name: str
    kind: Callable[[Any], Any]
    save_converter: Optional[Callable[[Any], Any]] = None
    load_converter: Optional[Callable[[Any], Any]] = None


@dataclass(frozen=True)
class Versioned:
    """A field that is only serialized for versions in ``[min_version, max_version]``."""

    name: Union[str, SerializeAs]
    min_version: int
    max_version: int = MAX_VERSION

    def applies_to(self, version: int) -> bool:
        return self.min_version <= version <= self.max_version


FieldSpec = Union[str, Versioned, SerializeAs]


def versioned(
    name: Union[str, SerializeAs], min_version: int, max_version: int = MAX_VERSION
) -> Versioned:
    """Serialize ``name`` only if the version lies in the given inclusive range."""
    return Versioned(name, min_version, max_version)


def serialize_as(
    name: str,
    kind: Callable[[Any], Any],
    save_converter: Optional[Callable[[Any], Any]] = None,
    load_converter: Optional[Callable[[Any], Any]] = None,
) -> SerializeAs:
    """Serialize attribute ``name`` as ``kind``, optionally through converters."""
    return SerializeAs(name, kind, save_converter, load_converter)


def _save_field(obj: Any, version: int, field: FieldSpec, out: List[Any]) -> None:
    if isinstance(field, Versioned):
        if field.applies_to(version):
            _save_field(obj, version, field.name, out)
    elif isinstance(field, SerializeAs):
        value = getattr(obj, field.name)
        if field.save_converter is not None:
            out.append(field.save_converter(value))
        else:
            out.append(field.kind(value))
    elif isinstance(field, str):
        out.append(getattr(obj, field))
    else:
        raise TypeError(f"invalid field specification: {field!r}")


def save_fields(obj: Any, version: int, fields: Sequence[FieldSpec]) -> List[Any]:
    """Return the values of ``fields`` on ``obj`` that apply to ``version``, in order."""
    values: List[Any] = []
    for field in fields:
        _save_field(obj, version, field, values)
    return values


def _next_value(values) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise ValueError("not enough saved values for the requested fields") from None


def _load_field(obj: Any, version: int, field: FieldSpec, values) -> None:
    if isinstance(field, Versioned):
        if field.applies_to(version):
            _load_field(obj, version, field.name, values)
    elif isinstance(field, SerializeAs):
        stored = field.kind(_next_value(values))
        if field.load_converter is not None:
            setattr(obj, field.name, field.load_converter(stored))
        else:
            current = getattr(obj, field.name, None)
            setattr(obj, field.name, stored if current is None else type(current)(stored))
    elif isinstance(field, str):
        setattr(obj, field, _next_value(values))
    else:
        raise TypeError(f"invalid field specification: {field!r}")


def load_fields(obj: Any, version: int, fields: Sequence[FieldSpec], state: Iterable[Any]) -> None:
    """Set ``fields`` on ``obj`` from ``state``, as produced by :func:`save_fields`.

    Without a load converter, a converted field is cast back to the type of the
    attribute's current value, so ``obj`` is expected to be default-constructed.
    """
    values = iter(state)
    for field in fields:
        _load_field(obj, version, field, values)


def _encode(value: Any, out: io.BytesIO) -> None:
    if value is None:
        out.write(_TAG_NONE)
    elif isinstance(value, (bool, np.bool_)):
        out.write(_TAG_BOOL)
        out.write(b"\x01" if value else b"\x00")
    elif isinstance(value, (int, np.integer)):
        out.write(_TAG_INT)
        try:
            out.write(_INT64.pack(int(value)))
        except struct.error as exc:
            raise OverflowError(f"integer out of 64-bit range: {value}") from exc
    elif isinstance(value, (float, np.floating)):
        out.write(_TAG_FLOAT)
        out.write(_FLOAT64.pack(float(value)))
    elif isinstance(value, str):
        out.write(_TAG_STR)
        _write_blob(value.encode("utf-8"), out)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        out.write(_TAG_BYTES)
        _write_blob(bytes(value), out)
    elif isinstance(value, np.ndarray):
        _encode_array(value, out)
    elif isinstance(value, (list, tuple)):
        out.write(_TAG_LIST if isinstance(value, list) else _TAG_TUPLE)
        out.write(_INT64.pack(len(value)))
        for item in value:
            _encode(item, out)
    elif isinstance(value, dict):
        out.write(_TAG_DICT)
        out.write(_INT64.pack(len(value)))
        for key, item in value.items():
            _encode(key, out)
            _encode(item, out)
    else:
        raise TypeError(f"cannot serialize object of type {type(value).__name__}")


def _write_blob(data: bytes, out: io.BytesIO) -> None:
    out.write(_INT64.pack(len(data)))
    out.write(data)


def _encode_array(arr: np.ndarray, out: io.BytesIO) -> None:
    if arr.dtype.hasobject:
        raise TypeError("serialization of object arrays is not supported")
    out.write(_TAG_ARRAY)
    out.write(_INT64.pack(arr.ndim))
    for dim in arr.shape:
        out.write(_INT64.pack(dim))
    _write_blob(arr.dtype.str.encode("ascii"), out)
    _write_blob(np.ascontiguousarray(arr).tobytes(), out)


class _Reader:
    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    def read(self, size: int) -> bytes:
        if size < 0 or self._pos + size > len(self._data):
            raise ValueError("serialized data is truncated")
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def read_int(self) -> int:
        return _INT64.unpack(self.read(_INT64.size))[0]

    def read_blob(self) -> bytes:
        return self.read(self.read_int())

    @property
    def at_end(self) -> bool:
        return self._pos == len(self._data)


def _decode(reader: _Reader) -> Any:
    tag = reader.read(1)
    if tag == _TAG_NONE:
        return None
    if tag == _TAG_BOOL:
        return reader.read(1) != b"\x00"
    if tag == _TAG_INT:
        return reader.read_int()
    if tag == _TAG_FLOAT:
        return _FLOAT64.unpack(reader.read(_FLOAT64.size))[0]
    if tag == _TAG_STR:
        return reader.read_blob().decode("utf-8")
    if tag == _TAG_BYTES:
        return reader.read_blob()
    if tag in (_TAG_LIST, _TAG_TUPLE):
        items = [_decode(reader) for _ in range(reader.read_int())]
        return items if tag == _TAG_LIST else tuple(items)
    if tag == _TAG_DICT:
        result = {}
        for _ in range(reader.read_int()):
            key = _decode(reader)
            result[key] = _decode(reader)
        return result
    if tag == _TAG_ARRAY:
        shape = tuple(reader.read_int() for _ in range(reader.read_int()))
        dtype = np.dtype(reader.read_blob().decode("ascii"))
        raw = reader.read_blob()
        if len(raw) != dtype.itemsize * int(np.prod(shape, dtype=np.int64)):
            raise ValueError("array data does not match its shape")
        return np.frombuffer(raw, dtype=dtype).reshape(shape).copy()
    raise ValueError(f"unknown type tag in serialized data: {tag!r}")


def dumps(*args: Any) -> bytes:
    """Serialize ``args`` into bytes."""
    out = io.BytesIO()
    out.write(_MAGIC)
    out.write(_INT64.pack(len(args)))
    for arg in args:
        _encode(arg, out)
    return out.getvalue()


def loads(data: bytes) -> Tuple[Any, ...]:
    """Deserialize bytes produced by :func:`dumps` into a tuple of values."""
    reader = _Reader(bytes(data))
    if reader.read(len(_MAGIC)) != _MAGIC:
        raise ValueError("not a serialized archive")
    values = tuple(_decode(reader) for _ in range(reader.read_int()))
    if not reader.at_end:
        raise ValueError("trailing data after serialized values")
    return values


def save(destination: Union[str, os.PathLike, BinaryIO], *args: Any) -> None:
    """Serialize ``args`` to a file path or a writable binary stream."""
    data = dumps(*args)
    if hasattr(destination, "write"):
        destination.write(data)
    else:
        with open(destination, "wb") as fh:
            fh.write(data)


def load(source: Union[str, os.PathLike, BinaryIO]) -> Tuple[Any, ...]:
    """Deserialize values from a file path or a readable binary stream."""
    if hasattr(source, "read"):
        return loads(source.read())
    with open(source, "rb") as fh:
        return loads(fh.read())