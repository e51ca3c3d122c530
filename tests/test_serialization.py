import io

import numpy as np
import pytest

from flashkit.common.serialization import (
    MAX_VERSION,
    SerializeAs,
    Versioned,
    dumps,
    load,
    load_fields,
    loads,
    save,
    save_fields,
    serialize_as,
    versioned,
)


class Record:
    def __init__(self):
        self.x = 0
        self.y = 0
        self.rate = 0


FIELDS = ["x", versioned("y", 1)]


def test_round_trip_plain_values():
    values = (None, True, False, -7, 3.5, "héllo", b"\x00\x01", [1, "a"], (2, 3.0), {"k": [1, 2]})
    assert loads(dumps(*values)) == values


def test_round_trip_arrays_keep_dtype_and_shape():
    arrays = [
        np.arange(24, dtype=np.float32).reshape(2, 3, 4),
        np.array([1, -2, 3], dtype=np.int64),
        np.zeros((0, 5), dtype=np.float64),
        np.array([[True, False]]),
    ]
    (restored,) = loads(dumps(arrays))
    assert len(restored) == len(arrays)
    for original, copy in zip(arrays, restored):
        assert copy.dtype == original.dtype
        assert copy.shape == original.shape
        assert np.array_equal(copy, original)


def test_round_trip_non_contiguous_array():
    arr = np.arange(12, dtype=np.int32).reshape(3, 4).T
    (restored,) = loads(dumps(arr))
    assert np.array_equal(restored, arr)


def test_save_and_load_file(tmp_path):
    path = tmp_path / "archive.bin"
    save(path, 1, "two", np.ones(3))
    one, two, three = load(path)
    assert one == 1
    assert two == "two"
    assert np.array_equal(three, np.ones(3))


def test_save_and_load_stream():
    stream = io.BytesIO()
    save(stream, [np.arange(4)])
    stream.seek(0)
    (result,) = load(stream)
    assert np.array_equal(result[0], np.arange(4))


def test_unsupported_object_raises():
    with pytest.raises(TypeError):
        dumps(object())


def test_object_array_rejected():
    with pytest.raises(TypeError):
        dumps(np.array([object()], dtype=object))


def test_integer_overflow_raises():
    with pytest.raises(OverflowError):
        dumps(1 << 70)


def test_truncated_data_raises():
    data = dumps("abcdef", np.arange(5))
    with pytest.raises(ValueError):
        loads(data[:-3])


def test_bad_magic_raises():
    with pytest.raises(ValueError):
        loads(b"XXXX" + dumps(1)[4:])


def test_trailing_data_raises():
    with pytest.raises(ValueError):
        loads(dumps(1) + b"?")


def test_versioned_defaults_to_max_version():
    spec = versioned("y", 2)
    assert spec == Versioned("y", 2, MAX_VERSION)


def test_versioned_field_skipped_for_old_version():
    rec = Record()
    rec.x, rec.y = 4, 9
    assert save_fields(rec, 0, FIELDS) == [4]
    assert save_fields(rec, 1, FIELDS) == [4, 9]


def test_versioned_upper_bound_is_inclusive():
    rec = Record()
    rec.x = 5
    fields = [versioned("x", 1, 2)]
    assert save_fields(rec, 2, fields) == [5]
    assert save_fields(rec, 3, fields) == []


def test_load_fields_old_version_keeps_default():
    rec = Record()
    load_fields(rec, 0, FIELDS, [11])
    assert rec.x == 11
    assert rec.y == 0


def test_fields_round_trip_through_archive():
    rec = Record()
    rec.x, rec.y = 1, 2
    (state,) = loads(dumps(save_fields(rec, 1, FIELDS)))
    restored = Record()
    load_fields(restored, 1, FIELDS, state)
    assert (restored.x, restored.y) == (1, 2)


def test_serialize_as_static_conversion():
    rec = Record()
    rec.rate = 3
    fields = [serialize_as("rate", float)]
    state = save_fields(rec, 0, fields)
    assert state == [3.0]
    assert isinstance(state[0], float)
    restored = Record()
    load_fields(restored, 0, fields, [7.0])
    assert restored.rate == 7
    assert isinstance(restored.rate, int)


def test_serialize_as_with_converters():
    rec = Record()
    rec.rate = 250
    fields = [serialize_as("rate", str, lambda v: str(v // 10), lambda s: int(s) * 10)]
    state = save_fields(rec, 0, fields)
    assert state == ["25"]
    restored = Record()
    load_fields(restored, 0, fields, state)
    assert restored.rate == 250


def test_versioned_serialize_as():
    rec = Record()
    rec.rate = 2
    fields = [versioned(SerializeAs("rate", float), 1)]
    assert save_fields(rec, 0, fields) == []
    assert save_fields(rec, 1, fields) == [2.0]


def test_load_fields_missing_values_raises():
    with pytest.raises(ValueError):
        load_fields(Record(), 1, FIELDS, [1])


def test_invalid_field_spec_raises():
    with pytest.raises(TypeError):
        save_fields(Record(), 0, [42])