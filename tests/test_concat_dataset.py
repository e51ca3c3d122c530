import numpy as np
import pytest

from flashkit.dataset.concat_dataset import ConcatDataset
from flashkit.dataset.tensor_dataset import TensorDataset


def _make(size, seed):
    return TensorDataset([np.random.default_rng(seed).random((5, 4, size))])


@pytest.fixture
def parts():
    return _make(10, 1), _make(20, 2)


def test_size(parts):
    ds1, ds2 = parts
    assert len(ConcatDataset([ds1, ds2])) == len(ds1) + len(ds2)


def test_documented_lookup(parts):
    ds1, ds2 = parts
    concat = ConcatDataset([ds1, ds2])
    np.testing.assert_array_equal(concat.get(15)[0], ds2.get(5)[0])


def test_boundaries(parts):
    ds1, ds2 = parts
    concat = ConcatDataset([ds1, ds2])
    np.testing.assert_array_equal(concat.get(9)[0], ds1.get(9)[0])
    np.testing.assert_array_equal(concat.get(10)[0], ds2.get(0)[0])
    np.testing.assert_array_equal(concat.get(len(concat) - 1)[0], ds2.get(len(ds2) - 1)[0])


def test_iteration_matches_parts(parts):
    ds1, ds2 = parts
    expected = [s[0] for s in ds1] + [s[0] for s in ds2]
    got = [s[0] for s in ConcatDataset([ds1, ds2])]
    assert len(got) == len(expected)
    assert all(np.array_equal(a, b) for a, b in zip(got, expected))


def test_empty_list_rejected():
    with pytest.raises(ValueError):
        ConcatDataset([])


def test_out_of_range(parts):
    concat = ConcatDataset(list(parts))
    with pytest.raises(IndexError):
        concat.get(len(concat))