import numpy as np
import pytest

from flashkit.dataset.merge_dataset import MergeDataset
from flashkit.dataset.tensor_dataset import TensorDataset


def _make(size, seed):
    return TensorDataset([np.random.default_rng(seed).random((5, 4, size))])


def test_documented_example():
    ds1, ds2 = _make(10, 1), _make(10, 2)
    merged = MergeDataset([ds1, ds2])
    assert len(merged) == len(ds1)
    sample = merged.get(5)
    assert len(sample) == 2
    np.testing.assert_array_equal(sample[0], ds1.get(5)[0])
    np.testing.assert_array_equal(sample[1], ds2.get(5)[0])


def test_size_is_max():
    short, long = _make(3, 1), _make(5, 2)
    assert len(MergeDataset([short, long])) == len(long)


def test_missing_fields_skipped():
    short, long = _make(3, 1), _make(5, 2)
    sample = MergeDataset([short, long]).get(4)
    assert len(sample) == 1
    np.testing.assert_array_equal(sample[0], long.get(4)[0])


def test_empty_merge_has_no_samples():
    merged = MergeDataset([])
    assert len(merged) == 0
    with pytest.raises(IndexError):
        merged.get(0)


def test_out_of_range():
    merged = MergeDataset([_make(3, 1)])
    with pytest.raises(IndexError):
        merged.get(3)