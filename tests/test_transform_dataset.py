import numpy as np
import pytest

from flashkit.dataset.tensor_dataset import TensorDataset
from flashkit.dataset.transform_dataset import TransformDataset


@pytest.fixture
def ds():
    rng = np.random.default_rng(4)
    return TensorDataset([rng.random((5, 4, 10)), rng.random((7, 10))])


def test_negate(ds):
    transformed = TransformDataset(ds, [lambda a: -a])
    assert len(transformed) == len(ds)
    np.testing.assert_array_equal(transformed.get(5)[0], -ds.get(5)[0])


def test_missing_transform_is_identity(ds):
    transformed = TransformDataset(ds, [lambda a: -a])
    np.testing.assert_array_equal(transformed.get(5)[1], ds.get(5)[1])


def test_none_transform_skipped(ds):
    transformed = TransformDataset(ds, [None, lambda a: a * 2])
    sample = transformed.get(3)
    np.testing.assert_array_equal(sample[0], ds.get(3)[0])
    np.testing.assert_array_equal(sample[1], ds.get(3)[1] * 2)


def test_field_count_preserved(ds):
    transformed = TransformDataset(ds, [])
    assert len(transformed.get(0)) == len(ds.get(0))


def test_null_dataset_rejected():
    with pytest.raises(ValueError):
        TransformDataset(None, [])


def test_out_of_range(ds):
    with pytest.raises(IndexError):
        TransformDataset(ds, []).get(len(ds))