import numpy as np
import pytest

from flashkit.dataset.tensor_dataset import TensorDataset


@pytest.fixture
def tensors():
    rng = np.random.default_rng(0)
    return rng.random((5, 4, 10)), rng.random((7, 10))


def test_size_and_sample_shapes(tensors):
    ds = TensorDataset(list(tensors))
    assert len(ds) == 10
    sample = ds.get(0)
    assert sample[0].shape == (5, 4, 1)
    assert sample[1].shape == (7, 1)


def test_sample_values_match_slices(tensors):
    first, second = tensors
    ds = TensorDataset([first, second])
    sample = ds[6]
    assert np.array_equal(sample[0][:, :, 0], first[:, :, 6])
    assert np.array_equal(sample[1][:, 0], second[:, 6])


def test_trailing_singleton_axes_are_skipped():
    arr = np.arange(6).reshape(6, 1, 1)
    ds = TensorDataset([arr])
    assert len(ds) == 6
    assert ds[2][0].reshape(-1).tolist() == [2]


def test_shorter_tensor_yields_empty_array():
    short = np.arange(3)
    long = np.arange(5)
    ds = TensorDataset([short, long])
    assert len(ds) == 5
    sample = ds[4]
    assert sample[0].size == 0
    assert sample[0].dtype == short.dtype
    assert sample[1].tolist() == [4]


def test_iteration_covers_all_samples():
    arr = np.arange(8)
    ds = TensorDataset([arr])
    assert [s[0].item() for s in ds] == arr.tolist()


def test_sample_is_a_copy():
    arr = np.arange(4)
    ds = TensorDataset([arr])
    ds[1][0][0] = 99
    assert arr[1] == 1


def test_no_tensors_raises():
    with pytest.raises(ValueError):
        TensorDataset([])


def test_empty_tensor_raises():
    with pytest.raises(ValueError):
        TensorDataset([np.arange(3), np.zeros((0, 2))])


@pytest.mark.parametrize("idx", [-1, 10])
def test_out_of_range_raises(tensors, idx):
    ds = TensorDataset(list(tensors))
    with pytest.raises(IndexError):
        ds.get(idx)