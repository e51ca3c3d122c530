import numpy as np
import pytest

from flashkit.dataset.dataset import Dataset


class RangeDataset(Dataset):
    def __init__(self, n):
        self._n = n

    def __len__(self):
        return self._n

    def get(self, idx):
        self._check_index(idx)
        return [np.array([idx])]


def test_dataset_is_abstract():
    with pytest.raises(TypeError):
        Dataset()


def test_getitem_delegates_to_get():
    ds = RangeDataset(5)
    assert Dataset.__getitem__(ds, 3)[0][0] == 3
    assert np.array_equal(Dataset.__getitem__(ds, 2)[0], ds.get(2)[0])


def test_iteration_visits_every_index_in_order():
    ds = RangeDataset(4)
    assert [sample[0][0] for sample in Dataset.__iter__(ds)] == [0, 1, 2, 3]


def test_iteration_over_empty_dataset():
    assert list(Dataset.__iter__(RangeDataset(0))) == []


@pytest.mark.parametrize("idx", [-1, 5, 100])
def test_out_of_range_index_raises(idx):
    ds = RangeDataset(5)
    with pytest.raises(IndexError):
        Dataset.__getitem__(ds, idx)


def test_non_integer_index_raises():
    with pytest.raises(TypeError):
        Dataset.__getitem__(RangeDataset(3), "1")


def test_iteration_restarts():
    ds = RangeDataset(3)
    first = [s[0][0] for s in Dataset.__iter__(ds)]
    second = [s[0][0] for s in Dataset.__iter__(ds)]
    assert first == second == [0, 1, 2]