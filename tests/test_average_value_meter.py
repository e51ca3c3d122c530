import numpy as np
import pytest

from flashkit.meter.average_value_meter import AverageValueMeter


def test_empty_meter_reports_zeros():
    assert AverageValueMeter().value() == [0.0, 0.0, 0.0]


def test_values_match_numpy_statistics():
    data = [1.5, 2.0, -3.0, 4.25, 0.5]
    meter = AverageValueMeter()
    for x in data:
        meter.add(x)
    mean, var, n = meter.value()
    assert mean == pytest.approx(np.mean(data))
    assert var == pytest.approx(np.var(data, ddof=1))
    assert n == len(data)


def test_single_value_has_zero_variance():
    meter = AverageValueMeter()
    meter.add(7.0)
    assert meter.value() == [7.0, 0.0, 1.0]


def test_repeated_add_equals_add_with_count():
    a = AverageValueMeter()
    b = AverageValueMeter()
    a.add(3.0, 4)
    a.add(1.0)
    for _ in range(4):
        b.add(3.0)
    b.add(1.0)
    assert a.value() == pytest.approx(b.value())


def test_add_array_matches_scalar_adds():
    data = np.array([[1.0, 2.0], [3.0, 5.0]])
    a = AverageValueMeter()
    a.add_array(data)
    b = AverageValueMeter()
    for x in data.ravel():
        b.add(float(x))
    assert a.value() == pytest.approx(b.value())
    assert a.value()[2] == data.size


def test_reset_clears_counters():
    meter = AverageValueMeter()
    meter.add(2.0, 3)
    meter.reset()
    assert meter.value() == [0.0, 0.0, 0.0]