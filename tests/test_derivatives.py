import numpy as np
import pytest

from imu_har.dsp.derivatives import jerk, magnitude
from imu_har.errors import DegenerateTimestamp


def test_jerk_is_per_second_difference():
    out = jerk(np.array([0.0, 1.0, 3.0]), np.array([0, 20, 40]))
    np.testing.assert_allclose(out, [50.0, 100.0])


def test_jerk_uses_actual_timestamp_deltas():
    out = jerk(np.array([0.0, 1.0, 2.0]), np.array([0, 20, 60]))
    np.testing.assert_allclose(out, [50.0, 25.0])


def test_jerk_on_columns():
    s = np.arange(12, dtype=float).reshape(4, 3)
    out = jerk(s, np.array([0, 20, 40, 60]))
    assert out.shape == (3, 3)
    np.testing.assert_allclose(out, 150.0)


def test_jerk_length_is_n_minus_one():
    assert jerk(np.zeros(128), np.arange(128) * 20).shape == (127,)


def test_repeated_timestamp_raises():
    with pytest.raises(DegenerateTimestamp) as info:
        jerk(np.zeros(5), np.array([0, 20, 40, 40, 60]))
    assert info.value.index == 3


def test_jerk_length_mismatch():
    with pytest.raises(ValueError):
        jerk(np.zeros(4), np.arange(3))


def test_magnitude_forms_agree():
    rng = np.random.RandomState(0)
    xyz = rng.randn(50, 3)
    a = magnitude(xyz)
    b = magnitude(xyz[:, 0], xyz[:, 1], xyz[:, 2])
    np.testing.assert_allclose(a, b)
    assert np.all(a >= 0)


def test_magnitude_pythagorean():
    np.testing.assert_allclose(magnitude([3.0], [4.0], [0.0]), [5.0])


def test_magnitude_shape_mismatch():
    with pytest.raises(ValueError):
        magnitude([1.0, 2.0], [1.0], [1.0])
