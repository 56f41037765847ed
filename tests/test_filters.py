import numpy as np
import pytest
from scipy import signal

from imu_har.dsp.filters import (
    butterworth_coefficients,
    butterworth_filter,
    condition_axes,
    condition_axis,
    initial_filter_state,
    median_filter,
)

FS = 50.0


@pytest.mark.parametrize("cutoff", [0.3, 5.0, 20.0])
def test_coefficients_match_scipy_butter(cutoff):
    b, a = butterworth_coefficients(cutoff, FS)
    b_ref, a_ref = signal.butter(2, cutoff, btype="low", fs=FS)
    np.testing.assert_allclose(b, b_ref, rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(a, a_ref, rtol=1e-8, atol=1e-12)


def test_coefficients_have_unit_dc_gain():
    b, a = butterworth_coefficients(20.0, FS)
    assert np.sum(b) / np.sum(a) == pytest.approx(1.0)


@pytest.mark.parametrize("cutoff", [0.0, -1.0, 25.0, 30.0])
def test_cutoff_outside_nyquist_is_rejected(cutoff):
    with pytest.raises(ValueError):
        butterworth_coefficients(cutoff, FS)


def test_steady_state_passes_constant_unchanged():
    x = np.full(128, 9.8)
    np.testing.assert_allclose(butterworth_filter(x, 0.3, FS), x, rtol=1e-12)


def test_zero_state_starts_from_rest():
    b, _ = butterworth_coefficients(0.3, FS)
    y = butterworth_filter(np.full(128, 9.8), 0.3, FS, initial_state="zero")
    assert y[0] == pytest.approx(b[0] * 9.8)
    assert np.mean(y[:25]) < 0.5 * 9.8


def test_unknown_initial_state():
    b, a = butterworth_coefficients(20.0, FS)
    with pytest.raises(ValueError):
        initial_filter_state(b, a, 1.0, "warm")


def test_filter_state_does_not_leak_between_calls():
    rng = np.random.RandomState(3)
    x = rng.randn(128)
    first = butterworth_filter(x, 20.0, FS)
    butterworth_filter(rng.randn(128) * 100, 20.0, FS)
    np.testing.assert_array_equal(butterworth_filter(x, 20.0, FS), first)


def test_median_removes_isolated_spike():
    np.testing.assert_array_equal(median_filter(np.array([0.0, 0.0, 10.0, 0.0, 0.0])), np.zeros(5))


def test_median_edges_pass_through():
    out = median_filter(np.array([5.0, 1.0, 2.0, 3.0, 9.0]))
    np.testing.assert_array_equal(out, [5.0, 2.0, 2.0, 3.0, 9.0])


def test_median_size_one_is_identity():
    x = np.array([3.0, -1.0, 4.0])
    np.testing.assert_array_equal(median_filter(x, 1), x)


def test_constant_axis_is_all_gravity():
    comps = condition_axis(np.full(128, 9.8))
    np.testing.assert_allclose(comps.gravity, 9.8, rtol=1e-12)
    np.testing.assert_allclose(comps.body, 0.0, atol=1e-9)


def test_fast_motion_goes_to_body():
    t = np.arange(256) / FS
    x = np.sin(2 * np.pi * 5.0 * t)
    comps = condition_axis(x)
    tail = slice(128, None)
    assert np.max(np.abs(comps.gravity[tail])) < 0.05
    assert np.std(comps.body[tail]) > 0.6


def test_body_plus_gravity_equals_denoised_signal():
    rng = np.random.RandomState(0)
    xyz = rng.randn(128, 3) + [0.0, 0.0, 9.8]
    comps = condition_axes(xyz)
    assert comps.body.shape == comps.gravity.shape == (128, 3)
    for c in range(3):
        denoised = butterworth_filter(median_filter(xyz[:, c]), 20.0, FS)
        np.testing.assert_allclose(comps.body[:, c] + comps.gravity[:, c], denoised, atol=1e-12)


def test_condition_axes_requires_2d():
    with pytest.raises(ValueError):
        condition_axes(np.zeros(10))
