import math

import numpy as np
import pytest
from scipy import stats as sps

from imu_har.errors import DegenerateRange
from imu_har.features import stats
from imu_har.features.names import BANDS


def test_correlation_perfect_and_inverse():
    assert stats.correlation([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)
    assert stats.correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)


def test_correlation_constant_series_is_degenerate():
    with pytest.raises(DegenerateRange):
        stats.correlation([1, 1, 1], [1, 2, 3])
    feats = stats.correlation_features(np.ones((10, 3)))
    assert feats == {"correlation()-x,y": 0.0, "correlation()-x,z": 0.0, "correlation()-y,z": 0.0}


def test_population_std():
    assert stats.std([1, 2, 3, 4]) == pytest.approx(math.sqrt(1.25))


def test_mad_is_about_the_median():
    assert stats.mad([1, 2, 3, 4, 100]) == pytest.approx(20.2)


def test_energy_is_mean_of_squares():
    assert stats.energy([1, 2, 3]) == pytest.approx(14 / 3)


def test_iqr_uses_floor_indices():
    assert stats.iqr(np.arange(8.0)) == 4.0
    assert stats.iqr([5.0]) == 0.0


def test_entropy_uniform_histogram():
    assert stats.entropy(np.arange(10.0), bins=10) == pytest.approx(math.log2(10))


def test_entropy_constant_series():
    with pytest.raises(DegenerateRange):
        stats.entropy(np.full(5, 2.0))
    assert stats.common_features(np.full(5, 2.0))["entropy()"] == 0.0


def test_sma():
    assert stats.sma([[1, -1, 1], [2, 2, -2]]) == pytest.approx(4.5)
    assert stats.sma([-1.0, 3.0]) == pytest.approx(2.0)


def test_mean_freq_and_max_inds():
    m = np.array([0.0, 1.0, 0.0, 1.0])
    assert stats.mean_freq(m) == pytest.approx(2.0)
    assert stats.max_inds([0.1, 0.5, 3.0, 0.2]) == 2.0
    with pytest.raises(DegenerateRange):
        stats.mean_freq(np.zeros(4))


def test_skewness_and_kurtosis_follow_scipy():
    rng = np.random.RandomState(0)
    m = np.abs(rng.randn(64))
    assert stats.skewness(m) == pytest.approx(sps.skew(m))
    assert stats.kurtosis(m) == pytest.approx(sps.kurtosis(m))
    with pytest.raises(DegenerateRange):
        stats.skewness(np.ones(8))
    with pytest.raises(DegenerateRange):
        stats.kurtosis(np.ones(8))


def test_band_energy_scales_with_bin_width():
    assert stats.band_energy(np.ones(64), (1, 8)) == pytest.approx(1.0)
    m = np.zeros(128)
    m[:16] = 2.0
    assert stats.band_energy(m, (1, 8)) == pytest.approx(4.0)
    assert stats.band_energy(m, (9, 16)) == 0.0


def test_bands_energy_short_spectrum_is_zero():
    out = stats.bands_energy(np.ones(32))
    assert len(out) == len(BANDS)
    assert all(v == 0.0 for v in out.values())


def test_empty_series_is_rejected():
    with pytest.raises(ValueError):
        stats.mean([])


def test_time_features_keys_and_ar_padding():
    rng = np.random.RandomState(1)
    d = rng.randn(128)
    feats = stats.time_features(d, ar_order=2)
    assert list(feats) == [
        "mean()", "std()", "mad()", "max()", "min()", "energy()", "iqr()", "entropy()",
        "arCoeff()1", "arCoeff()2", "arCoeff()3", "arCoeff()4",
    ]
    assert feats["arCoeff()3"] == 0.0 and feats["arCoeff()4"] == 0.0


def test_frequency_features_of_zero_spectrum():
    feats = stats.frequency_features(np.zeros(64))
    assert set(feats) >= {"maxInds", "meanFreq()", "skewness()", "kurtosis()"}
    assert all(v == 0.0 for v in feats.values())


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_entropy_non_finite_sample_is_degenerate(bad):
    d = np.arange(10.0)
    d[4] = bad
    with pytest.raises(DegenerateRange):
        stats.entropy(d)
    assert stats.common_features(d)["entropy()"] == 0.0


def test_entropy_overflowing_range_is_degenerate():
    with pytest.raises(DegenerateRange):
        stats.entropy(np.array([-1e308, 0.0, 1e308]))
