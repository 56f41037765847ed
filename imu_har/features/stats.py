"""Statistics over one series (time domain) or one magnitude spectrum (frequency domain).

Primitives raise DegenerateRange when a range or denominator is zero; the
`*_features` builders catch it and emit 0.0 for that statistic only.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence, Tuple

import numpy as np
from scipy import stats as sps

from imu_har.errors import DegenerateRange
from imu_har.features.burg import burg_reflection
from imu_har.features.names import AR_COEFFS, BANDS, REFERENCE_BINS, band_label

logger = logging.getLogger(__name__)


def _as_series(d) -> np.ndarray:
    d = np.asarray(d, dtype=np.float64)
    if d.ndim != 1 or d.size == 0:
        raise ValueError(f"Expected non-empty 1D series, got shape {d.shape}")
    return d


def mean(d) -> float:
    return float(np.mean(_as_series(d)))


def std(d) -> float:
    """Population standard deviation (divide by n)."""
    return float(np.std(_as_series(d)))


def mad(d) -> float:
    """Mean absolute deviation from the median."""
    d = _as_series(d)
    return float(np.mean(np.abs(d - np.median(d))))


def energy(d) -> float:
    """Mean of squares."""
    d = _as_series(d)
    return float(np.mean(d ** 2))


def iqr(d) -> float:
    """Q3 - Q1 using index-floor quantiles of the sorted series."""
    s = np.sort(_as_series(d))
    n = s.size
    return float(s[int(np.floor(0.75 * n))] - s[int(np.floor(0.25 * n))])


def entropy(d, bins: int = 10) -> float:
    """Shannon entropy (bits) of an equal-width histogram over [min, max]."""

    d = _as_series(d)
    lo = float(d.min())
    rng = float(d.max()) - lo
    if rng == 0.0:
        raise DegenerateRange("entropy: max == min")
    if not np.isfinite(rng):
        raise DegenerateRange(f"entropy: non-finite range ({rng})")

    idx = np.minimum(np.floor((d - lo) / rng * bins).astype(np.int64), bins - 1)
    counts = np.bincount(idx, minlength=bins)
    p = counts[counts > 0] / float(d.size)
    return float(-np.sum(p * np.log2(p)))


def correlation(a, b) -> float:
    """Pearson correlation of two equal-length series, clipped to [-1, 1]."""

    a = _as_series(a)
    b = _as_series(b)
    if a.shape != b.shape:
        raise ValueError(f"correlation needs equal lengths, got {a.size} and {b.size}")
    da = a - a.mean()
    db = b - b.mean()
    den = float(np.sqrt(np.sum(da ** 2) * np.sum(db ** 2)))
    if den == 0.0:
        raise DegenerateRange("correlation: zero variance")
    return float(np.clip(np.sum(da * db) / den, -1.0, 1.0))


def sma(xyz) -> float:
    """Signal magnitude area: mean over samples of |x| + |y| + |z| (or |m| for one series)."""

    arr = np.asarray(xyz, dtype=np.float64)
    if arr.ndim == 1:
        return float(np.mean(np.abs(arr)))
    return float(np.mean(np.sum(np.abs(arr), axis=1)))


def mean_freq(m) -> float:
    """Magnitude-weighted mean bin index."""
    m = _as_series(m)
    total = float(np.sum(m))
    if total == 0.0:
        raise DegenerateRange("meanFreq: zero total magnitude")
    return float(np.sum(np.arange(m.size) * m) / total)


def max_inds(m) -> float:
    return float(np.argmax(_as_series(m)))


def skewness(m) -> float:
    m = _as_series(m)
    if np.std(m) == 0.0:
        raise DegenerateRange("skewness: zero spread")
    out = float(sps.skew(m, bias=True))
    if not np.isfinite(out):
        raise DegenerateRange("skewness: spread below float resolution")
    return out


def kurtosis(m) -> float:
    """Excess kurtosis (normal = 0)."""
    m = _as_series(m)
    if np.std(m) == 0.0:
        raise DegenerateRange("kurtosis: zero spread")
    out = float(sps.kurtosis(m, fisher=True, bias=True))
    if not np.isfinite(out):
        raise DegenerateRange("kurtosis: spread below float resolution")
    return out


def band_energy(m, band: Tuple[int, int]) -> float:
    """Mean squared magnitude over a 1-based inclusive band, scaled by the bin-width factor."""

    m = _as_series(m)
    width = m.size // REFERENCE_BINS
    start = (band[0] - 1) * width
    end = band[1] * width
    if end <= start:
        raise DegenerateRange(f"band {band}: fewer than {REFERENCE_BINS} bins ({m.size})")
    seg = m[start:end]
    return float(np.sum(seg ** 2) / (end - start))


def _guarded(name: str, fn: Callable[..., float], *args) -> float:
    try:
        return fn(*args)
    except DegenerateRange as exc:
        logger.debug("%s degenerate (%s); using 0.0", name, exc)
        return 0.0


def common_features(d, histogram_bins: int = 10) -> Dict[str, float]:
    d = _as_series(d)
    return {
        "mean()": mean(d),
        "std()": std(d),
        "mad()": mad(d),
        "max()": float(d.max()),
        "min()": float(d.min()),
        "energy()": energy(d),
        "iqr()": iqr(d),
        "entropy()": _guarded("entropy()", entropy, d, histogram_bins),
    }


def time_features(d, histogram_bins: int = 10, ar_order: int = 4) -> Dict[str, float]:
    """Time-domain statistics keyed by UCI stat name (`mean()`, ..., `arCoeff()1..4`)."""

    feats = common_features(d, histogram_bins)
    k = burg_reflection(d, ar_order)
    for i in range(AR_COEFFS):
        feats[f"arCoeff(){i + 1}"] = float(k[i]) if i < k.size else 0.0
    return feats


def frequency_features(m, histogram_bins: int = 10) -> Dict[str, float]:
    """Frequency-domain statistics of a magnitude spectrum."""

    feats = common_features(m, histogram_bins)
    feats["maxInds"] = max_inds(m)
    feats["meanFreq()"] = _guarded("meanFreq()", mean_freq, m)
    feats["skewness()"] = _guarded("skewness()", skewness, m)
    feats["kurtosis()"] = _guarded("kurtosis()", kurtosis, m)
    return feats


def bands_energy(m, bands: Sequence[Tuple[int, int]] = BANDS) -> Dict[str, float]:
    return {band_label(b): _guarded(band_label(b), band_energy, m, b) for b in bands}


def correlation_features(xyz) -> Dict[str, float]:
    xyz = np.asarray(xyz, dtype=np.float64)
    return {
        "correlation()-x,y": _guarded("correlation()-x,y", correlation, xyz[:, 0], xyz[:, 1]),
        "correlation()-x,z": _guarded("correlation()-x,z", correlation, xyz[:, 0], xyz[:, 2]),
        "correlation()-y,z": _guarded("correlation()-y,z", correlation, xyz[:, 1], xyz[:, 2]),
    }
