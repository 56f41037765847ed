"""Single-window feature extraction: two sensor windows in, one canonical FeatureVector out."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np

from imu_har.data.windowing import Sample, Window
from imu_har.dsp.conditioning import ConditionedSignal, condition_sensor
from imu_har.features.angles import angle_features
from imu_har.features.names import AXES, BANDS, FEATURE_NAMES
from imu_har.features.stats import (
    bands_energy,
    correlation_features,
    frequency_features,
    sma,
    time_features,
)
from imu_har.utils.config import FeatureConfig, resolve_feature_config

logger = logging.getLogger(__name__)

FeatureVector = Dict[str, float]
WindowLike = Union[Window, Sequence[Sample]]


def _time_axial(prefix: str, xyz: np.ndarray, fc: FeatureConfig, out: Dict[str, float]) -> None:
    for c, axis in enumerate(AXES):
        for stat, v in time_features(xyz[:, c], fc.histogram_bins, fc.ar_order).items():
            out[f"{prefix}-{stat}-{axis}"] = v
    out[f"{prefix}-sma()"] = sma(xyz)
    for stat, v in correlation_features(xyz).items():
        out[f"{prefix}-{stat}"] = v


def _time_mag(prefix: str, mag: np.ndarray, fc: FeatureConfig, out: Dict[str, float]) -> None:
    for stat, v in time_features(mag, fc.histogram_bins, fc.ar_order).items():
        out[f"{prefix}-{stat}"] = v
    out[f"{prefix}-sma()"] = sma(mag)


def _freq_axial(prefix: str, spec_mag: np.ndarray, fc: FeatureConfig, out: Dict[str, float]) -> None:
    bands = BANDS[: fc.frequency_band_count]
    for c, axis in enumerate(AXES):
        m = spec_mag[:, c]
        for stat, v in frequency_features(m, fc.histogram_bins).items():
            out[f"{prefix}-{stat}-{axis}"] = v
        for label, v in bands_energy(m, bands).items():
            out[f"{prefix}-{label}-{axis}"] = v
    out[f"{prefix}-sma()"] = sma(spec_mag)


def _freq_mag(prefix: str, spec_mag: np.ndarray, fc: FeatureConfig, out: Dict[str, float]) -> None:
    for stat, v in frequency_features(spec_mag, fc.histogram_bins).items():
        out[f"{prefix}-{stat}"] = v
    out[f"{prefix}-sma()"] = sma(spec_mag)


def features_from_signals(acc: ConditionedSignal, gyro: ConditionedSignal, fc: FeatureConfig) -> Dict[str, float]:
    """Raw (unordered) feature dict from conditioned accelerometer and gyroscope signals."""

    raw: Dict[str, float] = {}

    _time_axial("tBodyAcc", acc.body, fc, raw)
    _time_axial("tGravityAcc", acc.gravity, fc, raw)
    _time_axial("tBodyAccJerk", acc.jerk, fc, raw)
    _time_axial("tBodyGyro", gyro.body, fc, raw)
    _time_axial("tBodyGyroJerk", gyro.jerk, fc, raw)

    _time_mag("tBodyAccMag", acc.body_mag, fc, raw)
    _time_mag("tGravityAccMag", acc.gravity_mag, fc, raw)
    _time_mag("tBodyAccJerkMag", acc.jerk_mag, fc, raw)
    _time_mag("tBodyGyroMag", gyro.body_mag, fc, raw)
    _time_mag("tBodyGyroJerkMag", gyro.jerk_mag, fc, raw)

    _freq_axial("fBodyAcc", acc.f_body, fc, raw)
    _freq_axial("fBodyAccJerk", acc.f_jerk, fc, raw)
    _freq_axial("fBodyGyro", gyro.f_body, fc, raw)

    _freq_mag("fBodyAccMag", acc.f_body_mag, fc, raw)
    _freq_mag("fBodyBodyAccJerkMag", acc.f_jerk_mag, fc, raw)
    _freq_mag("fBodyBodyGyroMag", gyro.f_body_mag, fc, raw)
    _freq_mag("fBodyBodyGyroJerkMag", gyro.f_jerk_mag, fc, raw)

    raw.update(angle_features(acc.body, acc.jerk, gyro.body, gyro.jerk, acc.gravity))
    return raw


def to_feature_vector(raw: Dict[str, float]) -> FeatureVector:
    """Order by the canonical list; missing or non-finite entries become 0.0."""

    vec: FeatureVector = {}
    bad = []
    for name in FEATURE_NAMES:
        v = float(raw.get(name, 0.0))
        if not math.isfinite(v):
            bad.append(name)
            v = 0.0
        vec[name] = v
    if bad:
        logger.warning("replaced %d non-finite feature values with 0.0 (first: %s)", len(bad), bad[0])
    return vec


def extract_window_features(
    acc_window: WindowLike,
    gyro_window: WindowLike,
    cutoff_freq: Optional[float] = None,
    config: Optional[Any] = None,
) -> FeatureVector:
    """561 canonical features for one accelerometer/gyroscope window pair.

    Args:
        acc_window: accelerometer samples (Window or sequence of Sample)
        gyro_window: gyroscope samples, same length as acc_window
        cutoff_freq: Butterworth noise cutoff in Hz; None keeps the configured one (20 Hz default)
        config: FeatureConfig, nested config dict, or None for defaults

    Returns:
        dict feature name -> float, keys in canonical order

    Raises:
        DegenerateTimestamp: consecutive samples with equal timestamps in either window
    """

    fc = resolve_feature_config(config)
    if cutoff_freq is not None:
        fc = fc.with_cutoff(cutoff_freq)
    if len(acc_window) != len(gyro_window):
        raise ValueError(f"acc/gyro windows differ in length: {len(acc_window)} vs {len(gyro_window)}")

    acc = condition_sensor(acc_window, fc)
    gyro = condition_sensor(gyro_window, fc)
    vec = to_feature_vector(features_from_signals(acc, gyro, fc))
    logger.debug("extracted %d features from window of %d samples", len(vec), len(acc_window))
    return vec
