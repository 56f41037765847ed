from __future__ import annotations

import logging
import math
from typing import Dict

import numpy as np

from imu_har.errors import DegenerateRange, ZeroVector

logger = logging.getLogger(__name__)

ZERO_NORM = 1e-12
UNIT_AXES = {
    "x": np.array([1.0, 0.0, 0.0]),
    "y": np.array([0.0, 1.0, 0.0]),
    "z": np.array([0.0, 0.0, 1.0]),
}


def angle_between(a, b) -> float:
    """acos(a.b / |a||b|) in radians.

    Raises ZeroVector for a zero-magnitude operand and DegenerateRange for a non-finite one.
    """

    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    na = float(np.linalg.norm(a))
    nb = float(np.linalg.norm(b))
    if not (np.isfinite(na) and np.isfinite(nb)):
        raise DegenerateRange(f"undefined angle: non-finite operand |a|={na:.3g}, |b|={nb:.3g}")
    if na <= ZERO_NORM or nb <= ZERO_NORM:
        raise ZeroVector(f"undefined angle: |a|={na:.3g}, |b|={nb:.3g}")
    cos = float(np.dot(a, b)) / (na * nb)
    return math.acos(min(1.0, max(-1.0, cos)))


def _safe_angle(name: str, a, b) -> float:
    try:
        return angle_between(a, b)
    except (ZeroVector, DegenerateRange) as exc:
        logger.debug("%s: %s; using 0.0", name, exc)
        return 0.0


def angle_features(
    body_acc: np.ndarray,
    body_acc_jerk: np.ndarray,
    body_gyro: np.ndarray,
    body_gyro_jerk: np.ndarray,
    gravity: np.ndarray,
) -> Dict[str, float]:
    """The seven UCI angle features from [n, 3] signals of one window."""

    gravity_mean = np.mean(gravity, axis=0)
    pairs = {
        "angle(tBodyAccMean,gravity)": np.mean(body_acc, axis=0),
        "angle(tBodyAccJerkMean,gravityMean)": np.mean(body_acc_jerk, axis=0),
        "angle(tBodyGyroMean,gravityMean)": np.mean(body_gyro, axis=0),
        "angle(tBodyGyroJerkMean,gravityMean)": np.mean(body_gyro_jerk, axis=0),
    }
    feats = {name: _safe_angle(name, vec, gravity_mean) for name, vec in pairs.items()}
    for axis, unit in UNIT_AXES.items():
        name = f"angle({axis},gravityMean)"
        feats[name] = _safe_angle(name, unit, gravity_mean)
    return feats
