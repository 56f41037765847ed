"""Canonical UCI HAR feature names (561, fixed order).

The order here is the column order of every exported feature table; never rely on
dict iteration order for it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Tuple

AXES: Tuple[str, ...] = ("x", "y", "z")
AXIS_PAIRS: Tuple[Tuple[str, str], ...] = (("x", "y"), ("x", "z"), ("y", "z"))

TIME_AXIAL_SIGNALS = ("tBodyAcc", "tGravityAcc", "tBodyAccJerk", "tBodyGyro", "tBodyGyroJerk")
TIME_MAG_SIGNALS = ("tBodyAccMag", "tGravityAccMag", "tBodyAccJerkMag", "tBodyGyroMag", "tBodyGyroJerkMag")
FREQ_AXIAL_SIGNALS = ("fBodyAcc", "fBodyAccJerk", "fBodyGyro")
FREQ_MAG_SIGNALS = ("fBodyAccMag", "fBodyBodyAccJerkMag", "fBodyBodyGyroMag", "fBodyBodyGyroJerkMag")

# 1-based inclusive bin ranges over the 64-bin reference spectrum
BANDS: Tuple[Tuple[int, int], ...] = (
    (1, 8), (9, 16), (17, 24), (25, 32), (33, 40), (41, 48), (49, 56), (57, 64),
    (1, 16), (17, 32), (33, 48), (49, 64),
    (1, 24), (25, 48),
)
REFERENCE_BINS = 64

AR_COEFFS = 4
BASIC_STATS = ("mean()", "std()", "mad()", "max()", "min()")
SPREAD_STATS = ("energy()", "iqr()", "entropy()")

ANGLE_FEATURES = (
    "angle(tBodyAccMean,gravity)",
    "angle(tBodyAccJerkMean,gravityMean)",
    "angle(tBodyGyroMean,gravityMean)",
    "angle(tBodyGyroJerkMean,gravityMean)",
    "angle(x,gravityMean)",
    "angle(y,gravityMean)",
    "angle(z,gravityMean)",
)


def band_label(band: Tuple[int, int]) -> str:
    return f"bandsEnergy()-{band[0]},{band[1]}"


def _time_axial(prefix: str) -> List[str]:
    names = [f"{prefix}-{stat}-{a}" for stat in BASIC_STATS for a in AXES]
    names.append(f"{prefix}-sma()")
    names += [f"{prefix}-{stat}-{a}" for stat in SPREAD_STATS for a in AXES]
    names += [f"{prefix}-arCoeff(){k}-{a}" for a in AXES for k in range(1, AR_COEFFS + 1)]
    names += [f"{prefix}-correlation()-{p},{q}" for p, q in AXIS_PAIRS]
    return names


def _time_mag(prefix: str) -> List[str]:
    names = [f"{prefix}-{stat}" for stat in BASIC_STATS]
    names.append(f"{prefix}-sma()")
    names += [f"{prefix}-{stat}" for stat in SPREAD_STATS]
    names += [f"{prefix}-arCoeff(){k}" for k in range(1, AR_COEFFS + 1)]
    return names


def _freq_axial(prefix: str) -> List[str]:
    names = [f"{prefix}-{stat}-{a}" for stat in BASIC_STATS for a in AXES]
    names.append(f"{prefix}-sma()")
    names += [f"{prefix}-{stat}-{a}" for stat in SPREAD_STATS for a in AXES]
    names += [f"{prefix}-maxInds-{a}" for a in AXES]
    names += [f"{prefix}-meanFreq()-{a}" for a in AXES]
    names += [f"{prefix}-{stat}-{a}" for a in AXES for stat in ("skewness()", "kurtosis()")]
    names += [f"{prefix}-{band_label(b)}-{a}" for a in AXES for b in BANDS]
    return names


def _freq_mag(prefix: str) -> List[str]:
    names = [f"{prefix}-{stat}" for stat in BASIC_STATS]
    names.append(f"{prefix}-sma()")
    names += [f"{prefix}-{stat}" for stat in SPREAD_STATS]
    names += [f"{prefix}-maxInds", f"{prefix}-meanFreq()", f"{prefix}-skewness()", f"{prefix}-kurtosis()"]
    return names


def _build() -> Tuple[str, ...]:
    names: List[str] = []
    for p in TIME_AXIAL_SIGNALS:
        names += _time_axial(p)
    for p in TIME_MAG_SIGNALS:
        names += _time_mag(p)
    for p in FREQ_AXIAL_SIGNALS:
        names += _freq_axial(p)
    for p in FREQ_MAG_SIGNALS:
        names += _freq_mag(p)
    names += ANGLE_FEATURES
    return tuple(names)


FEATURE_NAMES: Tuple[str, ...] = _build()
N_FEATURES = len(FEATURE_NAMES)
FEATURE_INDEX = MappingProxyType({name: i for i, name in enumerate(FEATURE_NAMES)})

if N_FEATURES != 561 or len(FEATURE_INDEX) != N_FEATURES:
    raise RuntimeError(f"canonical feature list is corrupt: {N_FEATURES} names, {len(FEATURE_INDEX)} unique")
