"""Batch min-max scaling of feature columns to [-1, 1]."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from imu_har.features.names import FEATURE_NAMES

logger = logging.getLogger(__name__)


def to_frame(rows: Sequence[Dict[str, float]], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """FeatureTable as a DataFrame; canonical column order unless `columns` is given."""

    cols = list(columns) if columns is not None else list(FEATURE_NAMES)
    if not rows:
        return pd.DataFrame(columns=cols, dtype=np.float64)
    df = pd.DataFrame.from_records(list(rows))
    missing = [c for c in cols if c not in df.columns]
    if missing:
        logger.debug("to_frame: %d missing columns filled with 0.0", len(missing))
    return df.reindex(columns=cols, fill_value=0.0).astype(np.float64)


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Per column: v' = -1 + 2 (v - min) / (max - min); constant columns become 0."""

    values = df.to_numpy(dtype=np.float64)
    lo = values.min(axis=0)
    hi = values.max(axis=0)
    rng = hi - lo
    constant = rng == 0.0

    safe = np.where(constant, 1.0, rng)
    out = -1.0 + 2.0 * (values - lo) / safe
    out[:, constant] = 0.0

    logger.debug("normalize: rows=%d cols=%d constant_cols=%d", values.shape[0], values.shape[1], int(constant.sum()))
    return pd.DataFrame(out, index=df.index, columns=df.columns)


def normalize_batch(rows: Sequence[Dict[str, float]]) -> List[Dict[str, float]]:
    """Rescale every feature key across the batch independently.

    All rows must share the same key set; output rows keep the first row's key order.
    """

    if not rows:
        return []

    keys = list(rows[0].keys())
    key_set = set(keys)
    for i, row in enumerate(rows):
        if set(row.keys()) != key_set:
            raise ValueError(f"row {i} key set differs from row 0")

    df = pd.DataFrame.from_records(list(rows), columns=keys)
    norm = normalize_frame(df)
    return [dict(zip(keys, map(float, r))) for r in norm.itertuples(index=False, name=None)]
