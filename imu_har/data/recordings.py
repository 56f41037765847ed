"""Recording load / feature-table export for scripts (outside the feature core)."""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Sequence

import pandas as pd

from imu_har.data.windowing import Sample
from imu_har.features.names import FEATURE_NAMES
from imu_har.features.normalize import to_frame

logger = logging.getLogger(__name__)

RECORDING_COLUMNS = ("timestamp", "x", "y", "z")
TABLE_FORMATS = ("txt", "csv", "parquet")


def load_recording(path: str, columns: Sequence[str] = RECORDING_COLUMNS) -> List[Sample]:
    """Read a `timestamp,x,y,z` CSV (ms timestamps) into Samples sorted by time."""

    t_col, x_col, y_col, z_col = columns
    df = pd.read_csv(path)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing} (have {list(df.columns)})")

    df = df.dropna(subset=list(columns)).sort_values(t_col, kind="stable").reset_index(drop=True)
    samples = [
        Sample(x=float(x), y=float(y), z=float(z), timestamp=int(t))
        for t, x, y, z in df[[t_col, x_col, y_col, z_col]].itertuples(index=False, name=None)
    ]
    logger.info("loaded %d samples from %s", len(samples), path)
    return samples


def _uci_number(v: float) -> str:
    s = f"{v:.7e}"
    return s if s.startswith("-") else f" {s}"


def format_uci_rows(rows: Sequence[Dict[str, float]]) -> List[str]:
    """UCI X_*.txt layout: canonical order, space separated `%.7e`, leading space unless negative."""

    return [" " + " ".join(_uci_number(float(row.get(name, 0.0))) for name in FEATURE_NAMES) for row in rows]


def write_feature_table(rows: Sequence[Dict[str, float]], path: str, fmt: Optional[str] = None) -> str:
    """Write rows as txt (UCI layout), csv (with header) or parquet; returns the path."""

    fmt = fmt or os.path.splitext(path)[1].lstrip(".") or "txt"
    if fmt not in TABLE_FORMATS:
        raise ValueError(f"Unsupported table format={fmt}")

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    if fmt == "txt":
        with open(path, "w") as f:
            f.write("\n".join(format_uci_rows(rows)))
            f.write("\n")
    elif fmt == "csv":
        to_frame(rows).to_csv(path, index=False)
    else:
        to_frame(rows).to_parquet(path, engine="pyarrow", index=False)

    logger.info("wrote %d rows (%s) to %s", len(rows), fmt, path)
    return path
