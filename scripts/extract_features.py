"""
extract_features.py
-------------------
Load accelerometer + gyroscope recordings, window them, extract the 561 UCI HAR
features per window, normalize the batch, and write the feature table.
"""

from __future__ import annotations

import argparse
import logging
import sys

from imu_har.data.recordings import load_recording, write_feature_table
from imu_har.errors import InsufficientData
from imu_har.pipeline import run_pipeline
from imu_har.utils.config import FeatureConfig, load_config
from imu_har.utils.helpers import cfg_get

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default="configs/base.yaml", help="Base config YAML")
    ap.add_argument("--extra-config", action="append", default=[], help="Override YAML merged on top (repeatable)")
    ap.add_argument("--set", action="append", default=[], dest="overrides", help="key.path=value override")
    ap.add_argument("--acc", required=True, help="Accelerometer CSV (timestamp,x,y,z)")
    ap.add_argument("--gyro", required=True, help="Gyroscope CSV (timestamp,x,y,z)")
    ap.add_argument("--out", required=True, help="Output path")
    ap.add_argument("--format", default=None, choices=["txt", "csv", "parquet"])
    ap.add_argument("--windows", type=int, default=None, help="Number of windows (default: config, else all)")
    ap.add_argument("--workers", type=int, default=None, help="Process workers for per-window extraction")
    ap.add_argument("--no-normalize", action="store_true")
    args = ap.parse_args(argv)

    cfg = load_config(args.config, args.extra_config, args.overrides)
    logging.basicConfig(
        level=str(cfg_get(cfg, ["logging", "level"], "INFO")).upper(),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    if args.workers is not None:
        cfg.setdefault("runtime", {})["num_workers"] = args.workers
    fc = FeatureConfig.from_cfg(cfg)
    k = args.windows if args.windows is not None else cfg_get(cfg, ["windowing", "windows"], None)
    normalize = bool(cfg_get(cfg, ["normalize", "enabled"], True)) and not args.no_normalize
    fmt = args.format or cfg_get(cfg, ["output", "format"], None)

    acc = load_recording(args.acc)
    gyro = load_recording(args.gyro)

    try:
        result = run_pipeline(acc, gyro, k=k, config=fc, normalize=normalize)
    except InsufficientData as exc:
        logger.error("not enough samples yet: %s (keep buffering)", exc)
        return 2

    if not result.rows:
        logger.error("no windows survived extraction (%d dropped)", len(result.dropped))
        return 1

    write_feature_table(result.rows, args.out, fmt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
