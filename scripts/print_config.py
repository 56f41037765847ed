"""
print_config.py
----------------
Loads YAML configs, merges overrides (if any), validates the feature settings,
and prints the final config. No side effects besides stdout.
"""

from __future__ import annotations

import argparse
import sys

import yaml

from imu_har.utils.config import FeatureConfig, load_config


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default="configs/base.yaml", help="Base config YAML")
    ap.add_argument("--extra-config", action="append", default=[], help="Override YAML merged on top (repeatable)")
    ap.add_argument("--set", action="append", default=[], dest="overrides", help="key.path=value override")
    args = ap.parse_args(argv)

    cfg = load_config(args.config, args.extra_config, args.overrides)
    fc = FeatureConfig.from_cfg(cfg)

    yaml.safe_dump(cfg, sys.stdout, sort_keys=False)
    print("# Resolved feature config")
    yaml.safe_dump(fc.as_dict(), sys.stdout, sort_keys=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
