"""
config.py
----------
YAML load/merge, validation, and the typed feature configuration.

- load base.yaml + optional override files; apply CLI `key.path=value` overrides
- validate sampling, windowing, filter and feature fields
- expose FeatureConfig as the single value the signal/feature code consumes
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, Optional

import yaml

from imu_har.data.windowing import compute_T_and_hop
from imu_har.utils.helpers import cfg_get, deep_update, load_yaml, set_by_path

logger = logging.getLogger(__name__)

MAX_FREQUENCY_BANDS = 14
FILTER_INITIAL_STATES = ("steady", "zero")


@dataclass(frozen=True)
class FeatureConfig:
    sampling_rate: float = 50.0
    window_size: int = 128
    slide_size: int = 64
    median_size: int = 3
    butterworth_cutoff: float = 20.0
    gravity_cutoff: float = 0.3
    filter_initial_state: str = "steady"
    ar_order: int = 4
    histogram_bins: int = 10
    frequency_band_count: int = MAX_FREQUENCY_BANDS
    num_workers: int = 0

    def __post_init__(self):
        validate(self)

    @classmethod
    def from_cfg(cls, cfg: Any) -> "FeatureConfig":
        """Build from a nested config dict (or object) with defaults for missing keys."""

        d = cls()
        window_size, slide_size = compute_T_and_hop(cfg)
        return cls(
            sampling_rate=float(cfg_get(cfg, ["sampling", "rate_hz"], d.sampling_rate)),
            window_size=window_size,
            slide_size=slide_size,
            median_size=int(cfg_get(cfg, ["filter", "median_size"], d.median_size)),
            butterworth_cutoff=float(
                cfg_get(cfg, ["filter", "butterworth_cutoff_hz"], d.butterworth_cutoff)
            ),
            gravity_cutoff=float(cfg_get(cfg, ["filter", "gravity_cutoff_hz"], d.gravity_cutoff)),
            filter_initial_state=str(
                cfg_get(cfg, ["filter", "initial_state"], d.filter_initial_state)
            ),
            ar_order=int(cfg_get(cfg, ["features", "ar_order"], d.ar_order)),
            histogram_bins=int(cfg_get(cfg, ["features", "histogram_bins"], d.histogram_bins)),
            frequency_band_count=int(
                cfg_get(cfg, ["features", "frequency_band_count"], d.frequency_band_count)
            ),
            num_workers=int(cfg_get(cfg, ["runtime", "num_workers"], d.num_workers)),
        )

    def with_cutoff(self, cutoff_hz: float) -> "FeatureConfig":
        if cutoff_hz == self.butterworth_cutoff:
            return self
        return replace(self, butterworth_cutoff=float(cutoff_hz))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate(fc: FeatureConfig) -> None:
    """Raise ValueError naming the first invalid field."""

    nyq = 0.5 * fc.sampling_rate
    if fc.sampling_rate <= 0:
        raise ValueError(f"sampling.rate_hz must be > 0, got {fc.sampling_rate}")
    if fc.window_size < 2:
        raise ValueError(f"windowing.window_size must be >= 2, got {fc.window_size}")
    if fc.slide_size < 1:
        raise ValueError(f"windowing.slide_size must be >= 1, got {fc.slide_size}")
    if fc.median_size < 1 or fc.median_size % 2 == 0:
        raise ValueError(f"filter.median_size must be a positive odd integer, got {fc.median_size}")
    if not 0.0 < fc.butterworth_cutoff < nyq:
        raise ValueError(f"filter.butterworth_cutoff_hz must be in (0, {nyq}), got {fc.butterworth_cutoff}")
    if not 0.0 < fc.gravity_cutoff < nyq:
        raise ValueError(f"filter.gravity_cutoff_hz must be in (0, {nyq}), got {fc.gravity_cutoff}")
    if fc.filter_initial_state not in FILTER_INITIAL_STATES:
        raise ValueError(
            f"filter.initial_state must be one of {FILTER_INITIAL_STATES}, got {fc.filter_initial_state!r}"
        )
    if fc.ar_order < 1:
        raise ValueError(f"features.ar_order must be >= 1, got {fc.ar_order}")
    if fc.histogram_bins < 1:
        raise ValueError(f"features.histogram_bins must be >= 1, got {fc.histogram_bins}")
    if not 1 <= fc.frequency_band_count <= MAX_FREQUENCY_BANDS:
        raise ValueError(
            f"features.frequency_band_count must be in [1, {MAX_FREQUENCY_BANDS}], got {fc.frequency_band_count}"
        )
    if fc.num_workers < 0:
        raise ValueError(f"runtime.num_workers must be >= 0, got {fc.num_workers}")


def _parse_override(item: str):
    if "=" not in item:
        raise ValueError(f"Override must look like key.path=value, got {item!r}")
    key, raw = item.split("=", 1)
    return key.strip(), yaml.safe_load(raw)


def load_config(
    path: Optional[str] = None,
    extra_paths: Iterable[str] = (),
    overrides: Iterable[str] = (),
) -> Dict[str, Any]:
    """Load base YAML, merge extra YAML files in order, then `key.path=value` overrides."""

    cfg: Dict[str, Any] = load_yaml(path) if path else {}
    for extra in extra_paths:
        cfg = deep_update(cfg, load_yaml(extra))
    for item in overrides:
        key, value = _parse_override(item)
        cfg = set_by_path(cfg, key, value)
    logger.debug("resolved config: %s", cfg)
    return cfg


def resolve_feature_config(cfg: Any = None) -> FeatureConfig:
    if cfg is None:
        return FeatureConfig()
    if isinstance(cfg, FeatureConfig):
        return cfg
    return FeatureConfig.from_cfg(cfg)
