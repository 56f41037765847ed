"""Batch orchestration: window both sensors, extract per window, then normalize."""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from imu_har.data.windowing import Sample, Window, make_windows
from imu_har.errors import DegenerateTimestamp
from imu_har.features.extractor import FeatureVector, extract_window_features
from imu_har.features.normalize import normalize_batch
from imu_har.utils.config import FeatureConfig, resolve_feature_config

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    rows: List[FeatureVector] = field(default_factory=list)
    window_starts: List[int] = field(default_factory=list)
    dropped: List[Tuple[int, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def _extract_one(args: Tuple[Window, Window, FeatureConfig]) -> Tuple[int, Optional[FeatureVector], Optional[str]]:
    acc_w, gyro_w, fc = args
    try:
        return acc_w.start, extract_window_features(acc_w, gyro_w, config=fc), None
    except DegenerateTimestamp as exc:
        return acc_w.start, None, str(exc)


def extract_batch(
    acc_samples: Sequence[Sample],
    gyro_samples: Sequence[Sample],
    k: Optional[int] = None,
    config: Optional[Any] = None,
) -> BatchResult:
    """Cut both streams at the same offsets and extract one FeatureVector per window.

    Windows with a zero timestamp delta are dropped (and reported) rather than failing
    the batch. Output order always follows window order, also with num_workers > 0.

    Raises:
        InsufficientData: either stream is too short for the requested windows
    """

    fc = resolve_feature_config(config)
    acc_windows = make_windows(acc_samples, k, fc.window_size, fc.slide_size)
    gyro_windows = make_windows(gyro_samples, len(acc_windows), fc.window_size, fc.slide_size)
    tasks = [(a, g, fc) for a, g in zip(acc_windows, gyro_windows)]

    if fc.num_workers > 0 and len(tasks) > 1:
        with concurrent.futures.ProcessPoolExecutor(max_workers=fc.num_workers) as executor:
            outputs = list(executor.map(_extract_one, tasks))
    else:
        outputs = [_extract_one(t) for t in tasks]

    result = BatchResult()
    for start, vec, err in outputs:
        if vec is None:
            logger.warning("dropping window start=%d: %s", start, err)
            result.dropped.append((start, err))
            continue
        result.rows.append(vec)
        result.window_starts.append(start)

    logger.info(
        "extract_batch windows=%d extracted=%d dropped=%d workers=%d",
        len(tasks),
        len(result.rows),
        len(result.dropped),
        fc.num_workers,
    )
    return result


def run_pipeline(
    acc_samples: Sequence[Sample],
    gyro_samples: Sequence[Sample],
    k: Optional[int] = None,
    config: Optional[Any] = None,
    normalize: bool = True,
) -> BatchResult:
    """extract_batch followed by normalize_batch over every surviving row."""

    result = extract_batch(acc_samples, gyro_samples, k, config)
    if normalize:
        result.rows = normalize_batch(result.rows)
    return result
