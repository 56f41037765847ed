import math

import pytest

from imu_har.data.windowing import Sample
from imu_har.errors import InsufficientData
from imu_har.features.names import FEATURE_NAMES
from imu_har.pipeline import extract_batch, run_pipeline
from imu_har.utils.config import FeatureConfig

from conftest import motion_stream


def _streams(n=256):
    return motion_stream(n, seed=0), motion_stream(n, seed=1, gravity=0.0)


def test_batch_follows_window_order():
    acc, gyro = _streams()
    result = extract_batch(acc, gyro)
    assert len(result) == 3
    assert result.window_starts == [0, 64, 128]
    assert result.dropped == []
    assert all(tuple(r) == FEATURE_NAMES for r in result.rows)


def test_degenerate_window_is_dropped_not_fatal():
    acc, gyro = _streams()
    acc[200] = Sample(acc[200].x, acc[200].y, acc[200].z, acc[199].timestamp)
    result = extract_batch(acc, gyro)
    assert result.window_starts == [0, 64]
    assert [start for start, _ in result.dropped] == [128]


def test_short_stream_raises():
    acc, gyro = _streams(200)
    with pytest.raises(InsufficientData):
        extract_batch(acc, gyro, k=3)


def test_gyro_shorter_than_acc():
    acc, _ = _streams(256)
    _, gyro = _streams(150)
    with pytest.raises(InsufficientData):
        extract_batch(acc, gyro)


def test_run_pipeline_normalizes():
    acc, gyro = _streams()
    result = run_pipeline(acc, gyro)
    for row in result.rows:
        assert all(-1.0 <= v <= 1.0 for v in row.values())
    raw = run_pipeline(acc, gyro, normalize=False)
    assert raw.rows[0]["tGravityAcc-mean()-z"] > 9.0


def test_workers_match_serial():
    acc, gyro = _streams()
    serial = extract_batch(acc, gyro)
    parallel = extract_batch(acc, gyro, config=FeatureConfig(num_workers=2))
    assert parallel.window_starts == serial.window_starts
    assert parallel.rows == serial.rows


def test_nan_sample_only_affects_its_window():
    acc, gyro = _streams()
    s = acc[200]
    acc[200] = Sample(float("nan"), s.y, s.z, s.timestamp)
    result = extract_batch(acc, gyro)
    clean = extract_batch(*_streams())

    assert result.window_starts == [0, 64, 128]
    assert result.dropped == []
    assert result.rows[:2] == clean.rows[:2]
    assert all(math.isfinite(v) for v in result.rows[2].values())
    assert result.rows[2]["tBodyAcc-entropy()-x"] == 0.0
