"""UCI HAR 561-feature extraction from accelerometer and gyroscope windows."""

from imu_har.data.windowing import Sample, Window, make_windows, required_samples
from imu_har.errors import DegenerateRange, DegenerateTimestamp, InsufficientData, ZeroVector
from imu_har.features.extractor import extract_window_features
from imu_har.features.names import FEATURE_NAMES
from imu_har.features.normalize import normalize_batch
from imu_har.pipeline import BatchResult, extract_batch, run_pipeline
from imu_har.utils.config import FeatureConfig

__all__ = [
    "Sample",
    "Window",
    "make_windows",
    "required_samples",
    "extract_window_features",
    "normalize_batch",
    "extract_batch",
    "run_pipeline",
    "BatchResult",
    "FeatureConfig",
    "FEATURE_NAMES",
    "InsufficientData",
    "DegenerateTimestamp",
    "ZeroVector",
    "DegenerateRange",
]
