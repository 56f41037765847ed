from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from imu_har.errors import InsufficientData
from imu_har.utils.helpers import cfg_get

logger = logging.getLogger(__name__)


DEFAULT_WINDOW_SIZE = 128
DEFAULT_SLIDE_SIZE = 64


@dataclass(frozen=True)
class Sample:
    x: float
    y: float
    z: float
    timestamp: int  # ms


@dataclass(frozen=True)
class Window:
    """Fixed-length run of consecutive samples starting at `start` in the source sequence."""

    start: int
    samples: Tuple[Sample, ...]

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __getitem__(self, idx):
        return self.samples[idx]

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        return samples_to_arrays(self.samples)


def samples_to_arrays(samples: Union[Window, Sequence[Sample]]) -> Tuple[np.ndarray, np.ndarray]:
    """Split samples into (timestamps [n], xyz [n, 3]) float64 arrays."""

    if isinstance(samples, Window):
        samples = samples.samples
    n = len(samples)
    t = np.empty(n, dtype=np.float64)
    xyz = np.empty((n, 3), dtype=np.float64)
    for i, s in enumerate(samples):
        t[i] = s.timestamp
        xyz[i, 0] = s.x
        xyz[i, 1] = s.y
        xyz[i, 2] = s.z
    return t, xyz


def compute_T_and_hop(cfg: Any) -> Tuple[int, int]:
    """Window length (T) and hop in samples; the hop defaults to half the window (128 / 64)."""

    T = int(cfg_get(cfg, ["windowing", "window_size"], DEFAULT_WINDOW_SIZE))
    hop = int(cfg_get(cfg, ["windowing", "slide_size"], max(1, T // 2)))
    return T, hop


def required_samples(k: int, window_size: int = DEFAULT_WINDOW_SIZE, slide_size: int = DEFAULT_SLIDE_SIZE) -> int:
    """Samples a collector must buffer before `k` windows can be cut."""

    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    return window_size + slide_size * (k - 1)


def window_starts(
    n_samples: int,
    k: Optional[int] = None,
    window_size: int = DEFAULT_WINDOW_SIZE,
    slide_size: int = DEFAULT_SLIDE_SIZE,
) -> List[int]:
    """Start offsets for `k` windows (or every full window when k is None)."""

    if window_size < 1 or slide_size < 1:
        raise ValueError(f"window_size/slide_size must be >= 1, got {window_size}/{slide_size}")

    if k is None:
        if n_samples < window_size:
            raise InsufficientData(window_size, n_samples)
        k = (n_samples - window_size) // slide_size + 1
    else:
        need = required_samples(k, window_size, slide_size)
        if n_samples < need:
            raise InsufficientData(need, n_samples)

    return [i * slide_size for i in range(k)]


def make_windows(
    samples: Sequence[Sample],
    k: Optional[int] = None,
    window_size: int = DEFAULT_WINDOW_SIZE,
    slide_size: int = DEFAULT_SLIDE_SIZE,
) -> List[Window]:
    """Slice samples into overlapping windows; window i starts at i * slide_size."""

    samples = tuple(samples)
    starts = window_starts(len(samples), k, window_size, slide_size)
    windows = [Window(start=s, samples=samples[s : s + window_size]) for s in starts]

    logger.debug(
        "windowing n_samples=%d T=%d hop=%d windows=%d",
        len(samples),
        window_size,
        slide_size,
        len(windows),
    )
    return windows
