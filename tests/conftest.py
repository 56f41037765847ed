from __future__ import annotations

from typing import Callable, List, Optional

import numpy as np
import pytest

from imu_har.data.windowing import Sample

FS = 50.0


def stream_from_arrays(x, y, z, dt_ms: int = 20, t0: int = 0) -> List[Sample]:
    n = len(x)
    return [Sample(float(x[i]), float(y[i]), float(z[i]), t0 + i * dt_ms) for i in range(n)]


def constant_stream(n: int, value=(0.0, 0.0, 0.0)) -> List[Sample]:
    return stream_from_arrays(np.full(n, value[0]), np.full(n, value[1]), np.full(n, value[2]))


def motion_stream(n: int, seed: int = 0, gravity: float = 9.81, noise: float = 0.05) -> List[Sample]:
    rng = np.random.RandomState(seed)
    t = np.arange(n) / FS
    x = 0.8 * np.sin(2 * np.pi * 2.0 * t) + noise * rng.randn(n)
    y = 0.3 * np.cos(2 * np.pi * 1.5 * t) + noise * rng.randn(n)
    z = gravity + 1.2 * np.sin(2 * np.pi * 4.0 * t + 0.3) + noise * rng.randn(n)
    return stream_from_arrays(x, y, z)


@pytest.fixture
def walking() -> Callable[..., List[Sample]]:
    return motion_stream


@pytest.fixture
def still() -> Callable[..., List[Sample]]:
    return constant_stream
