from __future__ import annotations

import numpy as np

from imu_har.errors import DegenerateTimestamp


def jerk(s: np.ndarray, t_ms: np.ndarray) -> np.ndarray:
    """Time derivative per second: (s[i] - s[i-1]) / dt_i, length n-1.

    Works on a single series [n] or on columns of [n, C].
    """

    s = np.asarray(s, dtype=np.float64)
    t_ms = np.asarray(t_ms, dtype=np.float64)
    if s.shape[0] != t_ms.shape[0]:
        raise ValueError(f"series and timestamps differ in length: {s.shape[0]} vs {t_ms.shape[0]}")

    dt = np.diff(t_ms) / 1000.0
    zero = np.flatnonzero(dt == 0)
    if zero.size:
        i = int(zero[0]) + 1
        raise DegenerateTimestamp(i, t_ms[i])

    ds = np.diff(s, axis=0)
    if ds.ndim == 2:
        dt = dt[:, None]
    return ds / dt


def magnitude(x, y=None, z=None) -> np.ndarray:
    """Euclidean norm across axes: magnitude(x, y, z) or magnitude(xyz[n, 3])."""

    if y is None and z is None:
        xyz = np.asarray(x, dtype=np.float64)
        if xyz.ndim != 2:
            raise ValueError(f"Expected xyz [n, 3], got {xyz.shape}")
        return np.sqrt(np.sum(xyz ** 2, axis=1))

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    if not (x.shape == y.shape == z.shape):
        raise ValueError(f"axis series differ in shape: {x.shape}, {y.shape}, {z.shape}")
    return np.sqrt(x ** 2 + y ** 2 + z ** 2)
