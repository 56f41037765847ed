"""Burg lattice estimation of autoregressive reflection coefficients."""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def burg_reflection(x: np.ndarray, order: int = 4) -> np.ndarray:
    """Reflection coefficients k_1..k_order of x via Burg's recursion.

    At each stage k_m = -2 <f, b> / (|f|^2 + |b|^2) over the aligned forward and
    backward prediction errors, so |k_m| <= 1. Once the error energy vanishes (or the
    series is too short for another stage) the remaining coefficients are 0.
    """

    if order < 1:
        raise ValueError(f"order must be >= 1, got {order}")

    k = np.zeros(order, dtype=np.float64)
    f = np.asarray(x, dtype=np.float64).copy()
    b = f.copy()

    for m in range(order):
        fp = f[1:]
        bp = b[:-1]
        if fp.size == 0:
            logger.debug("burg: series exhausted at order %d", m + 1)
            break
        den = float(np.dot(fp, fp) + np.dot(bp, bp))
        if den == 0.0:
            logger.debug("burg: zero error energy at order %d", m + 1)
            break
        km = -2.0 * float(np.dot(fp, bp)) / den
        # rounding can push |k| a hair past 1 on near-deterministic input
        km = min(1.0, max(-1.0, km))
        k[m] = km
        f, b = fp + km * bp, bp + km * fp

    return k
