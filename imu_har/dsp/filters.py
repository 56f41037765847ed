"""Per-axis conditioning: median despiking, Butterworth low-pass, gravity/body split."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy import signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisComponents:
    body: np.ndarray
    gravity: np.ndarray


def median_filter(x: np.ndarray, size: int = 3) -> np.ndarray:
    """Sliding median; the window shrinks symmetrically near both ends."""

    x = np.asarray(x, dtype=np.float64)
    n = x.shape[0]
    half = size // 2
    if half == 0 or n == 0:
        return x.copy()

    out = x.copy()
    if n > 2 * half:
        out[half : n - half] = np.median(sliding_window_view(x, size), axis=1)
    for i in range(min(half, n)):
        for j in (i, n - 1 - i):
            h = min(half, j, n - 1 - j)
            out[j] = np.median(x[j - h : j + h + 1])
    return out


def butterworth_coefficients(cutoff_hz: float, fs: float) -> Tuple[np.ndarray, np.ndarray]:
    """2nd-order low-pass (b, a) from the prewarped bilinear transform."""

    nyq = 0.5 * fs
    if not 0.0 < cutoff_hz < nyq:
        raise ValueError(f"cutoff must be in (0, {nyq}) Hz, got {cutoff_hz}")

    wc = math.tan(math.pi * cutoff_hz / fs)
    k1 = math.sqrt(2.0) * wc
    k2 = wc * wc
    norm = 1.0 + k1 + k2

    b0 = k2 / norm
    b = np.array([b0, 2.0 * b0, b0])
    a = np.array([1.0, 2.0 * (k2 - 1.0) / norm, (1.0 - k1 + k2) / norm])
    return b, a


def initial_filter_state(b: np.ndarray, a: np.ndarray, x0: float, mode: str = "steady") -> np.ndarray:
    """Delay-line state for a fresh filter run.

    "steady" (the default) starts as if x0 had been applied forever, so a constant
    passes unchanged and a still device reads full gravity across the whole window.
    "zero" starts from rest.
    """

    if mode == "steady":
        return signal.lfilter_zi(b, a) * x0
    if mode == "zero":
        return np.zeros(max(len(a), len(b)) - 1)
    raise ValueError(f"Unsupported filter initial state={mode}")


def butterworth_filter(
    x: np.ndarray,
    cutoff_hz: float,
    fs: float = 50.0,
    initial_state: str = "steady",
) -> np.ndarray:
    """Causal direct-form low-pass; state is created per call and discarded."""

    x = np.asarray(x, dtype=np.float64)
    if x.size == 0:
        return x.copy()
    b, a = butterworth_coefficients(cutoff_hz, fs)
    zi = initial_filter_state(b, a, x[0], initial_state)
    y, _ = signal.lfilter(b, a, x, zi=zi)
    return y


def condition_axis(
    x: np.ndarray,
    fs: float = 50.0,
    noise_cutoff_hz: float = 20.0,
    gravity_cutoff_hz: float = 0.3,
    median_size: int = 3,
    initial_state: str = "steady",
) -> AxisComponents:
    """median -> noise low-pass -> gravity low-pass; body = noise-filtered - gravity."""

    despiked = median_filter(x, median_size)
    denoised = butterworth_filter(despiked, noise_cutoff_hz, fs, initial_state)
    gravity = butterworth_filter(denoised, gravity_cutoff_hz, fs, initial_state)
    return AxisComponents(body=denoised - gravity, gravity=gravity)


def condition_axes(
    xyz: np.ndarray,
    fs: float = 50.0,
    noise_cutoff_hz: float = 20.0,
    gravity_cutoff_hz: float = 0.3,
    median_size: int = 3,
    initial_state: str = "steady",
) -> AxisComponents:
    """Apply condition_axis independently to each column of [n, 3]; returns [n, 3] components."""

    xyz = np.asarray(xyz, dtype=np.float64)
    if xyz.ndim != 2:
        raise ValueError(f"Expected xyz [n, C], got {xyz.shape}")

    body = np.empty_like(xyz)
    gravity = np.empty_like(xyz)
    for c in range(xyz.shape[1]):
        comp = condition_axis(xyz[:, c], fs, noise_cutoff_hz, gravity_cutoff_hz, median_size, initial_state)
        body[:, c] = comp.body
        gravity[:, c] = comp.gravity
    return AxisComponents(body=body, gravity=gravity)
