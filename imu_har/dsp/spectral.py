"""Zero-padded DFT of conditioned signals."""

from __future__ import annotations

import numpy as np
from scipy.fft import fft


def next_pow2(n: int) -> int:
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    return 1 << (int(n) - 1).bit_length()


def spectrum(x: np.ndarray) -> np.ndarray:
    """DFT of x zero-padded to the next power of two, as interleaved [re0, im0, re1, im1, ...].

    Output length is 2 * fft_size.
    """

    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Expected 1D series, got {x.shape}")
    n_fft = next_pow2(x.shape[0])
    X = fft(x, n=n_fft)

    out = np.empty(2 * n_fft, dtype=np.float64)
    out[0::2] = X.real
    out[1::2] = X.imag
    return out


def magnitude_spectrum(interleaved: np.ndarray) -> np.ndarray:
    """|X[k]| for the first fft_size / 2 bins (the rest mirror them)."""

    interleaved = np.asarray(interleaved, dtype=np.float64)
    if interleaved.ndim != 1 or interleaved.shape[0] % 2:
        raise ValueError(f"Expected interleaved re/im pairs, got {interleaved.shape}")
    n_fft = interleaved.shape[0] // 2
    half = max(1, n_fft // 2)
    re = interleaved[0 : 2 * half : 2]
    im = interleaved[1 : 2 * half : 2]
    return np.sqrt(re ** 2 + im ** 2)
