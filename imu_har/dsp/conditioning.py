"""Per-sensor conditioning: filtered components, jerk, magnitudes and spectra for one window."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from imu_har.data.windowing import Sample, Window, samples_to_arrays
from imu_har.dsp.derivatives import jerk, magnitude
from imu_har.dsp.filters import condition_axes
from imu_har.dsp.spectral import magnitude_spectrum, spectrum
from imu_har.utils.config import FeatureConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConditionedSignal:
    # time domain, [n, 3] (jerk [n-1, 3])
    body: np.ndarray
    gravity: np.ndarray
    jerk: np.ndarray
    body_mag: np.ndarray
    gravity_mag: np.ndarray
    jerk_mag: np.ndarray
    # interleaved re/im spectra, [2 * fft_size, 3] per axis or [2 * fft_size] for magnitudes
    body_spectrum: np.ndarray
    jerk_spectrum: np.ndarray
    body_mag_spectrum: np.ndarray
    jerk_mag_spectrum: np.ndarray

    @property
    def f_body(self) -> np.ndarray:
        """Magnitude spectra of the body axes, [fft_size / 2, 3]."""
        return _axis_magnitudes(self.body_spectrum)

    @property
    def f_jerk(self) -> np.ndarray:
        return _axis_magnitudes(self.jerk_spectrum)

    @property
    def f_body_mag(self) -> np.ndarray:
        return magnitude_spectrum(self.body_mag_spectrum)

    @property
    def f_jerk_mag(self) -> np.ndarray:
        return magnitude_spectrum(self.jerk_mag_spectrum)


def _axis_spectra(xyz: np.ndarray) -> np.ndarray:
    return np.stack([spectrum(xyz[:, c]) for c in range(xyz.shape[1])], axis=1)


def _axis_magnitudes(spectra: np.ndarray) -> np.ndarray:
    return np.stack([magnitude_spectrum(spectra[:, c]) for c in range(spectra.shape[1])], axis=1)


def condition_sensor(
    window: Union[Window, Sequence[Sample]],
    fc: FeatureConfig,
) -> ConditionedSignal:
    """Filter, differentiate and transform one sensor window.

    Raises DegenerateTimestamp if two consecutive samples share a timestamp.
    """

    t, xyz = samples_to_arrays(window)
    if xyz.shape[0] < 2:
        raise ValueError(f"Need at least 2 samples per window, got {xyz.shape[0]}")

    comps = condition_axes(
        xyz,
        fs=fc.sampling_rate,
        noise_cutoff_hz=fc.butterworth_cutoff,
        gravity_cutoff_hz=fc.gravity_cutoff,
        median_size=fc.median_size,
        initial_state=fc.filter_initial_state,
    )
    body_jerk = jerk(comps.body, t)

    body_mag = magnitude(comps.body)
    jerk_mag = magnitude(body_jerk)

    return ConditionedSignal(
        body=comps.body,
        gravity=comps.gravity,
        jerk=body_jerk,
        body_mag=body_mag,
        gravity_mag=magnitude(comps.gravity),
        jerk_mag=jerk_mag,
        body_spectrum=_axis_spectra(comps.body),
        jerk_spectrum=_axis_spectra(body_jerk),
        body_mag_spectrum=spectrum(body_mag),
        jerk_mag_spectrum=spectrum(jerk_mag),
    )
