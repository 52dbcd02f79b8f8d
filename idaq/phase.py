"""Phase difference between two sampled signals at their dominant frequency.

Used for LVDT calibration, where the secondary output flips phase by
180 degrees across the null point. Each capture is processed independently:

1) remove the DC offset of both signals;
2) apply a Hann window to limit spectral leakage;
3) FFT both signals and locate the carrier as the largest bin of the primary
   signal in the first ``N // 2`` bins;
4) take ``angle(Y) - angle(X)`` at that bin and wrap it to ``[-180, 180)``.
"""

from __future__ import annotations

import numpy as np


def _as_captures(signal) -> np.ndarray:
    arr = np.asarray(signal, dtype=float)
    if arr.ndim == 1:
        return arr[:, np.newaxis]
    if arr.ndim != 2:
        raise ValueError(f"Signals must be 1-D or 2-D (samples x captures), got {arr.ndim}-D.")
    return arr


def wrap_degrees(angle_deg):
    """Wrap angles in degrees to ``[-180, 180)``; -350 maps to +10."""
    return np.mod(np.asarray(angle_deg, dtype=float) + 180.0, 360.0) - 180.0


def _dominant_bin(spectrum: np.ndarray, n_samples: int) -> int:
    return int(np.argmax(np.abs(spectrum[: n_samples // 2])))


def dominant_frequency(signal, fs: float) -> np.ndarray:
    """Return the carrier frequency in Hz of each capture in ``signal``."""
    if fs <= 0:
        raise ValueError(f"Sampling frequency must be > 0, got {fs!r}")
    x = _as_captures(signal)
    n = x.shape[0]
    window = np.hanning(n)
    centered = x - x.mean(axis=0)
    spectra = np.fft.fft(centered * window[:, np.newaxis], axis=0)
    bins = [_dominant_bin(spectra[:, i], n) for i in range(x.shape[1])]
    return np.asarray(bins, dtype=float) * float(fs) / n


def phase_difference(primary, secondary, fs: float) -> np.ndarray:
    """Phase of ``secondary`` relative to ``primary`` in degrees.

    Args:
        primary: Excitation / reference-coil signal, shape ``(N,)`` or
            ``(N, captures)``. Integer DAQ counts are accepted.
        secondary: LVDT output signal with the same shape as ``primary``.
        fs: Sampling frequency in Hz.

    Returns:
        numpy.ndarray: One wrapped phase difference per capture, in
        ``[-180, 180)`` degrees.

    Raises:
        ValueError: If the signals differ in shape, have fewer than 4 samples
            per capture, or ``fs`` is not positive.
    """
    if fs <= 0:
        raise ValueError(f"Sampling frequency must be > 0, got {fs!r}")
    x = _as_captures(primary)
    y = _as_captures(secondary)
    if x.shape != y.shape:
        raise ValueError(f"primary and secondary shapes differ: {x.shape} vs {y.shape}")
    n, n_captures = y.shape
    if n < 4:
        raise ValueError(f"At least 4 samples per capture are required, got {n}.")

    window = np.hanning(n)
    phase_deg = np.zeros(n_captures)
    for i in range(n_captures):
        xc = x[:, i] - np.mean(x[:, i])
        yc = y[:, i] - np.mean(y[:, i])
        spec_x = np.fft.fft(xc * window)
        spec_y = np.fft.fft(yc * window)
        idx = _dominant_bin(spec_x, n)
        phase_deg[i] = np.degrees(np.angle(spec_y[idx]) - np.angle(spec_x[idx]))

    return wrap_degrees(phase_deg)
