"""Linear to logarithmic frequency-axis remapping."""

from __future__ import annotations

import numpy as np


def log_frequency_axis(n_freq_bins: int, sample_rate: int, n_fft: int) -> np.ndarray:
    """Return ``n_freq_bins`` log-spaced frequencies from one bin above DC to Nyquist.

    ``f_i = exp(log(fmin) + t_i * (log(fmax) - log(fmin)))`` with
    ``fmin = sample_rate / n_fft``, ``fmax = sample_rate / 2`` and
    ``t_i = i / (n_freq_bins - 1)``. A single bin sits at *fmin*.
    """
    fmin = sample_rate / n_fft
    fmax = sample_rate / 2.0
    if n_freq_bins <= 1:
        t = np.zeros(max(n_freq_bins, 0))
    else:
        t = np.arange(n_freq_bins) / (n_freq_bins - 1)
    return np.exp(np.log(fmin) + t * (np.log(fmax) - np.log(fmin)))


def remap_to_log_frequency(
    data,
    n_freq_bins: int,
    n_time_frames: int,
    sample_rate: int,
    n_fft: int,
) -> np.ndarray:
    """Resample a linear-frequency grid onto a log-frequency axis.

    Parameters
    ----------
    data : array-like
        Row-major ``[time][freq]`` values, flat or shaped
        ``(n_time_frames, n_freq_bins)``.
    n_freq_bins : int
        Bins per frame; the output keeps the same count.
    n_time_frames : int
        Number of frames.
    sample_rate : int
        Sampling rate (Hz).
    n_fft : int
        STFT size used to produce *data*.

    Returns
    -------
    np.ndarray
        float32 array with the same shape as *data*. Each output bin linearly
        interpolates the two input bins around ``f / (sample_rate / n_fft)``,
        with both neighbours clamped to ``[0, n_freq_bins - 1]``.
    """
    values = np.asarray(data, dtype=np.float32)
    expected = n_freq_bins * n_time_frames
    if values.size != expected:
        raise ValueError(
            f"data has {values.size} values, expected n_time_frames * n_freq_bins = {expected}"
        )
    if expected == 0:
        return values.copy()

    grid = values.reshape(n_time_frames, n_freq_bins)
    freq_resolution = sample_rate / n_fft
    index = log_frequency_axis(n_freq_bins, sample_rate, n_fft) / freq_resolution
    lower = np.floor(index)
    frac = (index - lower).astype(np.float32)
    lo = np.clip(lower.astype(np.int64), 0, n_freq_bins - 1)
    hi = np.clip(lower.astype(np.int64) + 1, 0, n_freq_bins - 1)

    remapped = grid[:, lo] * (np.float32(1.0) - frac) + grid[:, hi] * frac
    return remapped.astype(np.float32, copy=False).reshape(values.shape)
