"""Mel scale conversion and triangular filter banks (HTK formula)."""

from __future__ import annotations

import numpy as np

_MEL_FACTOR = np.float32(2595.0)
_MEL_BREAK_HZ = np.float32(700.0)
_ONE = np.float32(1.0)
_TEN = np.float32(10.0)


def hz_to_mel(hz):
    """Convert Hz to mel: ``2595 * log10(1 + hz / 700)``.

    Accepts a scalar or array; computes in float32.
    """
    hz = np.asarray(hz, dtype=np.float32)
    return _MEL_FACTOR * np.log10(_ONE + hz / _MEL_BREAK_HZ)


def mel_to_hz(mel):
    """Convert mel to Hz: ``700 * (10 ** (mel / 2595) - 1)``."""
    mel = np.asarray(mel, dtype=np.float32)
    return _MEL_BREAK_HZ * (np.power(_TEN, mel / _MEL_FACTOR) - _ONE)


def mel_frequencies(n_mels: int, fmin: float, fmax: float) -> np.ndarray:
    """Return the ``n_mels + 2`` filter edge frequencies in Hz.

    Points are evenly spaced on the mel scale between ``hz_to_mel(fmin)`` and
    ``hz_to_mel(fmax)``, both inclusive.
    """
    mel_min = hz_to_mel(fmin)
    mel_max = hz_to_mel(fmax)
    steps = np.arange(n_mels + 2, dtype=np.float32)
    mel_points = mel_min + (mel_max - mel_min) * steps / np.float32(n_mels + 1)
    return mel_to_hz(mel_points)


def _edge_bins(n_mels: int, n_fft: int, sample_rate: int, fmin: float, fmax: float) -> np.ndarray:
    hz_points = mel_frequencies(n_mels, fmin, fmax)
    bins = np.floor(hz_points / np.float32(sample_rate) * np.float32(n_fft))
    # Negative frequencies saturate to the DC bin.
    return np.maximum(bins, 0).astype(np.int64)


def build_mel_filter_bank(
    n_mels: int,
    n_fft: int,
    sample_rate: int,
    fmin: float = 0.0,
    fmax: float | None = None,
) -> np.ndarray:
    """Build a bank of triangular mel filters over STFT bins.

    Filter ``i`` uses edge bins ``left = b[i]``, ``center = b[i+1]``,
    ``right = b[i+2]``. It rises linearly from 0 at *left* to 1 at *center*
    over ``[left, center)`` and falls from 1 at *center* towards 0 over
    ``[center, right)``. Bins outside ``[left, right)`` are zero, and a side
    with zero width contributes nothing.

    Parameters
    ----------
    n_mels : int
        Number of filters.
    n_fft : int
        STFT size; each filter has ``n_fft // 2 + 1`` weights.
    sample_rate : int
        Sampling rate (Hz).
    fmin, fmax : float
        Frequency range in Hz; *fmax* defaults to Nyquist.

    Returns
    -------
    np.ndarray
        float32 array of shape ``(n_mels, n_fft // 2 + 1)``.
    """
    if fmax is None:
        fmax = sample_rate / 2.0
    n_bins = n_fft // 2 + 1
    filter_bank = np.zeros((n_mels, n_bins), dtype=np.float32)
    if n_mels <= 0:
        return filter_bank

    edges = _edge_bins(n_mels, n_fft, sample_rate, fmin, fmax)
    bins = np.arange(n_bins)
    for i in range(n_mels):
        left, center, right = int(edges[i]), int(edges[i + 1]), int(edges[i + 2])
        if center > left:
            rising = (bins >= left) & (bins < center)
            filter_bank[i, rising] = (bins[rising] - left) / np.float32(center - left)
        if right > center:
            falling = (bins >= center) & (bins < right)
            filter_bank[i, falling] = _ONE - (bins[falling] - center) / np.float32(right - center)
    return filter_bank


def apply_mel_filter_bank(spectra, filter_bank) -> np.ndarray:
    """Project a ``(n_frames, n_bins)`` grid onto mel bands.

    Returns a float32 ``(n_frames, n_mels)`` array, frame-major like the input.
    """
    spectra = np.asarray(spectra, dtype=np.float32)
    filter_bank = np.asarray(filter_bank, dtype=np.float32)
    if spectra.ndim != 2 or spectra.shape[1] != filter_bank.shape[1]:
        raise ValueError(
            f"spectra must have shape (n_frames, {filter_bank.shape[1]}), got {spectra.shape}"
        )
    return (spectra @ filter_bank.T).astype(np.float32, copy=False)
