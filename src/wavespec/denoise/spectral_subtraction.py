"""Spectral subtraction against a single noise snapshot.

The reducer keeps exactly one magnitude template. Each call to
:meth:`SpectralSubtraction.estimate_noise` replaces it wholesale; nothing is
averaged or tracked over time.

The template is plain instance state with no locking. Callers sharing one
reducer between threads must serialize ``estimate_noise`` and
``reduce_noise`` themselves, e.g. with a ``threading.Lock``.

Reference:
    Boll, S. (1979) "Suppression of Acoustic Noise in Speech Using
    Spectral Subtraction."  IEEE Trans. ASSP-27(2).
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


class SpectralSubtraction:
    """Magnitude-domain spectral subtraction with a noise floor."""

    def __init__(self) -> None:
        self._noise_spectrum = np.zeros(0, dtype=np.float32)

    @property
    def noise_spectrum(self) -> np.ndarray:
        """Copy of the current noise template (empty if none)."""
        return self._noise_spectrum.copy()

    @property
    def has_noise_estimate(self) -> bool:
        return self._noise_spectrum.size > 0

    def estimate_noise(self, noise_segment) -> None:
        """Replace the noise template with a copy of *noise_segment*.

        The segment is taken verbatim as a magnitude spectrum. An empty
        segment leaves the current template untouched.
        """
        segment = np.asarray(noise_segment, dtype=np.float32).ravel()
        if segment.size == 0:
            return
        self._noise_spectrum = segment.copy()
        logger.debug("Noise template replaced (%d bins)", segment.size)

    def reset(self) -> None:
        """Drop the noise template."""
        self._noise_spectrum = np.zeros(0, dtype=np.float32)

    def reduce_noise(self, magnitude_spectrum, alpha: float = 1.0, beta: float = 0.01) -> np.ndarray:
        """Subtract ``alpha * noise`` and floor the result at ``beta * noise``.

        Parameters
        ----------
        magnitude_spectrum : array-like
            One magnitude spectrum.
        alpha : float
            Oversubtraction factor.
        beta : float
            Spectral floor relative to the noise template.

        Returns
        -------
        np.ndarray
            float32 array the same length as the input. When no template is
            set, or its length differs from the spectrum, this is an unchanged
            copy of the input.
        """
        signal = np.asarray(magnitude_spectrum, dtype=np.float32).ravel()
        noise = self._noise_spectrum
        if noise.size == 0 or noise.size != signal.size:
            return signal.copy()

        subtracted = signal - np.float32(alpha) * noise
        floor = np.float32(beta) * noise
        return np.where(subtracted > floor, subtracted, floor).astype(np.float32, copy=False)

    def reduce_noise_frames(self, spectra, alpha: float = 1.0, beta: float = 0.01) -> np.ndarray:
        """Apply :meth:`reduce_noise` to every row of a ``(n_frames, n_bins)`` grid."""
        spectra = np.asarray(spectra, dtype=np.float32)
        if spectra.ndim != 2:
            raise ValueError(f"spectra must be 2-D, got shape {spectra.shape}")
        if spectra.shape[1] != self._noise_spectrum.size:
            if self.has_noise_estimate:
                logger.warning(
                    "Noise template has %d bins but spectra have %d; passing through",
                    self._noise_spectrum.size,
                    spectra.shape[1],
                )
            return spectra.copy()

        noise = self._noise_spectrum[None, :]
        subtracted = spectra - np.float32(alpha) * noise
        floor = np.broadcast_to(np.float32(beta) * noise, spectra.shape)
        return np.where(subtracted > floor, subtracted, floor).astype(np.float32, copy=False)
