"""Short-Time Fourier Transform magnitude processor."""

from __future__ import annotations

import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .decibel import amplitude_to_db
from .transform import DEFAULT_BACKEND, plan_forward
from .window import WindowType, generate_window

logger = logging.getLogger(__name__)


class STFTProcessor:
    """Frame, window and transform a mono signal into magnitude spectra.

    The window and the forward-transform plan are built once here and reused
    for every frame and every call. Construction parameters are assumed valid
    (``n_fft > 0``, ``hop_length > 0``); see
    :meth:`wavespec.analysis.params.STFTParameters.validate` for the checked
    entry point.

    Parameters
    ----------
    n_fft : int
        Frame / transform length.
    hop_length : int
        Sample offset between consecutive frame starts.
    window : WindowType
        Analysis window shape.
    backend : str
        Name of the forward-transform backend ("scipy" or "numpy").
    """

    def __init__(
        self,
        n_fft: int,
        hop_length: int,
        window: WindowType = WindowType.HANN,
        backend: str = DEFAULT_BACKEND,
    ) -> None:
        self.n_fft = int(n_fft)
        self.hop_length = int(hop_length)
        window = WindowType(window)
        self.window_type = window
        self.backend = backend
        self._window = generate_window(self.n_fft, window)
        self._window.flags.writeable = False
        self._forward = plan_forward(self.n_fft, backend)
        logger.debug(
            "STFTProcessor(n_fft=%d, hop_length=%d, window=%s, backend=%s)",
            self.n_fft,
            self.hop_length,
            window.value,
            backend,
        )

    @property
    def window(self) -> np.ndarray:
        """Read-only analysis window."""
        return self._window

    @property
    def n_bins(self) -> int:
        """Non-negative frequency bins per frame."""
        return self.n_fft // 2 + 1

    def n_frames(self, length: int) -> int:
        """Number of frames produced for a signal of *length* samples."""
        return -(-int(length) // self.hop_length)

    def process_frames(self, samples) -> np.ndarray:
        """Return magnitude spectra as a ``(n_frames, n_bins)`` float32 array.

        Frames start every ``hop_length`` samples while the start lies inside
        the signal; tail frames are zero-padded after windowing.
        """
        x = np.asarray(samples, dtype=np.float32).ravel()
        if x.size == 0:
            return np.zeros((0, self.n_bins), dtype=np.float32)

        n_frames = self.n_frames(x.size)
        padded = np.concatenate((x, np.zeros(self.n_fft, dtype=np.float32)))
        frames = sliding_window_view(padded, self.n_fft)[:: self.hop_length][:n_frames]
        spectrum = self._forward(frames * self._window)
        return np.abs(spectrum[:, : self.n_bins]).astype(np.float32)

    def process(self, samples, sample_rate: int | None = None) -> np.ndarray:
        """Return flattened, frame-major magnitude spectra.

        *sample_rate* is accepted for call-site parity with the analysis
        layer; the transform itself does not need it.
        """
        return self.process_frames(samples).ravel()

    def to_db(
        self,
        spectrum,
        ref_db: float = 0.0,
        top_db: float = 80.0,
        min_db: float = -80.0,
        max_db: float = 0.0,
    ) -> np.ndarray:
        """Convert magnitudes to dB; see :func:`amplitude_to_db`."""
        return amplitude_to_db(spectrum, ref_db=ref_db, top_db=top_db, min_db=min_db, max_db=max_db)

    def __repr__(self) -> str:
        return (
            f"STFTProcessor(n_fft={self.n_fft}, hop_length={self.hop_length}, "
            f"window={self.window_type.value}, backend={self.backend})"
        )
