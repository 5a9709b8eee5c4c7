"""Analysis window generation."""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)


class WindowType(str, Enum):
    """Closed set of supported window shapes."""

    HANN = "hann"
    HAMMING = "hamming"
    BLACKMAN = "blackman"

    @classmethod
    def from_name(cls, name: str | WindowType | None) -> WindowType:
        """Resolve a user-supplied window name, falling back to Hann.

        Unrecognized names are not an error at the boundary; they map to
        Hann with a warning.
        """
        if isinstance(name, cls):
            return name
        key = (name or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        logger.warning("Unknown window type %r, using hann", name)
        return cls.HANN


def generate_window(n_fft: int, window_type: WindowType = WindowType.HANN) -> np.ndarray:
    """Return a symmetric window of length *n_fft* as float32.

    Coefficients use the SciPy-compatible symmetric form, i.e. the cosine
    argument is ``2*pi*i / (n_fft - 1)``. A single-point window is ``[1.0]``.

    Parameters
    ----------
    n_fft : int
        Window length in samples.
    window_type : WindowType
        Hann, Hamming or Blackman.
    """
    window_type = WindowType(window_type)
    if n_fft == 1:
        return np.ones(1, dtype=np.float32)

    phase = 2.0 * np.pi * np.arange(n_fft, dtype=np.float64) / (n_fft - 1)
    if window_type is WindowType.HANN:
        w = 0.5 * (1.0 - np.cos(phase))
    elif window_type is WindowType.HAMMING:
        w = 0.54 - 0.46 * np.cos(phase)
    else:
        w = 0.42 - 0.5 * np.cos(phase) + 0.08 * np.cos(2.0 * phase)
    return w.astype(np.float32)
