"""Spectrogram analysis package (host-facing layer over the DSP core)."""

from .entities import AudioBuffer, Spectrogram
from .params import DEFAULT_PARAMETERS, MAGNITUDE_TYPES, STFTParameters
from .service import SpectrogramAnalyzer, compute_spectrogram

__all__ = [
    "DEFAULT_PARAMETERS",
    "MAGNITUDE_TYPES",
    "AudioBuffer",
    "STFTParameters",
    "Spectrogram",
    "SpectrogramAnalyzer",
    "compute_spectrogram",
]
