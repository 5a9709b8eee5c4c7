"""
wavespec core package.

Turns mono PCM audio into frequency-domain arrays:
- STFT magnitude spectra and dB scaling (`wavespec.stft`)
- Mel scale conversion and triangular filter banks (`wavespec.mel`)
- Single-snapshot spectral subtraction (`wavespec.denoise`)
- Linear to log-frequency remapping (`wavespec.logfreq`)

The host-facing layer (`wavespec.analysis`), batch pipelines
(`wavespec.pipeline`) and the Typer CLI (`wavespec.cli`) are built on top.

Configuration:
- Shared filesystem anchors live in `wavespec.global_config`.
- Analysis defaults live in `wavespec.analysis.params`.
"""

from .denoise import SpectralSubtraction
from .logfreq import remap_to_log_frequency
from .mel import apply_mel_filter_bank, build_mel_filter_bank, hz_to_mel, mel_to_hz
from .stft import STFTProcessor, WindowType, amplitude_to_db, generate_window

__all__ = [
    "STFTProcessor",
    "SpectralSubtraction",
    "WindowType",
    "amplitude_to_db",
    "apply_mel_filter_bank",
    "build_mel_filter_bank",
    "generate_window",
    "hz_to_mel",
    "mel_to_hz",
    "remap_to_log_frequency",
]
