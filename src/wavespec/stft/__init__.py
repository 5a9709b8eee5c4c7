"""STFT computation package."""

from .decibel import amplitude_to_db
from .processor import STFTProcessor
from .transform import FFT_BACKENDS, plan_forward
from .window import WindowType, generate_window

__all__ = [
    "FFT_BACKENDS",
    "STFTProcessor",
    "WindowType",
    "amplitude_to_db",
    "generate_window",
    "plan_forward",
]
