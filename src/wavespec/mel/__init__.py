"""Mel scale and filter-bank package."""

from .methods import (
    apply_mel_filter_bank,
    build_mel_filter_bank,
    hz_to_mel,
    mel_frequencies,
    mel_to_hz,
)

__all__ = [
    "apply_mel_filter_bank",
    "build_mel_filter_bank",
    "hz_to_mel",
    "mel_frequencies",
    "mel_to_hz",
]
