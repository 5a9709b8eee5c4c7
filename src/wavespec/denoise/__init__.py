"""Noise reduction package."""

from .spectral_subtraction import SpectralSubtraction

__all__ = ["SpectralSubtraction"]
