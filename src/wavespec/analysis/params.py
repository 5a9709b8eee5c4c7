"""Spectrogram analysis parameters and their defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..errors import InvalidParameterError, ensure_positive
from ..stft.transform import DEFAULT_BACKEND, FFT_BACKENDS
from ..stft.window import WindowType

MAGNITUDE_TYPES = frozenset({"magnitude", "power"})


@dataclass(frozen=True)
class STFTParameters:
    """Everything needed to turn an AudioBuffer into a Spectrogram.

    Attributes:
        n_fft: Frame / transform size.
        hop_length: Hop between frames in samples.
        window: Window name; unknown names fall back to hann.
        magnitude_type: "magnitude" or "power" (squared magnitude).
        db_min, db_max: Absolute dB range of the output.
        ref_db: Reference level in dB; 0.0 uses the loudest bin.
        top_db: Dynamic range kept below the reference.
        n_mels: Number of mel bands, or None for a linear grid.
        fmin, fmax: Mel filter range in Hz; fmax None means Nyquist.
        log_frequency: Remap a linear grid onto a log-frequency axis.
        noise_frame: Frame index to snapshot as the noise template, or None.
        alpha, beta: Spectral subtraction factors.
        backend: Forward-transform backend name.
    """

    n_fft: int = 2048
    hop_length: int = 512
    window: str = "hann"
    magnitude_type: str = "magnitude"
    db_min: float = -80.0
    db_max: float = 0.0
    ref_db: float = 0.0
    top_db: float = 80.0
    n_mels: int | None = None
    fmin: float = 0.0
    fmax: float | None = None
    log_frequency: bool = False
    noise_frame: int | None = None
    alpha: float = 1.0
    beta: float = 0.01
    backend: str = DEFAULT_BACKEND

    @property
    def window_type(self) -> WindowType:
        return WindowType.from_name(self.window)

    @property
    def n_bins(self) -> int:
        return self.n_fft // 2 + 1

    def with_n_fft(self, n_fft: int) -> STFTParameters:
        """Return a copy with a new n_fft and hop_length re-derived as n_fft // 4."""
        return replace(self, n_fft=n_fft, hop_length=max(n_fft // 4, 1))

    def validate(self) -> STFTParameters:
        """Check ranges and return self.

        Raises:
            InvalidParameterError: If any parameter is outside its domain.
        """
        ensure_positive(self.n_fft, "n_fft")
        ensure_positive(self.hop_length, "hop_length")
        if self.n_mels is not None:
            ensure_positive(self.n_mels, "n_mels")
        if self.magnitude_type not in MAGNITUDE_TYPES:
            raise InvalidParameterError(
                f"Unknown magnitude type: {self.magnitude_type}. Use one of: {sorted(MAGNITUDE_TYPES)}"
            )
        if self.backend not in FFT_BACKENDS:
            raise InvalidParameterError(
                f"Unknown FFT backend: {self.backend}. Use one of: {sorted(FFT_BACKENDS)}"
            )
        if self.db_min > self.db_max:
            raise InvalidParameterError(
                f"db_min ({self.db_min}) must not exceed db_max ({self.db_max})"
            )
        if self.noise_frame is not None and self.noise_frame < 0:
            raise InvalidParameterError(f"noise_frame must be >= 0, got {self.noise_frame}")
        return self


DEFAULT_PARAMETERS = STFTParameters()
