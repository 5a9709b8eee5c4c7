"""Value objects passed between the host and the analysis layer."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..errors import InvalidParameterError, ensure_positive


@dataclass(frozen=True)
class AudioBuffer:
    """Mono float32 samples with their sampling rate."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        ensure_positive(self.sample_rate, "sample_rate")
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.ndim != 1:
            raise InvalidParameterError(f"samples must be 1-D (mono), got shape {samples.shape}")
        object.__setattr__(self, "samples", samples)

    @property
    def length(self) -> int:
        return int(self.samples.size)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.length / self.sample_rate


@dataclass(frozen=True)
class Spectrogram:
    """Frame-major ``(n_time_frames, n_freq_bins)`` grid of spectral values.

    ``n_freq_bins`` is whatever the last processing step produced: linear
    STFT bins, log-frequency bins, or mel bands.
    """

    data: np.ndarray
    sample_rate: int
    n_fft: int
    hop_length: int
    scale: str = field(default="linear")

    def __post_init__(self) -> None:
        data = np.asarray(self.data, dtype=np.float32)
        if data.ndim != 2:
            raise InvalidParameterError(f"data must be 2-D (time, freq), got shape {data.shape}")
        if data.shape[0] <= 0 or data.shape[1] <= 0:
            raise InvalidParameterError("n_freq_bins and n_time_frames must be positive")
        ensure_positive(self.sample_rate, "sample_rate")
        ensure_positive(self.n_fft, "n_fft")
        ensure_positive(self.hop_length, "hop_length")
        object.__setattr__(self, "data", data)

    @property
    def n_time_frames(self) -> int:
        return int(self.data.shape[0])

    @property
    def n_freq_bins(self) -> int:
        return int(self.data.shape[1])

    @property
    def duration(self) -> float:
        """Time of the last frame start, in seconds."""
        return (self.n_time_frames - 1) * self.hop_length / self.sample_rate

    @property
    def frequency_resolution(self) -> float:
        return self.sample_rate / self.n_fft

    def get_value(self, freq_bin: int, time_frame: int) -> float:
        """Value at (freq_bin, time_frame), or 0.0 outside the grid."""
        if not (0 <= freq_bin < self.n_freq_bins and 0 <= time_frame < self.n_time_frames):
            return 0.0
        return float(self.data[time_frame, freq_bin])

    def get_frequency(self, freq_bin: int) -> float:
        """Centre frequency of a linear STFT bin in Hz."""
        return freq_bin * self.sample_rate / self.n_fft

    def get_time(self, time_frame: int) -> float:
        """Start time of a frame in seconds."""
        return time_frame * self.hop_length / self.sample_rate
