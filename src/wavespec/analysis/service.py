"""Spectrogram analysis: chain the DSP stages for one audio buffer."""

from __future__ import annotations

import logging

import numpy as np

from ..denoise import SpectralSubtraction
from ..errors import InvalidParameterError
from ..logfreq import remap_to_log_frequency
from ..mel import apply_mel_filter_bank, build_mel_filter_bank
from ..stft import STFTProcessor
from .entities import AudioBuffer, Spectrogram
from .params import DEFAULT_PARAMETERS, STFTParameters

logger = logging.getLogger(__name__)


class SpectrogramAnalyzer:
    """Turn AudioBuffers into dB Spectrograms.

    Stages, in order: STFT magnitude -> optional power -> optional spectral
    subtraction -> optional mel projection or log-frequency remap -> dB.
    The STFT processor is kept between calls and rebuilt only when n_fft,
    hop_length, window or backend change.
    """

    def __init__(self) -> None:
        self._processor: STFTProcessor | None = None
        self._filter_banks: dict[tuple, np.ndarray] = {}

    def _processor_for(self, params: STFTParameters) -> STFTProcessor:
        proc = self._processor
        if (
            proc is None
            or proc.n_fft != params.n_fft
            or proc.hop_length != params.hop_length
            or proc.window_type is not params.window_type
            or proc.backend != params.backend
        ):
            proc = STFTProcessor(params.n_fft, params.hop_length, params.window_type, params.backend)
            self._processor = proc
        return proc

    def _filter_bank(self, params: STFTParameters, sample_rate: int) -> np.ndarray:
        fmax = params.fmax if params.fmax is not None else sample_rate / 2.0
        key = (params.n_mels, params.n_fft, sample_rate, params.fmin, fmax)
        bank = self._filter_banks.get(key)
        if bank is None:
            bank = build_mel_filter_bank(params.n_mels, params.n_fft, sample_rate, params.fmin, fmax)
            self._filter_banks[key] = bank
        return bank

    def analyze(self, buffer: AudioBuffer, params: STFTParameters = DEFAULT_PARAMETERS) -> Spectrogram:
        """Compute a dB spectrogram for *buffer*.

        Raises:
            InvalidParameterError: On invalid parameters, an empty buffer, or
                a noise frame index past the last frame.
        """
        params.validate()
        if buffer.length == 0:
            raise InvalidParameterError("audio buffer is empty")

        processor = self._processor_for(params)
        spectra = processor.process_frames(buffer.samples)
        if params.magnitude_type == "power":
            spectra = np.square(spectra)

        if params.noise_frame is not None:
            if params.noise_frame >= spectra.shape[0]:
                raise InvalidParameterError(
                    f"noise_frame {params.noise_frame} is out of range for {spectra.shape[0]} frame(s)"
                )
            reducer = SpectralSubtraction()
            reducer.estimate_noise(spectra[params.noise_frame])
            spectra = reducer.reduce_noise_frames(spectra, alpha=params.alpha, beta=params.beta)

        scale = "linear"
        if params.n_mels:
            if params.log_frequency:
                logger.warning("log_frequency ignored: mel projection already selected")
            spectra = apply_mel_filter_bank(spectra, self._filter_bank(params, buffer.sample_rate))
            scale = "mel"
        elif params.log_frequency:
            n_frames, n_bins = spectra.shape
            spectra = remap_to_log_frequency(spectra, n_bins, n_frames, buffer.sample_rate, params.n_fft)
            scale = "log"

        db = processor.to_db(
            spectra,
            ref_db=params.ref_db,
            top_db=params.top_db,
            min_db=params.db_min,
            max_db=params.db_max,
        )
        return Spectrogram(
            data=db,
            sample_rate=buffer.sample_rate,
            n_fft=params.n_fft,
            hop_length=params.hop_length,
            scale=scale,
        )


def compute_spectrogram(buffer: AudioBuffer, params: STFTParameters = DEFAULT_PARAMETERS) -> Spectrogram:
    """One-shot helper around :class:`SpectrogramAnalyzer`."""
    return SpectrogramAnalyzer().analyze(buffer, params)
