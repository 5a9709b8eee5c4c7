"""Tests for the analysis layer: entities, parameters and the analyzer."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from wavespec.analysis import (
    DEFAULT_PARAMETERS,
    AudioBuffer,
    Spectrogram,
    SpectrogramAnalyzer,
    STFTParameters,
    compute_spectrogram,
)
from wavespec.errors import InvalidParameterError, WavespecError
from wavespec.stft import STFTProcessor


@pytest.fixture
def buffer(make_sine) -> AudioBuffer:
    # 0.5 s at 22050 Hz -> 11025 samples -> 22 frames at hop 512.
    return AudioBuffer(make_sine(440.0, 22050, 0.5), 22050)


class TestAudioBuffer:
    @pytest.mark.unit
    def test_duration(self) -> None:
        buf = AudioBuffer(np.zeros(8000), 16000)
        assert buf.length == 8000
        assert buf.duration == pytest.approx(0.5)
        assert buf.samples.dtype == np.float32

    @pytest.mark.unit
    @pytest.mark.parametrize("sr", [0, -1])
    def test_rejects_non_positive_rate(self, sr: int) -> None:
        with pytest.raises(InvalidParameterError, match="sample_rate"):
            AudioBuffer(np.zeros(10), sr)

    @pytest.mark.unit
    def test_rejects_multichannel(self) -> None:
        with pytest.raises(InvalidParameterError, match="mono"):
            AudioBuffer(np.zeros((2, 10)), 8000)


class TestSpectrogramEntity:
    @pytest.fixture
    def spec(self) -> Spectrogram:
        data = np.arange(12, dtype=np.float32).reshape(4, 3)
        return Spectrogram(data=data, sample_rate=8000, n_fft=4, hop_length=2)

    @pytest.mark.unit
    def test_dimensions(self, spec: Spectrogram) -> None:
        assert spec.n_time_frames == 4
        assert spec.n_freq_bins == 3
        assert spec.scale == "linear"
        assert spec.duration == pytest.approx(3 * 2 / 8000)
        assert spec.frequency_resolution == pytest.approx(2000.0)

    @pytest.mark.unit
    def test_get_value(self, spec: Spectrogram) -> None:
        assert spec.get_value(1, 2) == 7.0
        assert spec.get_value(3, 0) == 0.0
        assert spec.get_value(0, 4) == 0.0
        assert spec.get_value(-1, 0) == 0.0

    @pytest.mark.unit
    def test_axes(self, spec: Spectrogram) -> None:
        assert spec.get_frequency(2) == pytest.approx(4000.0)
        assert spec.get_time(3) == pytest.approx(6 / 8000)

    @pytest.mark.unit
    def test_rejects_empty_grid(self) -> None:
        with pytest.raises(InvalidParameterError):
            Spectrogram(data=np.zeros((0, 3)), sample_rate=8000, n_fft=4, hop_length=2)

    @pytest.mark.unit
    def test_rejects_flat_data(self) -> None:
        with pytest.raises(InvalidParameterError, match="2-D"):
            Spectrogram(data=np.zeros(6), sample_rate=8000, n_fft=4, hop_length=2)


class TestSTFTParameters:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        p = DEFAULT_PARAMETERS
        assert (p.n_fft, p.hop_length, p.window) == (2048, 512, "hann")
        assert (p.db_min, p.db_max, p.ref_db, p.top_db) == (-80.0, 0.0, 0.0, 80.0)
        assert p.magnitude_type == "magnitude"
        assert p.n_bins == 1025

    @pytest.mark.unit
    def test_with_n_fft_rederives_hop(self) -> None:
        p = DEFAULT_PARAMETERS.with_n_fft(1024)
        assert (p.n_fft, p.hop_length) == (1024, 256)
        assert DEFAULT_PARAMETERS.with_n_fft(2).hop_length == 1

    @pytest.mark.unit
    def test_unknown_window_falls_back(self) -> None:
        assert STFTParameters(window="triangle").window_type.value == "hann"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "overrides,match",
        [
            ({"n_fft": 0}, "n_fft"),
            ({"hop_length": -4}, "hop_length"),
            ({"n_mels": 0}, "n_mels"),
            ({"magnitude_type": "phase"}, "magnitude type"),
            ({"backend": "fftw"}, "FFT backend"),
            ({"db_min": 0.0, "db_max": -10.0}, "db_min"),
            ({"noise_frame": -1}, "noise_frame"),
        ],
    )
    def test_validate_rejects(self, overrides: dict, match: str) -> None:
        with pytest.raises(InvalidParameterError, match=match):
            replace(DEFAULT_PARAMETERS, **overrides).validate()

    @pytest.mark.unit
    def test_error_hierarchy(self) -> None:
        assert issubclass(InvalidParameterError, WavespecError)
        assert issubclass(InvalidParameterError, ValueError)


class TestSpectrogramAnalyzer:
    @pytest.mark.unit
    def test_default_linear_grid(self, buffer: AudioBuffer) -> None:
        spec = compute_spectrogram(buffer)
        assert spec.data.shape == (22, 1025)
        assert spec.scale == "linear"
        assert spec.data.max() == pytest.approx(0.0)
        assert spec.data.min() >= -80.0

    @pytest.mark.unit
    def test_peak_near_input_frequency(self, buffer: AudioBuffer) -> None:
        spec = compute_spectrogram(buffer)
        peak_bin = int(np.argmax(spec.data[5]))
        assert abs(spec.get_frequency(peak_bin) - 440.0) < 20.0

    @pytest.mark.unit
    def test_mel_grid(self, buffer: AudioBuffer) -> None:
        spec = compute_spectrogram(buffer, STFTParameters(n_mels=40))
        assert spec.data.shape == (22, 40)
        assert spec.scale == "mel"

    @pytest.mark.unit
    def test_mel_wins_over_log_frequency(self, buffer: AudioBuffer) -> None:
        spec = compute_spectrogram(buffer, STFTParameters(n_mels=16, log_frequency=True))
        assert spec.scale == "mel"
        assert spec.n_freq_bins == 16

    @pytest.mark.unit
    def test_log_frequency_grid(self, buffer: AudioBuffer) -> None:
        spec = compute_spectrogram(buffer, STFTParameters(log_frequency=True))
        assert spec.data.shape == (22, 1025)
        assert spec.scale == "log"

    @pytest.mark.unit
    def test_power_doubles_unclipped_db(self, buffer: AudioBuffer) -> None:
        wide = STFTParameters(db_min=-1000.0, top_db=1000.0)
        mag = compute_spectrogram(buffer, wide)
        pwr = compute_spectrogram(buffer, replace(wide, magnitude_type="power"))
        assert pwr.data.shape == mag.data.shape
        nonzero = mag.data > -1000.0
        np.testing.assert_allclose(pwr.data[nonzero], 2.0 * mag.data[nonzero], atol=1e-2)

    @pytest.mark.unit
    def test_power_floor_follows_squared_peak(self, buffer: AudioBuffer) -> None:
        # ref_db == 0: the relative floor is 20*log10(max) - top_db, in absolute dB.
        params = STFTParameters(magnitude_type="power", db_min=-300.0, top_db=30.0)
        spec = compute_spectrogram(buffer, params)

        raw = np.square(STFTProcessor(2048, 512).process_frames(buffer.samples)).astype(np.float64)
        expected_floor = 20.0 * np.log10(raw.max()) - 30.0
        assert spec.data.min() == pytest.approx(min(expected_floor, 0.0), abs=1e-3)

    @pytest.mark.unit
    def test_custom_db_range(self, buffer: AudioBuffer) -> None:
        spec = compute_spectrogram(buffer, STFTParameters(db_min=-40.0, db_max=-10.0))
        assert spec.data.min() >= -40.0
        assert spec.data.max() <= -10.0

    @pytest.mark.unit
    def test_noise_reduction(self, make_sine) -> None:
        sr = 22050
        hiss = 0.01 * np.random.default_rng(0).standard_normal(sr).astype(np.float32)
        tone = make_sine(440.0, sr, 1.0)
        tone[: sr // 4] = 0.0
        buf = AudioBuffer(tone + hiss, sr)

        params = STFTParameters(noise_frame=0, db_min=-200.0, top_db=200.0)
        spec = compute_spectrogram(buf, params)
        plain = compute_spectrogram(buf, replace(params, noise_frame=None))
        assert spec.data.shape == plain.data.shape
        # The hiss-only snapshot frame drops to beta * itself (-40 dB).
        assert spec.data[0].mean() < plain.data[0].mean() - 20.0

    @pytest.mark.unit
    def test_noise_frame_out_of_range(self, buffer: AudioBuffer) -> None:
        with pytest.raises(InvalidParameterError, match="out of range"):
            compute_spectrogram(buffer, STFTParameters(noise_frame=22))

    @pytest.mark.unit
    def test_empty_buffer(self) -> None:
        with pytest.raises(InvalidParameterError, match="empty"):
            compute_spectrogram(AudioBuffer(np.zeros(0), 8000))

    @pytest.mark.unit
    def test_invalid_params(self, buffer: AudioBuffer) -> None:
        with pytest.raises(InvalidParameterError):
            compute_spectrogram(buffer, STFTParameters(hop_length=0))

    @pytest.mark.unit
    def test_processor_reused_until_params_change(self, buffer: AudioBuffer) -> None:
        analyzer = SpectrogramAnalyzer()
        analyzer.analyze(buffer)
        first = analyzer._processor

        analyzer.analyze(buffer, STFTParameters(db_min=-60.0, n_mels=20))
        assert analyzer._processor is first

        analyzer.analyze(buffer, STFTParameters(window="hamming"))
        assert analyzer._processor is not first
        assert analyzer._processor.window_type.value == "hamming"

        second = analyzer._processor
        analyzer.analyze(buffer, DEFAULT_PARAMETERS.with_n_fft(1024))
        assert analyzer._processor is not second
        assert analyzer._processor.n_fft == 1024
