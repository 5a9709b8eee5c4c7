"""Tests for single-snapshot spectral subtraction."""

from __future__ import annotations

import numpy as np
import pytest

from wavespec.denoise import SpectralSubtraction


@pytest.fixture
def reducer() -> SpectralSubtraction:
    r = SpectralSubtraction()
    r.estimate_noise([0.1, 0.1, 0.1, 0.1])
    return r


class TestReduceNoise:
    @pytest.mark.unit
    def test_floor_applied(self, reducer: SpectralSubtraction) -> None:
        out = reducer.reduce_noise([0.5, 0.3, 0.1, 0.05], alpha=1.0, beta=0.1)
        assert out.shape == (4,)
        assert np.all(out >= 0.01 - 1e-7)
        np.testing.assert_allclose(out, [0.4, 0.2, 0.01, 0.01], atol=1e-6)

    @pytest.mark.unit
    def test_oversubtraction(self, reducer: SpectralSubtraction) -> None:
        out = reducer.reduce_noise([1.0, 1.0, 1.0, 1.0], alpha=2.0, beta=0.0)
        np.testing.assert_allclose(out, [0.8] * 4, atol=1e-6)

    @pytest.mark.unit
    def test_no_template_passes_through(self) -> None:
        signal = np.array([0.5, 0.3], dtype=np.float32)
        out = SpectralSubtraction().reduce_noise(signal)
        np.testing.assert_array_equal(out, signal)
        assert out is not signal

    @pytest.mark.unit
    def test_length_mismatch_passes_through(self, reducer: SpectralSubtraction) -> None:
        signal = [0.5, 0.3, 0.2]
        np.testing.assert_allclose(reducer.reduce_noise(signal, 1.0, 0.1), signal)

    @pytest.mark.unit
    def test_input_not_mutated(self, reducer: SpectralSubtraction) -> None:
        signal = np.array([0.5, 0.3, 0.1, 0.05], dtype=np.float32)
        before = signal.copy()
        reducer.reduce_noise(signal)
        np.testing.assert_array_equal(signal, before)

    @pytest.mark.unit
    def test_repeated_calls_identical(self, reducer: SpectralSubtraction) -> None:
        signal = [0.5, 0.3, 0.1, 0.05]
        np.testing.assert_array_equal(
            reducer.reduce_noise(signal, 1.5, 0.05),
            reducer.reduce_noise(signal, 1.5, 0.05),
        )


class TestNoiseTemplate:
    @pytest.mark.unit
    def test_empty_estimate_is_ignored(self, reducer: SpectralSubtraction) -> None:
        reducer.estimate_noise([])
        np.testing.assert_allclose(reducer.noise_spectrum, [0.1] * 4)

    @pytest.mark.unit
    def test_template_replaced_not_averaged(self, reducer: SpectralSubtraction) -> None:
        reducer.estimate_noise([0.2, 0.2])
        np.testing.assert_allclose(reducer.noise_spectrum, [0.2, 0.2])
        out = reducer.reduce_noise([0.5, 0.1], alpha=1.0, beta=0.1)
        np.testing.assert_allclose(out, [0.3, 0.02], atol=1e-6)

    @pytest.mark.unit
    def test_template_is_a_copy(self) -> None:
        noise = np.array([0.1, 0.2], dtype=np.float32)
        r = SpectralSubtraction()
        r.estimate_noise(noise)
        noise[:] = 9.0
        np.testing.assert_allclose(r.noise_spectrum, [0.1, 0.2])
        r.noise_spectrum[0] = 5.0
        np.testing.assert_allclose(r.noise_spectrum, [0.1, 0.2])

    @pytest.mark.unit
    def test_reset(self, reducer: SpectralSubtraction) -> None:
        assert reducer.has_noise_estimate
        reducer.reset()
        assert not reducer.has_noise_estimate
        np.testing.assert_allclose(reducer.reduce_noise([0.5, 0.3, 0.1, 0.05]), [0.5, 0.3, 0.1, 0.05])


class TestReduceNoiseFrames:
    @pytest.mark.unit
    def test_matches_row_by_row(self, reducer: SpectralSubtraction) -> None:
        grid = np.random.default_rng(0).random((6, 4)).astype(np.float32)
        out = reducer.reduce_noise_frames(grid, alpha=1.2, beta=0.05)
        expected = np.stack([reducer.reduce_noise(row, 1.2, 0.05) for row in grid])
        np.testing.assert_allclose(out, expected)

    @pytest.mark.unit
    def test_zero_frames(self, reducer: SpectralSubtraction) -> None:
        assert reducer.reduce_noise_frames(np.zeros((0, 4))).shape == (0, 4)

    @pytest.mark.unit
    def test_mismatch_passes_through(self, reducer: SpectralSubtraction) -> None:
        grid = np.ones((3, 5), dtype=np.float32)
        np.testing.assert_array_equal(reducer.reduce_noise_frames(grid), grid)

    @pytest.mark.unit
    def test_requires_2d(self, reducer: SpectralSubtraction) -> None:
        with pytest.raises(ValueError, match="2-D"):
            reducer.reduce_noise_frames([0.1, 0.2, 0.3, 0.4])
