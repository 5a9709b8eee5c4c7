from __future__ import annotations

import wave
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def app_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Forces test mode. Application code can use this to refuse dangerous behaviors.
    Automatically applied to all tests.
    """
    monkeypatch.setenv("APP_ENV", "test")


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "raw" / "audio").mkdir(parents=True)
    (root / "data" / "derived").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


def sine(freq: float, sr: int, duration_sec: float, amplitude: float = 0.5) -> np.ndarray:
    """Float32 sine wave."""
    t = np.arange(int(sr * duration_sec)) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def write_wav(path: Path, samples: np.ndarray, sr: int) -> None:
    """Write mono 16-bit PCM so librosa can load it."""
    pcm = np.clip(samples, -1.0, 1.0)
    buf = (pcm * 32767).astype(np.int16)
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sr)
        w.writeframes(buf.tobytes())


@pytest.fixture
def make_sine():
    """Factory fixture for float32 sine waves."""
    return sine


@pytest.fixture
def make_wav():
    """Factory fixture that writes mono 16-bit WAV files."""
    return write_wav
