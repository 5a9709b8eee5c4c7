"""Pipeline for computing spectrograms from raw audio and writing .npy outputs."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import librosa
import numpy as np

from ..analysis import AudioBuffer, SpectrogramAnalyzer, STFTParameters
from ..errors import InvalidParameterError
from ..global_config import DERIVED_DIR, RAW_AUDIO_DIR

SPECTROGRAM_OUTPUT_DIR = DERIVED_DIR / "spectrogram"


def _resolve_audio_files(files: list[Path] | None, raw_audio_dir: Path) -> list[Path]:
    """Return list of audio paths: explicit files if given, else all .wav in raw_audio_dir."""
    if files:
        return [Path(p).resolve() for p in files]
    if not raw_audio_dir.exists():
        return []
    return sorted(raw_audio_dir.glob("*.wav"))


def _track_name(audio_path: Path) -> str:
    """Stem of the audio file (no extension)."""
    return audio_path.stem


def scale_tag(params: STFTParameters) -> str:
    """Short tag for the frequency axis: linear, log, or mel<N>."""
    if params.n_mels:
        return f"mel{params.n_mels}"
    return "log" if params.log_frequency else "linear"


def _output_filename(track_name: str, params: STFTParameters) -> str:
    """Build filename: <track>_spectrogram_<window>_<n_fft>-<hop>-<scale>[-<magnitude_type>][-denoised].npy."""
    parts = [f"{params.n_fft}", f"{params.hop_length}", scale_tag(params)]
    if params.magnitude_type != "magnitude":
        parts.append(params.magnitude_type)
    if params.noise_frame is not None:
        parts.append("denoised")
    return f"{track_name}_spectrogram_{params.window_type.value}_{'-'.join(parts)}.npy"


def run_spectrogram(
    *,
    audio_files: list[Path] | None = None,
    output_dir: Path = SPECTROGRAM_OUTPUT_DIR,
    raw_audio_dir: Path = RAW_AUDIO_DIR,
    params: STFTParameters | None = None,
    dry_run: bool = False,
) -> dict:
    """Compute dB spectrograms for audio file(s) and write .npy to output_dir.

    If audio_files is None or empty, uses all .wav files in raw_audio_dir.
    Audio is loaded at its native rate and downmixed to mono. The saved array
    is frame-major, shape (n_time_frames, n_freq_bins), float32.

    Returns:
        Dict with success, total, succeeded, failed, skipped, message, items, failures.
    """
    params = params or STFTParameters()
    try:
        params = replace(params, window=params.window_type.value).validate()
    except InvalidParameterError as e:
        return {
            "success": False,
            "total": 0,
            "succeeded": 0,
            "failed": 0,
            "skipped": 0,
            "message": str(e),
            "items": [],
            "failures": [],
        }

    paths = _resolve_audio_files(audio_files, raw_audio_dir)
    if not paths:
        return {
            "success": True,
            "total": 0,
            "succeeded": 0,
            "failed": 0,
            "skipped": 0,
            "message": "No audio files to process.",
            "items": [],
            "failures": [],
        }

    output_dir = Path(output_dir)
    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    analyzer = SpectrogramAnalyzer()
    succeeded = 0
    failed = 0
    items: list[dict] = []
    failures: list[dict] = []

    for audio_path in paths:
        out_name = _output_filename(_track_name(audio_path), params)
        out_path = output_dir / out_name

        if not audio_path.exists():
            failed += 1
            failures.append({"item": str(audio_path), "reason": "File not found"})
            items.append({"file": str(audio_path), "status": "failed", "detail": "File not found"})
            continue

        try:
            y, sr = librosa.load(audio_path, sr=None, mono=True)
            spec = analyzer.analyze(AudioBuffer(y, int(sr)), params)
            if not dry_run:
                np.save(out_path, spec.data, allow_pickle=False)
            succeeded += 1
            items.append({
                "file": audio_path.name,
                "output": out_name,
                "status": "success",
                "sample_rate_hz": int(sr),
                "duration_sec": len(y) / float(sr),
                "scale": spec.scale,
                "n_time_frames": spec.n_time_frames,
                "n_freq_bins": spec.n_freq_bins,
                "db_range": (float(spec.data.min()), float(spec.data.max())),
            })
        except Exception as e:
            failed += 1
            failures.append({"item": str(audio_path), "reason": str(e)})
            items.append({"file": audio_path.name, "status": "failed", "detail": str(e)})

    return {
        "success": failed == 0,
        "total": len(paths),
        "succeeded": succeeded,
        "failed": failed,
        "skipped": 0,
        "message": f"Processed {len(paths)} file(s). Succeeded: {succeeded}, failed: {failed}."
        + (" [DRY RUN]" if dry_run else ""),
        "items": items,
        "failures": failures,
    }
