"""Pipeline for exporting a mel filter bank as .npy."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ..global_config import DERIVED_DIR
from ..mel import build_mel_filter_bank

MELBANK_OUTPUT_DIR = DERIVED_DIR / "melbank"


def _output_filename(n_mels: int, n_fft: int, sample_rate: int, fmin: float, fmax: float) -> str:
    """Build filename: melbank_<n_mels>-<n_fft>-<sr>-<fmin>-<fmax>.npy."""
    return f"melbank_{n_mels}-{n_fft}-{sample_rate}-{fmin}-{fmax}.npy"


def run_melbank(
    *,
    n_mels: int = 40,
    n_fft: int = 2048,
    sample_rate: int = 44100,
    fmin: float = 0.0,
    fmax: float | None = None,
    output_dir: Path = MELBANK_OUTPUT_DIR,
    dry_run: bool = False,
) -> dict:
    """Build a mel filter bank and write it to output_dir.

    The array has shape (n_mels, n_fft // 2 + 1), float32. fmax defaults to Nyquist.

    Returns:
        Dict with success, total, succeeded, failed, message, items, failures.
    """
    for name, value in (("n_mels", n_mels), ("n_fft", n_fft), ("sample_rate", sample_rate)):
        if value <= 0:
            return {
                "success": False,
                "total": 0,
                "succeeded": 0,
                "failed": 0,
                "message": f"{name} must be positive, got {value}",
                "items": [],
                "failures": [],
            }

    fmax = float(fmax) if fmax is not None else sample_rate / 2.0
    fmin = float(fmin)
    bank = build_mel_filter_bank(n_mels, n_fft, sample_rate, fmin, fmax)
    out_name = _output_filename(n_mels, n_fft, sample_rate, fmin, fmax)

    if not dry_run:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        np.save(output_dir / out_name, bank, allow_pickle=False)

    empty_filters = int(np.sum(~np.any(bank > 0, axis=1)))
    return {
        "success": True,
        "total": 1,
        "succeeded": 1,
        "failed": 0,
        "message": f"Built {n_mels} mel filter(s) over {bank.shape[1]} bin(s)."
        + (" [DRY RUN]" if dry_run else ""),
        "items": [{
            "item": "melbank",
            "output": out_name,
            "status": "success",
            "shape": tuple(bank.shape),
            "empty_filters": empty_filters,
        }],
        "failures": [],
    }
