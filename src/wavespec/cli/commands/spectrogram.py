"""CLI command for spectrogram computation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...analysis import STFTParameters
from ...global_config import RAW_AUDIO_DIR
from ...pipeline.spectrogram import SPECTROGRAM_OUTPUT_DIR, run_spectrogram, scale_tag
from ..base import BaseCLI

app = typer.Typer(
    name="spectrogram",
    help="Compute dB spectrograms from raw audio and write .npy to data/derived/spectrogram",
    context_settings={"allow_interspersed_args": True},
)


@app.callback(invoke_without_command=True)
def spectrogram(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Audio file(s) to process. If omitted, all .wav files in data/raw/audio are used.",
        ),
    ] = [],
    n_fft: Annotated[
        int,
        typer.Option("--n-fft", "-N", help="FFT size. Default: 2048."),
    ] = 2048,
    hop_length: Annotated[
        int | None,
        typer.Option("--hop-length", "-H", help="Hop size in samples. Default: n_fft // 4."),
    ] = None,
    window: Annotated[
        str,
        typer.Option("--window", "-w", help="Window: hann, hamming, blackman. Unknown names use hann."),
    ] = "hann",
    power: Annotated[
        bool,
        typer.Option("--power", help="Use squared magnitudes before dB conversion."),
    ] = False,
    db_min: Annotated[float, typer.Option("--db-min", help="Lowest output dB. Default: -80.")] = -80.0,
    db_max: Annotated[float, typer.Option("--db-max", help="Highest output dB. Default: 0.")] = 0.0,
    ref_db: Annotated[
        float,
        typer.Option("--ref-db", help="Reference level in dB; 0 uses the loudest bin. Default: 0."),
    ] = 0.0,
    top_db: Annotated[float, typer.Option("--top-db", help="Dynamic range below reference. Default: 80.")] = 80.0,
    n_mels: Annotated[
        int | None,
        typer.Option("--n-mels", "-m", help="Project onto this many mel bands."),
    ] = None,
    fmin: Annotated[float, typer.Option("--fmin", help="Lowest mel filter frequency (Hz).")] = 0.0,
    fmax: Annotated[
        float | None,
        typer.Option("--fmax", help="Highest mel filter frequency (Hz). Default: Nyquist."),
    ] = None,
    log_frequency: Annotated[
        bool,
        typer.Option("--log-frequency", "-l", help="Remap the linear grid onto a log-frequency axis."),
    ] = False,
    noise_frame: Annotated[
        int | None,
        typer.Option("--noise-frame", help="Frame index used as the noise snapshot for spectral subtraction."),
    ] = None,
    alpha: Annotated[float, typer.Option("--alpha", help="Oversubtraction factor. Default: 1.0.")] = 1.0,
    beta: Annotated[float, typer.Option("--beta", help="Spectral floor factor. Default: 0.01.")] = 0.01,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be written without writing files."),
    ] = False,
    no_log: Annotated[
        bool,
        typer.Option("--no-log", help="Do not write a log file to data/logs/derived."),
    ] = False,
) -> None:
    """Compute dB spectrograms and write them to data/derived/spectrogram.

    Output filenames: <track>_spectrogram_<window>_<n_fft>-<hop>-<scale>.npy,
    with -power and -denoised suffixes when those options are used.
    """
    cli = BaseCLI("spectrogram")

    audio_list = list(files) if files else None
    params = STFTParameters(
        n_fft=n_fft,
        hop_length=hop_length if hop_length is not None else max(n_fft // 4, 1),
        window=window.lower(),
        magnitude_type="power" if power else "magnitude",
        db_min=db_min,
        db_max=db_max,
        ref_db=ref_db,
        top_db=top_db,
        n_mels=n_mels,
        fmin=fmin,
        fmax=fmax,
        log_frequency=log_frequency,
        noise_frame=noise_frame,
        alpha=alpha,
        beta=beta,
    )

    def _run() -> dict:
        return run_spectrogram(
            audio_files=audio_list,
            output_dir=SPECTROGRAM_OUTPUT_DIR,
            raw_audio_dir=RAW_AUDIO_DIR,
            params=params,
            dry_run=dry_run,
        )

    pre_message = (
        "Computing spectrogram (dry-run; no files will be written)..."
        if dry_run
        else "Computing spectrogram for "
        + (f"{len(audio_list)} file(s)..." if audio_list else "all audio in raw folder...")
    )
    inputs_desc = str([str(p) for p in audio_list]) if audio_list else f"all .wav in {RAW_AUDIO_DIR}"
    cli.handle_cli_operation(
        operation="spectrogram",
        op_callable=_run,
        pre_message=pre_message,
        log_module="spectrogram",
        log_method=scale_tag(params),
        log_dry_run=dry_run,
        enable_log=not no_log,
        log_context={
            "inputs": inputs_desc,
            "output_dir": str(SPECTROGRAM_OUTPUT_DIR),
            "params": params,
        },
    )
