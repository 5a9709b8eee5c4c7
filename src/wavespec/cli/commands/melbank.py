"""CLI command for mel filter bank export."""

from __future__ import annotations

from typing import Annotated

import typer

from ...pipeline.melbank import MELBANK_OUTPUT_DIR, run_melbank
from ..base import BaseCLI

app = typer.Typer(
    name="melbank",
    help="Build a mel filter bank and write .npy to data/derived/melbank",
    context_settings={"allow_interspersed_args": True},
)


@app.callback(invoke_without_command=True)
def melbank(
    n_mels: Annotated[int, typer.Option("--n-mels", "-m", help="Number of filters. Default: 40.")] = 40,
    n_fft: Annotated[int, typer.Option("--n-fft", "-N", help="FFT size. Default: 2048.")] = 2048,
    sample_rate: Annotated[
        int,
        typer.Option("--sample-rate", "-r", help="Sampling rate in Hz. Default: 44100."),
    ] = 44100,
    fmin: Annotated[float, typer.Option("--fmin", help="Lowest frequency (Hz). Default: 0.")] = 0.0,
    fmax: Annotated[
        float | None,
        typer.Option("--fmax", help="Highest frequency (Hz). Default: Nyquist."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Build the bank without writing it."),
    ] = False,
) -> None:
    """Build a (n_mels, n_fft // 2 + 1) triangular mel filter bank."""
    cli = BaseCLI("melbank")

    def _run() -> dict:
        return run_melbank(
            n_mels=n_mels,
            n_fft=n_fft,
            sample_rate=sample_rate,
            fmin=fmin,
            fmax=fmax,
            output_dir=MELBANK_OUTPUT_DIR,
            dry_run=dry_run,
        )

    cli.handle_cli_operation(
        operation="melbank",
        op_callable=_run,
        pre_message=f"Building {n_mels}-band mel filter bank (n_fft={n_fft}, sr={sample_rate})...",
    )
