from __future__ import annotations

import typer

from .base import configure_logging
from .commands.melbank import app as melbank_app
from .commands.spectrogram import app as spectrogram_app

configure_logging()
app = typer.Typer(
    help="Spectrogram analysis CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(spectrogram_app, name="spectrogram")
app.add_typer(melbank_app, name="melbank")


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.
    """
    app()


if __name__ == "__main__":
    main()
