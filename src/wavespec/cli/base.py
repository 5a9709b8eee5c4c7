from __future__ import annotations

import logging
import os
import sys
import traceback
from collections.abc import Callable, Generator
from contextlib import contextmanager
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from typing import Any, TextIO

import typer

from ..global_config import DERIVED_LOGS_DIR, PACKAGE_NAME

_LOGGING_CONFIGURED = False


def _get_version() -> str:
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "unknown"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure CLI-wide logging once.

    Safe to call multiple times; only the first call configures the root
    logger.

    Args:
        level: Logging level (defaults to INFO).
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger hooked into the shared CLI configuration."""
    return logging.getLogger(name)


@contextmanager
def handle_errors(
    operation: str,
    *,
    logger: logging.Logger | None = None,
    log_file: TextIO | None = None,
) -> Generator[None, None, None]:
    """Provide consistent exception handling for CLI operations.

    Catches exceptions, logs them with traceback, prints a red failure line
    and exits with code 1. typer.Exit passes through untouched.

    Args:
        operation: Human-readable operation name for error messages.
        logger: Logger instance. Defaults to module logger if None.
        log_file: Optional file handle that also receives the error and traceback.

    Raises:
        typer.Exit: With code 1 on any other exception.
    """
    logger = logger or get_logger(__name__)
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error during %s", operation)
        typer.secho(f"✗ {operation} failed: {exc}", fg=typer.colors.RED)
        if log_file:
            log_file.write(f"\n✗ {operation} failed: {exc}\n")
            log_file.write(f"exception_type: {type(exc).__name__}\n")
            log_file.write(f"exception_message: {exc}\n")
            log_file.write("traceback:\n")
            log_file.write(traceback.format_exc())
            log_file.flush()
        raise typer.Exit(1) from exc


def format_result(result: Any, *, operation: str | None = None) -> str:
    """Format arbitrary result payloads into CLI-friendly text.

    Args:
        result: dict, list, bool, str, or None.
        operation: Optional operation name to include in formatted output.

    Returns:
        Formatted string ready for CLI display.
    """
    op_label = operation or "Result"

    if result is None:
        return f"✓ {op_label}"

    if isinstance(result, bool):
        icon = "✓" if result else "✗"
        return f"{icon} {op_label}"

    if isinstance(result, str):
        return f"{op_label}: {result}"

    if isinstance(result, list):
        rendered_items = "\n".join(f"  • {item}" for item in result)
        return f"{op_label}:\n{rendered_items}" if rendered_items else f"{op_label}: []"

    if isinstance(result, dict):
        return _format_result_dict(result, op_label)

    return f"{op_label}: {result!r}"


class BaseCLI:
    """Utility base class for CLI command groups."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        self.logger = get_logger(__name__)

    def handle_cli_operation(
        self,
        *,
        operation: str,
        op_callable: Callable[[], Any],
        pre_message: str | None = None,
        log_module: str | None = None,
        log_method: str | None = None,
        log_dry_run: bool = False,
        enable_log: bool = True,
        log_context: dict[str, Any] | None = None,
    ) -> Any:
        """Run an operation with consistent logging, formatting, and errors.

        Args:
            operation: Human-readable operation name for error handling.
            op_callable: Callable that performs the operation and returns a result.
            pre_message: Optional message to display before the operation starts.
            log_module: Module name for the log filename (e.g. spectrogram).
            log_method: Method name for the log filename (e.g. mel128).
            log_dry_run: Whether this run is a dry run (for filename).
            enable_log: Whether to write a log file (default True).
            log_context: Extra key-value pairs for the metadata header.

        Returns:
            Result from op_callable.
        """
        log_file: TextIO | None = None
        use_log = enable_log and log_module is not None

        def _out(msg: str) -> None:
            typer.echo(msg)
            if log_file:
                log_file.write(msg + "\n")
                log_file.flush()

        if use_log:
            DERIVED_LOGS_DIR.mkdir(parents=True, exist_ok=True)
            ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
            parts = [ts, log_module]
            if log_method:
                parts.append(log_method)
            if log_dry_run:
                parts.append("dryrun")
            log_path = DERIVED_LOGS_DIR / f"{'_'.join(parts)}.log"
            log_file = open(log_path, "w", encoding="utf-8")  # noqa: SIM115
            header_lines = [
                "--- metadata ---",
                f"timestamp: {datetime.now(timezone.utc).isoformat()}",
                f"command: {log_module}",
                f"argv: {sys.argv}",
                f"cwd: {os.getcwd()}",
                f"wavespec_version: {_get_version()}",
                f"python_version: {sys.version}",
            ]
            for k, v in (log_context or {}).items():
                header_lines.append(f"{k}: {v}")
            header_lines.append("---")
            log_file.write("\n".join(header_lines) + "\n")
            log_file.flush()

        try:
            if pre_message:
                _out(pre_message)

            with handle_errors(operation, logger=self.logger, log_file=log_file):
                result = op_callable()

            _out(format_result(result, operation=operation))
            if isinstance(result, dict) and result.get("success") is False:
                raise typer.Exit(1)
            return result
        finally:
            if log_file:
                log_file.close()


def _format_result_dict(result: dict[str, Any], op_label: str) -> str:
    """Format a pipeline result dict (success, stats, message, failures, items)."""
    icon = "✓" if result.get("success", True) else "✗"
    lines = [f"{icon} {op_label}"]

    stats_order = [
        ("total", "total"),
        ("succeeded", "succeeded"),
        ("failed", "failed"),
        ("skipped", "skipped"),
    ]
    stats = [
        f"{label}: {result[key]}"
        for key, label in stats_order
        if key in result and result[key] is not None
    ]
    if stats:
        lines.append("  " + " | ".join(stats))

    message = result.get("message")
    if message:
        lines.append(f"  ℹ {message}")

    failures = result.get("failures") or []
    if failures:
        lines.append("  Failures:")
        for failure in failures:
            item = failure.get("item", "item")
            reason = failure.get("reason") or failure.get("error") or "Unknown error"
            lines.append(f"    • {item}: {reason}")

    items = result.get("items") or []
    if items:
        lines.append("  Items:")
        for item in items:
            if not isinstance(item, dict):
                lines.append(f"    • {item}")
                continue
            name = item.get("item") or item.get("file") or "item"
            status = item.get("status") or "success"
            detail = item.get("detail") or ""
            extra = f" ({detail})" if detail else ""
            output_name = item.get("output")
            if output_name and status == "success":
                lines.append(f"    • {name}: {status} -> {output_name}{extra}")
            else:
                lines.append(f"    • {name}: {status}{extra}")
            details = _format_spectrogram_item_details(item) or _format_melbank_item_details(item)
            if details:
                lines.append(f"      {details}")

    return "\n".join(lines)


def _format_spectrogram_item_details(item: dict[str, Any]) -> str | None:
    """Format optional spectrogram item details as one compact line."""
    sr = item.get("sample_rate_hz")
    duration = item.get("duration_sec")
    scale = item.get("scale")
    n_frames = item.get("n_time_frames")
    n_bins = item.get("n_freq_bins")
    db_range = item.get("db_range")

    if sr is None or duration is None or scale is None or n_frames is None or n_bins is None or db_range is None:
        return None

    return (
        f"audio: {duration:.3f}s @ {sr} Hz | "
        f"grid: {n_frames} frames x {n_bins} {scale} bins | "
        f"dB: {db_range[0]:.1f} -> {db_range[1]:.1f}"
    )


def _format_melbank_item_details(item: dict[str, Any]) -> str | None:
    """Format optional mel filter bank details."""
    shape = item.get("shape")
    empty = item.get("empty_filters")
    if shape is None or empty is None:
        return None
    return f"shape={shape} | empty filters: {empty}"
