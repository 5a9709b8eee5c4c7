"""Exception types for the host-facing layer.

The DSP core never raises for degenerate input; these are reserved for
parameter validation at the boundary (entities, analysis parameters, CLI).
"""

from __future__ import annotations

from typing import Any


class WavespecError(Exception):
    """Base exception for wavespec errors."""


class InvalidParameterError(WavespecError, ValueError):
    """Raised when a construction or analysis parameter is out of range."""


def ensure_positive(value: Any, name: str) -> Any:
    """Raise InvalidParameterError unless *value* is strictly positive.

    Args:
        value: Number to check.
        name: Parameter name used in the error message.

    Returns:
        The value unchanged.

    Raises:
        InvalidParameterError: If value is None or <= 0.
    """
    if value is None or value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value
