"""Forward transform backends.

A backend is a planner: given a size it returns a reusable transformer that
maps a ``(..., n)`` buffer to its ``(..., n)`` complex DFT along the last
axis. Framing and windowing code only ever sees the transformer.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import scipy.fft

from ..errors import InvalidParameterError

Transformer = Callable[[np.ndarray], np.ndarray]
Planner = Callable[[int], Transformer]

DEFAULT_BACKEND = "scipy"


def _plan_scipy(n: int) -> Transformer:
    def _forward(buffer: np.ndarray) -> np.ndarray:
        return scipy.fft.fft(buffer, n=n, axis=-1)

    return _forward


def _plan_numpy(n: int) -> Transformer:
    def _forward(buffer: np.ndarray) -> np.ndarray:
        return np.fft.fft(buffer, n=n, axis=-1)

    return _forward


FFT_BACKENDS: dict[str, Planner] = {
    "scipy": _plan_scipy,
    "numpy": _plan_numpy,
}


def plan_forward(n: int, backend: str = DEFAULT_BACKEND) -> Transformer:
    """Build a forward-transform plan of size *n* with the named backend."""
    try:
        planner = FFT_BACKENDS[backend]
    except KeyError:
        raise InvalidParameterError(
            f"Unknown FFT backend: {backend}. Use one of: {sorted(FFT_BACKENDS)}"
        ) from None
    return planner(n)
