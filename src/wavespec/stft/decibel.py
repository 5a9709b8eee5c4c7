"""Magnitude to decibel conversion with two-tier clipping."""

from __future__ import annotations

import numpy as np


def amplitude_to_db(
    spectrum,
    ref_db: float = 0.0,
    top_db: float = 80.0,
    min_db: float = -80.0,
    max_db: float = 0.0,
) -> np.ndarray:
    """Convert magnitudes to decibels.

    The reference is the largest magnitude when ``ref_db == 0.0`` (1.0 if
    the input is silent), otherwise ``10 ** (ref_db / 20)``. Zero bins map
    straight to *min_db*.

    Clipping happens in two tiers. First a relative floor ``ceiling - top_db``,
    where the ceiling is ``20*log10(max_magnitude)`` (or *max_db* for silent
    input) in the ``ref_db == 0.0`` case and *ref_db* otherwise. Then the
    absolute range ``[min_db, max_db]``, with *min_db* applied last.

    Parameters
    ----------
    spectrum : array-like
        Non-negative magnitudes, any shape.
    ref_db : float
        Reference level in dB; 0.0 means "use the maximum magnitude".
    top_db : float
        Dynamic range kept below the ceiling.
    min_db, max_db : float
        Absolute output range.

    Returns
    -------
    np.ndarray
        float32 array with the same shape as *spectrum*.
    """
    mag = np.asarray(spectrum, dtype=np.float64)
    if mag.size == 0:
        return np.zeros(mag.shape, dtype=np.float32)

    max_magnitude = max(float(np.max(mag)), 0.0)
    if ref_db == 0.0:
        ref_value = max_magnitude if max_magnitude > 0.0 else 1.0
        ceiling = 20.0 * np.log10(max_magnitude) if max_magnitude > 0.0 else max_db
    else:
        ref_value = 10.0 ** (ref_db / 20.0)
        ceiling = ref_db

    positive = mag > 0.0
    db = np.full(mag.shape, min_db, dtype=np.float64)
    db[positive] = 20.0 * np.log10(mag[positive] / ref_value)

    db = np.maximum(db, ceiling - top_db)
    db = np.minimum(db, max_db)
    db = np.maximum(db, min_db)
    return db.astype(np.float32)
