"""Small signal-processing helpers shared by the codec components."""

from __future__ import annotations

import math
from collections.abc import Sequence

INT16_MIN = -32768
INT16_MAX = 32767


def log_spectral_distance(
    first_log_spectrum: Sequence[float], second_log_spectrum: Sequence[float]
) -> float:
    """Return the log-spectral distance in dB between two log spectra.

    Raises ValueError if the spectra differ in length. Two empty spectra give NaN.
    """
    if len(first_log_spectrum) != len(second_log_spectrum):
        raise ValueError(
            f"Spectrum sizes are not equal: {len(first_log_spectrum)} "
            f"and {len(second_log_spectrum)}."
        )
    num_features = len(first_log_spectrum)
    if num_features == 0:
        return math.nan
    squared_sum = sum(
        (first - second) ** 2
        for first, second in zip(first_log_spectrum, second_log_spectrum)
    )
    return 10.0 * math.sqrt(squared_sum / num_features)


def clip_to_int16(value: float) -> int:
    """Clamp a value into the int16 range and truncate it toward zero."""
    if math.isnan(value):
        raise ValueError("Cannot convert NaN to an int16 sample.")
    return int(min(max(value, float(INT16_MIN)), float(INT16_MAX)))