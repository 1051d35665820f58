from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.dsp.fft import rfft_magnitude


def aggregate_power(
    windows: Iterable[NDArray[np.float64]], *, window_length: int
) -> NDArray[np.float64]:
    """Sum the magnitude spectra of all windows, bin by bin (no averaging)."""

    powers = np.zeros(int(window_length) // 2 + 1, dtype=np.float64)
    for w in windows:
        mag = rfft_magnitude(w)
        n = min(powers.size, mag.size)
        powers[:n] += mag[:n]
    return powers
