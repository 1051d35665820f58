from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.dsp.stats import tail_mean


def compute_noise_floor_mean(power: NDArray[np.float64], *, start_bin: int) -> float:
    """Mean spectral power above the excluded DC / near-DC bins."""

    if start_bin < 0:
        raise ValueError(f"start_bin must be >= 0. Got {start_bin}")
    return tail_mean(power, start_bin)
