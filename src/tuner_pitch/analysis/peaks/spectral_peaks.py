from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.analysis.peaks.noise_floor import compute_noise_floor_mean
from tuner_pitch.domain.results import PeakSelection


def select_peaks(
    power: NDArray[np.float64],
    *,
    num_peaks: int,
    start_bin: int,
    noise_sense: float,
) -> PeakSelection:
    """Pick the `num_peaks` strongest distinct bins by exhaustive search.

    Each round rescans every bin from `start_bin` upward, skipping bins already
    taken, and keeps the first bin with the strictly greatest power, so equal
    powers resolve to the lowest index. The signal flag is raised inline as
    soon as a running maximum crosses `noise_floor * noise_sense`.
    """

    p = np.asarray(power, dtype=np.float64)
    noise_floor = compute_noise_floor_mean(p, start_bin=start_bin)
    threshold = noise_floor * float(noise_sense)

    excluded: set[int] = set()
    peaks: list[int] = []
    found_signal = False

    for _ in range(int(num_peaks)):
        best_idx = -1
        best_power = -1.0
        for j in range(int(start_bin), p.size):
            if j in excluded:
                continue
            pj = float(p[j])
            if pj > best_power:
                best_idx = j
                best_power = pj
                if best_power > threshold:
                    found_signal = True
        peaks.append(best_idx)
        if best_idx >= 0:
            excluded.add(best_idx)

    return PeakSelection(
        peaks=tuple(peaks),
        noise_floor=noise_floor,
        threshold=threshold,
        found_signal=found_signal,
    )
