from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def harmonic_target_bin(peak: int, factor: float, n_bins: int) -> int:
    """Bin nearest `peak * factor`, clamped to [2, n_bins - 3]. Halves round up."""

    t = int(math.floor(float(peak) * float(factor) + 0.5))
    if t < 2:
        t = 2
    if t > n_bins - 3:
        t = n_bins - 3
    return t


def harmonic_score(
    power: NDArray[np.float64], peak: int, factors: Sequence[float]
) -> float:
    """Correlate the peak's power with the power around its overtones."""

    p = np.asarray(power, dtype=np.float64)
    if peak <= 0 or peak >= p.size:
        return 0.0

    own = float(p[peak])
    total = 0.0
    for factor in factors:
        t = harmonic_target_bin(peak, factor, p.size)
        for k in (t - 1, t, t + 1):
            if 0 <= k < p.size:
                total += float(p[k]) * own
    return total


def score_peaks(
    power: NDArray[np.float64],
    peaks: Sequence[int],
    *,
    factors: Sequence[float] = (2.0, 3.0, 4.0),
) -> tuple[tuple[float, ...], int]:
    """Score every candidate and return (scores, position of the best one).

    A true fundamental shares its frame with strong overtones, a stray
    overtone does not. Ties keep the earliest candidate.
    """

    scores = tuple(harmonic_score(power, int(pk), factors) for pk in peaks)
    if not scores:
        raise ValueError("No peak candidates to score")

    best = 0
    for i in range(1, len(scores)):
        if scores[i] > scores[best]:
            best = i
    return scores, best
