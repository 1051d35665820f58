from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.domain.results import Refinement


def parabolic_refine(y: NDArray[np.float64], i: int) -> Refinement:
    """Vertex of the parabola through y[i-1], y[i], y[i+1].

    The index is clamped so the three points stay inside `y`. A zero
    curvature (three collinear points) keeps the integer index.
    """

    yy = np.asarray(y, dtype=np.float64)
    if yy.size < 3:
        raise ValueError(f"Need at least 3 points for parabolic refinement. Got {yy.size}")

    idx = min(max(int(i), 1), yy.size - 2)
    alpha = float(yy[idx - 1])
    beta = float(yy[idx])
    gamma = float(yy[idx + 1])

    denom = alpha - 2.0 * beta + gamma
    if denom == 0.0:
        return Refinement(bin_index=idx, offset=0.0, refined_bin=float(idx), flat=True)

    offset = 0.5 * (alpha - gamma) / denom
    return Refinement(bin_index=idx, offset=offset, refined_bin=idx + offset)


def bin_to_hz(refined_bin: float, *, sample_rate: float, window_length: int) -> float:
    return float(sample_rate) * float(refined_bin) / float(window_length)
