from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.dsp.stats import as_f64


def hamming(length: int) -> NDArray[np.float64]:
    """Symmetric Hamming taper: 0.54 - 0.46 cos(2 pi i / (N - 1))."""

    n = int(length)
    if n <= 0:
        return np.asarray([], dtype=np.float64)
    if n == 1:
        return np.ones(1, dtype=np.float64)
    i = np.arange(n, dtype=np.float64)
    return 0.54 - 0.46 * np.cos(2.0 * np.pi * i / (n - 1))


def window_starts(window_length: int, window_count: int) -> list[int]:
    """Start offsets of `window_count` windows overlapping by half a window."""

    hop = int(window_length) // 2
    return [k * hop for k in range(int(window_count))]


def split_windows(
    frame: NDArray[np.float64],
    *,
    window_length: int,
    window_count: int,
    taper: NDArray[np.float64] | None = None,
) -> list[NDArray[np.float64]]:
    """Cut tapered, half-overlapping windows from the front of `frame`.

    The frame must already hold `window_length * (window_count + 1) / 2`
    samples; callers check the buffer size before getting here.
    """

    x = as_f64(frame)
    n = int(window_length)
    w = hamming(n) if taper is None else as_f64(taper)

    out: list[NDArray[np.float64]] = []
    for start in window_starts(n, window_count):
        segment = x[start : start + n]
        if segment.size != n:
            raise ValueError(
                f"Frame too short for window at {start}: need {start + n} samples, got {x.size}"
            )
        out.append(segment * w)
    return out
