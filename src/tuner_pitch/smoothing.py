from __future__ import annotations

from collections import deque

import numpy as np

from tuner_pitch.domain.sentinels import INSUFFICIENT_SAMPLES, is_sentinel


class MedianSmoother:
    """Median of the last `history` valid estimates.

    Rejects one-off glitches: a single outlier cannot move the median until it
    makes up more than half the history. Sentinels pass straight through and
    are not remembered.
    """

    def __init__(self, history: int = 5) -> None:
        if history < 1:
            raise ValueError(f"history must be >= 1. Got {history}")
        self._values: deque[float] = deque(maxlen=int(history))

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(self._values)

    def push(self, freq_hz: float) -> float:
        f = float(freq_hz)
        if is_sentinel(f):
            return f
        self._values.append(f)
        return float(np.median(np.asarray(self._values, dtype=np.float64)))

    def reset(self) -> None:
        self._values.clear()


class Debouncer:
    """Three-point debounce: return whichever of the last two values and the
    new one sits closest to their mean."""

    def __init__(self) -> None:
        self.prev = INSUFFICIENT_SAMPLES
        self.prev2 = INSUFFICIENT_SAMPLES

    def push(self, freq_hz: float) -> float:
        f = float(freq_hz)
        average = (self.prev + self.prev2 + f) / 3.0
        d_prev = abs(self.prev - average)
        d_prev2 = abs(self.prev2 - average)
        d_new = abs(f - average)

        if d_prev <= d_prev2 and d_prev <= d_new:
            out = self.prev
        elif d_prev2 <= d_prev and d_prev2 <= d_new:
            out = self.prev2
        else:
            out = f

        self.prev2 = self.prev
        self.prev = f
        return out

    def reset(self) -> None:
        self.prev = INSUFFICIENT_SAMPLES
        self.prev2 = INSUFFICIENT_SAMPLES
