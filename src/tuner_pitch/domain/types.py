from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np


@dataclass(frozen=True)
class EstimatorConfig:
    """Immutable (sample rate, buffer size) pair owned by one estimator.

    Nothing is validated here: a buffer size whose quarter is not a power of
    two only fails once a frame reaches the transform.
    """

    sample_rate: int
    buffer_size: int

    def window_length(self, overlap_factor: int = 4) -> int:
        return int(self.buffer_size) // int(overlap_factor)


@dataclass(frozen=True)
class MonoWav:
    """One channel of audio read from disk."""

    fs: float
    samples: np.ndarray
    path: Path

    @property
    def duration_s(self) -> float:
        return float(self.samples.size) / float(self.fs)
