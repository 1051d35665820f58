from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.dsp.stats import as_f64


def count_frames(n_samples: int, *, buffer_size: int, hop_size: int) -> int:
    if buffer_size <= 0 or hop_size <= 0:
        raise ValueError(
            f"buffer_size and hop_size must be > 0. Got {buffer_size}, {hop_size}"
        )
    if n_samples < buffer_size:
        return 0
    return 1 + (int(n_samples) - int(buffer_size)) // int(hop_size)


def iter_frames(
    samples: NDArray[np.float64], *, buffer_size: int, hop_size: int
) -> Iterator[tuple[int, int, NDArray[np.float64]]]:
    """Yield (frame_index, start_sample, frame) for every full frame.

    A trailing partial frame is dropped rather than padded.
    """

    x = as_f64(samples)
    n = count_frames(x.size, buffer_size=buffer_size, hop_size=hop_size)
    for k in range(n):
        start = k * int(hop_size)
        yield k, start, x[start : start + int(buffer_size)]
