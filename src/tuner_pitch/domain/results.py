from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.domain.reason_codes import ReasonCode


@dataclass(frozen=True)
class PeakSelection:
    """Output of the peak search over one power spectrum."""

    peaks: tuple[int, ...]  # discovery order, -1 for an empty slot
    noise_floor: float  # mean power above the excluded low bins
    threshold: float  # noise_floor * noise_sense
    found_signal: bool


@dataclass(frozen=True)
class Refinement:
    """Parabolic fit around the winning bin."""

    bin_index: int  # clamped integer index used for the fit
    offset: float  # fractional correction p
    refined_bin: float  # bin_index + offset
    flat: bool = False  # zero denominator, offset forced to 0


@dataclass(frozen=True)
class FrameAnalysis:
    """Every intermediate of one estimator call, for diagnostics and reports."""

    frequency_hz: float  # Hz, or a sentinel
    reason_code: ReasonCode | None = None

    power: NDArray[np.float64] | None = None
    selection: PeakSelection | None = None
    scores: tuple[float, ...] = ()
    winner_rank: int | None = None  # position in selection.peaks
    refinement: Refinement | None = None

    @property
    def winner_bin(self) -> int | None:
        if self.selection is None or self.winner_rank is None:
            return None
        return self.selection.peaks[self.winner_rank]


@dataclass(frozen=True)
class FrameEstimate:
    """One row of a pitch track computed over a longer recording."""

    frame_index: int
    t_start_s: float
    frequency_hz: float  # raw estimator output (Hz or sentinel)
    smoothed_hz: float
    reason_code: str = ""
