from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike

from tuner_pitch.analysis.config import AnalysisConfig
from tuner_pitch.analysis.harmonics import score_peaks
from tuner_pitch.analysis.peaks.spectral_peaks import select_peaks
from tuner_pitch.analysis.refine import bin_to_hz, parabolic_refine
from tuner_pitch.domain.reason_codes import ReasonCode, sentinel_for
from tuner_pitch.domain.results import FrameAnalysis
from tuner_pitch.domain.types import EstimatorConfig
from tuner_pitch.dsp.fft import is_power_of_two
from tuner_pitch.dsp.power import aggregate_power
from tuner_pitch.dsp.stats import as_f64, floored_log
from tuner_pitch.dsp.window import hamming, split_windows

logger = logging.getLogger(__name__)


class FrequencyEstimator:
    """Fundamental-frequency estimator for one fixed-size buffer of audio.

    Pipeline per call:
      taper + split into overlapping windows -> recursive FFT magnitudes ->
      summed power -> top-N peak search with noise gate -> harmonic scoring ->
      parabolic refinement on log-power -> Hz

    Nothing on the instance changes while estimating, so one instance can be
    shared between threads. `buffer_size // overlap_factor` must be a power of
    two; this is not checked until a frame reaches the transform.
    """

    def __init__(
        self,
        sample_rate: int,
        buffer_size: int,
        config: AnalysisConfig | None = None,
    ) -> None:
        self.config = EstimatorConfig(sample_rate=int(sample_rate), buffer_size=int(buffer_size))
        self.analysis = (config or AnalysisConfig()).validate()
        self._closed = False

    @property
    def sample_rate(self) -> int:
        return self.config.sample_rate

    @property
    def buffer_size(self) -> int:
        return self.config.buffer_size

    @property
    def window_length(self) -> int:
        return self.config.window_length(self.analysis.overlap_factor)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> FrequencyEstimator:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"FrequencyEstimator(sample_rate={self.sample_rate}, "
            f"buffer_size={self.buffer_size}, closed={self._closed})"
        )

    # ------------------------------------------------------------------

    def find_frequency(self, samples: ArrayLike | Sequence[float]) -> float:
        """Return the fundamental in Hz, or a negative sentinel.

        -1.0: too few samples, invalid window size or a negative result.
        -2.0: nothing rises above the noise floor.
        Raises ValueError for anything other than a 1-D buffer.
        """

        x = _as_mono(samples)
        try:
            return self.analyze_frame(x).frequency_hz
        except ValueError:
            if is_power_of_two(self.window_length):
                raise
            logger.exception(
                "Invalid window length %d for buffer_size=%d",
                self.window_length,
                self.buffer_size,
            )
            return sentinel_for(ReasonCode.INVALID_WINDOW_LENGTH)

    def analyze_frame(self, samples: ArrayLike | Sequence[float]) -> FrameAnalysis:
        """Run the full pipeline and keep every intermediate result."""

        if self._closed:
            raise RuntimeError("FrequencyEstimator is closed")

        x = _as_mono(samples)
        if x.size < self.buffer_size:
            logger.warning(
                "Not enough samples! Expecting >= %d. Got %d", self.buffer_size, x.size
            )
            return _failed(ReasonCode.INSUFFICIENT_SAMPLES)

        cfg = self.analysis
        n = self.window_length
        frame = x[: self.buffer_size]

        windows = split_windows(
            frame, window_length=n, window_count=cfg.window_count, taper=hamming(n)
        )
        power = aggregate_power(windows, window_length=n)

        selection = select_peaks(
            power,
            num_peaks=cfg.num_peaks,
            start_bin=cfg.start_bin,
            noise_sense=cfg.noise_sense,
        )
        if not selection.found_signal:
            logger.debug("Too quiet: noise_floor=%.6g", selection.noise_floor)
            return _failed(ReasonCode.SIGNAL_TOO_QUIET, power=power, selection=selection)

        scores, winner = score_peaks(power, selection.peaks, factors=cfg.harmonic_factors)

        refinement = parabolic_refine(
            floored_log(power, cfg.log_floor), selection.peaks[winner]
        )
        freq_hz = bin_to_hz(
            refinement.refined_bin, sample_rate=self.sample_rate, window_length=n
        )

        if not math.isfinite(freq_hz) or freq_hz < 0.0:
            logger.warning("Rejected refined frequency %r", freq_hz)
            return _failed(
                ReasonCode.NEGATIVE_FREQUENCY,
                power=power,
                selection=selection,
                scores=scores,
                winner_rank=winner,
                refinement=refinement,
            )

        return FrameAnalysis(
            frequency_hz=freq_hz,
            reason_code=ReasonCode.FLAT_PEAK if refinement.flat else None,
            power=power,
            selection=selection,
            scores=scores,
            winner_rank=winner,
            refinement=refinement,
        )


def _failed(code: ReasonCode, **intermediates: object) -> FrameAnalysis:
    return FrameAnalysis(
        frequency_hz=sentinel_for(code),
        reason_code=code,
        **intermediates,  # type: ignore[arg-type]
    )


def _as_mono(samples: ArrayLike | Sequence[float]) -> np.ndarray:
    x = as_f64(samples)
    if x.ndim != 1:
        raise ValueError(f"Expected a 1-D buffer of mono samples. Got shape={x.shape}")
    return x
