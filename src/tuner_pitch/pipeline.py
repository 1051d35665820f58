from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from tuner_pitch.analysis.config import AnalysisConfig, Smoothing, TrackConfig
from tuner_pitch.domain.results import FrameAnalysis, FrameEstimate
from tuner_pitch.domain.sentinels import is_valid_frequency
from tuner_pitch.dsp.fft import is_power_of_two
from tuner_pitch.dsp.filters import highpass
from tuner_pitch.dsp.stats import as_f64
from tuner_pitch.estimator import FrequencyEstimator
from tuner_pitch.io.frames import iter_frames
from tuner_pitch.io.wav_reader import load_mono_wav
from tuner_pitch.reporting.writers.track import TrackReportArtifacts, write_track_report
from tuner_pitch.smoothing import Debouncer, MedianSmoother

logger = logging.getLogger(__name__)


def make_smoother(cfg: TrackConfig) -> MedianSmoother | Debouncer | None:
    if cfg.smoothing == Smoothing.MEDIAN:
        return MedianSmoother(history=cfg.median_history)
    if cfg.smoothing == Smoothing.DEBOUNCE:
        return Debouncer()
    return None


def check_window_length(analysis_cfg: AnalysisConfig, track_cfg: TrackConfig) -> int:
    """Window length the estimator will use; raise if the transform cannot take it."""

    n = int(track_cfg.buffer_size) // int(analysis_cfg.overlap_factor)
    if not is_power_of_two(n):
        raise ValueError(
            f"buffer_size // overlap_factor must be a power of two. "
            f"Got {track_cfg.buffer_size} // {analysis_cfg.overlap_factor} = {n}"
        )
    return n


def prepare_samples(
    samples: NDArray[np.float64], *, fs: float, track_cfg: TrackConfig
) -> NDArray[np.float64]:
    x = as_f64(samples)
    if track_cfg.highpass_hz is not None:
        x = highpass(x, fs, fc_hz=track_cfg.highpass_hz)
    return x


def estimate_track(
    samples: NDArray[np.float64],
    *,
    fs: float,
    analysis_cfg: AnalysisConfig | None = None,
    track_cfg: TrackConfig | None = None,
) -> list[FrameEstimate]:
    """Estimate one frequency per frame across a whole recording.

    Frames are cut every `hop` samples; a smoother (if configured) sees the raw
    estimates in order, exactly as a live caller would feed it.
    """

    analysis_cfg = (analysis_cfg or AnalysisConfig()).validate()
    track_cfg = (track_cfg or TrackConfig()).validate()
    check_window_length(analysis_cfg, track_cfg)
    estimator = FrequencyEstimator(int(round(fs)), track_cfg.buffer_size, analysis_cfg)
    smoother = make_smoother(track_cfg)
    x = prepare_samples(samples, fs=fs, track_cfg=track_cfg)

    out: list[FrameEstimate] = []
    with estimator:
        for k, start, frame in iter_frames(
            x, buffer_size=track_cfg.buffer_size, hop_size=track_cfg.hop
        ):
            analysis = estimator.analyze_frame(frame)
            raw = analysis.frequency_hz
            smoothed = smoother.push(raw) if smoother is not None else raw
            code = analysis.reason_code
            out.append(
                FrameEstimate(
                    frame_index=k,
                    t_start_s=float(start) / float(fs),
                    frequency_hz=raw,
                    smoothed_hz=smoothed,
                    reason_code=code.value if code is not None else "",
                )
            )

    logger.info(
        "Estimated %d frames (%d valid)",
        len(out),
        sum(1 for e in out if is_valid_frequency(e.frequency_hz)),
    )
    return out


def analyze_loudest_frame(
    samples: NDArray[np.float64],
    *,
    fs: float,
    analysis_cfg: AnalysisConfig | None = None,
    track_cfg: TrackConfig | None = None,
) -> tuple[int, FrameAnalysis] | None:
    """Full diagnostic analysis of the frame with the highest RMS."""

    analysis_cfg = (analysis_cfg or AnalysisConfig()).validate()
    track_cfg = (track_cfg or TrackConfig()).validate()
    check_window_length(analysis_cfg, track_cfg)
    x = prepare_samples(samples, fs=fs, track_cfg=track_cfg)

    best: tuple[float, int, NDArray[np.float64]] | None = None
    for k, _, frame in iter_frames(
        x, buffer_size=track_cfg.buffer_size, hop_size=track_cfg.hop
    ):
        rms = float(np.sqrt(np.mean(frame * frame)))
        if best is None or rms > best[0]:
            best = (rms, k, frame)

    if best is None:
        return None

    with FrequencyEstimator(int(round(fs)), track_cfg.buffer_size, analysis_cfg) as est:
        return best[1], est.analyze_frame(best[2])


def run_file_report(
    wav_path: str | Path,
    *,
    out_dir: str | Path,
    analysis_cfg: AnalysisConfig | None = None,
    track_cfg: TrackConfig | None = None,
    title: str = "Pitch track report",
) -> TrackReportArtifacts:
    """
    One-call end-to-end report generator.

    Pipeline:
      load_mono_wav -> estimate_track -> analyze_loudest_frame -> write_track_report
    """
    analysis_cfg = (analysis_cfg or AnalysisConfig()).validate()
    track_cfg = (track_cfg or TrackConfig()).validate()
    check_window_length(analysis_cfg, track_cfg)

    wav = load_mono_wav(wav_path)
    logger.info("Loaded %s: fs=%.0f Hz, %.2f s", wav.path, wav.fs, wav.duration_s)

    estimates = estimate_track(
        wav.samples, fs=wav.fs, analysis_cfg=analysis_cfg, track_cfg=track_cfg
    )
    loudest = analyze_loudest_frame(
        wav.samples, fs=wav.fs, analysis_cfg=analysis_cfg, track_cfg=track_cfg
    )

    return write_track_report(
        out_dir=out_dir,
        wav=wav,
        estimates=estimates,
        loudest=loudest,
        analysis_cfg=analysis_cfg,
        track_cfg=track_cfg,
        title=title,
    )
