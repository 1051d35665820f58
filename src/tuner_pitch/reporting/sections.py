from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from tuner_pitch.analysis.config import AnalysisConfig, TrackConfig
from tuner_pitch.domain.results import FrameAnalysis, FrameEstimate
from tuner_pitch.domain.sentinels import is_valid_frequency
from tuner_pitch.domain.types import MonoWav
from tuner_pitch.reporting.markdown import MarkdownDoc
from tuner_pitch.utils.formating import custom_format, format_hz


def add_section_input(mdd: MarkdownDoc, *, wav: MonoWav) -> None:
    mdd.h2("Input")
    mdd.bullet(
        [
            f"File: `{wav.path.name}`",
            f"Sample rate: {wav.fs:.0f} Hz",
            f"Duration: {wav.duration_s:.3f} s ({wav.samples.size} samples)",
        ]
    )


def add_section_settings(
    mdd: MarkdownDoc, *, analysis_cfg: AnalysisConfig, track_cfg: TrackConfig, fs: float
) -> None:
    window_length = track_cfg.buffer_size // analysis_cfg.overlap_factor
    mdd.h2("Settings")
    mdd.table(
        ["parameter", "value"],
        [
            ["buffer size", str(track_cfg.buffer_size)],
            ["hop", str(track_cfg.hop)],
            ["window length", str(window_length)],
            ["windows per frame", str(analysis_cfg.window_count)],
            ["bin width (Hz)", custom_format(fs / window_length if window_length else None, ".3f")],
            ["peaks searched", str(analysis_cfg.num_peaks)],
            ["noise sense", custom_format(analysis_cfg.noise_sense, "g")],
            ["harmonic factors", ", ".join(f"{h:g}" for h in analysis_cfg.harmonic_factors)],
            ["smoothing", str(track_cfg.smoothing)],
            ["high-pass (Hz)", custom_format(track_cfg.highpass_hz, "g") or "off"],
        ],
    )


def add_section_summary(mdd: MarkdownDoc, *, estimates: Sequence[FrameEstimate]) -> None:
    mdd.h2("Summary")
    if not estimates:
        mdd.p("Recording is shorter than one buffer; nothing was estimated.")
        return

    valid = np.asarray(
        [e.frequency_hz for e in estimates if is_valid_frequency(e.frequency_hz)], dtype=float
    )
    codes = Counter(e.reason_code for e in estimates if e.reason_code)

    items = [
        f"Frames: {len(estimates)}",
        f"Valid estimates: {valid.size}",
    ]
    if valid.size:
        items += [
            f"Median frequency: {float(np.median(valid)):.2f} Hz",
            f"Range: {float(np.min(valid)):.2f} to {float(np.max(valid)):.2f} Hz",
        ]
    for code, n in sorted(codes.items()):
        items.append(f"{code}: {n}")
    mdd.bullet(items)


def add_section_loudest_frame(
    mdd: MarkdownDoc, *, frame_index: int, analysis: FrameAnalysis, fs: float, window_length: int
) -> None:
    mdd.h2("Loudest frame")
    if analysis.frequency_hz >= 0.0:
        text = f"Frame {frame_index}: {format_hz(analysis.frequency_hz)} Hz"
        if analysis.reason_code is not None:
            text += f" ({analysis.reason_code})"
    else:
        text = f"Frame {frame_index}: no estimate ({analysis.reason_code})"
    mdd.p(text)

    sel = analysis.selection
    if sel is None:
        return

    rows = []
    for rank, pk in enumerate(sel.peaks):
        score = analysis.scores[rank] if rank < len(analysis.scores) else None
        rows.append(
            [
                str(rank + 1),
                str(pk),
                custom_format(pk * fs / window_length if pk >= 0 else None, ".2f"),
                custom_format(score, ".4g"),
                "yes" if analysis.winner_rank == rank else "",
            ]
        )
    mdd.table(["rank", "bin", "bin Hz", "harmonic score", "winner"], rows)
