from __future__ import annotations

import csv
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Sequence

from tuner_pitch.analysis.config import AnalysisConfig, TrackConfig
from tuner_pitch.domain.results import FrameAnalysis, FrameEstimate
from tuner_pitch.domain.types import MonoWav
from tuner_pitch.reporting.markdown import MarkdownDoc
from tuner_pitch.reporting.plots import plot_pitch_track, plot_power_spectrum
from tuner_pitch.reporting.sections import (
    add_section_input,
    add_section_loudest_frame,
    add_section_settings,
    add_section_summary,
)
from tuner_pitch.utils.paths import ensure_dir


@dataclass(frozen=True)
class TrackReportArtifacts:
    report_csv: Path
    report_md: Path
    fig_track: Path | None = None
    fig_spectrum: Path | None = None


def write_track_report(
    *,
    out_dir: str | Path,
    wav: MonoWav,
    estimates: Sequence[FrameEstimate],
    loudest: tuple[int, FrameAnalysis] | None,
    analysis_cfg: AnalysisConfig,
    track_cfg: TrackConfig,
    title: str = "Pitch track report",
) -> TrackReportArtifacts:
    """
    Create pitch-track artifacts:
      out_dir/
        pitch_track.csv
        pitch_report.md
        figures/
          pitch_track.png
          spectrum_loudest.png
    """
    out_dir = ensure_dir(Path(out_dir))
    fig_dir = ensure_dir(out_dir / "figures")
    window_length = track_cfg.buffer_size // analysis_cfg.overlap_factor

    # -----------------------
    # CSV
    # -----------------------
    csv_path = out_dir / "pitch_track.csv"
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=[fd.name for fd in fields(FrameEstimate)])
        w.writeheader()
        for e in estimates:
            w.writerow(asdict(e))

    # -----------------------
    # Figures
    # -----------------------
    fig_track: Path | None = None
    if estimates:
        fig_track = plot_pitch_track(estimates, fig_dir / "pitch_track.png")

    fig_spectrum: Path | None = None
    if loudest is not None and loudest[1].power is not None:
        fig_spectrum = plot_power_spectrum(
            loudest[1],
            fig_dir / "spectrum_loudest.png",
            sample_rate=wav.fs,
            window_length=window_length,
        )

    # -----------------------
    # Markdown
    # -----------------------
    mdd = MarkdownDoc()
    mdd.h1(title)
    add_section_input(mdd, wav=wav)
    add_section_settings(mdd, analysis_cfg=analysis_cfg, track_cfg=track_cfg, fs=wav.fs)
    add_section_summary(mdd, estimates=estimates)
    if fig_track is not None:
        mdd.image(fig_track.relative_to(out_dir).as_posix(), alt="pitch track")
    if loudest is not None:
        add_section_loudest_frame(
            mdd,
            frame_index=loudest[0],
            analysis=loudest[1],
            fs=wav.fs,
            window_length=window_length,
        )
    if fig_spectrum is not None:
        mdd.image(fig_spectrum.relative_to(out_dir).as_posix(), alt="power spectrum")

    md_path = out_dir / "pitch_report.md"
    md_path.write_text(mdd.to_markdown(), encoding="utf-8")

    return TrackReportArtifacts(
        report_csv=csv_path,
        report_md=md_path,
        fig_track=fig_track,
        fig_spectrum=fig_spectrum,
    )
