from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from tuner_pitch.domain.results import FrameAnalysis, FrameEstimate


def plot_pitch_track(
    estimates: Sequence[FrameEstimate],
    out_png: Path,
    *,
    show_smoothed: bool = True,
) -> Path:
    """
    Frequency per frame over time. Frames that returned a sentinel are drawn
    as ticks on the x axis so gaps in the track are visible.
    """
    out_png.parent.mkdir(parents=True, exist_ok=True)

    t = np.asarray([e.t_start_s for e in estimates], dtype=float)
    raw = np.asarray([e.frequency_hz for e in estimates], dtype=float)
    smoothed = np.asarray([e.smoothed_hz for e in estimates], dtype=float)

    valid = raw >= 0.0

    fig = plt.figure(figsize=(11, 4.0))
    ax = fig.add_subplot(1, 1, 1)

    ax.plot(t[valid], raw[valid], "o", ms=3, label="raw estimate")
    if show_smoothed and np.any(smoothed != raw):
        ok = smoothed >= 0.0
        ax.plot(t[ok], smoothed[ok], lw=1.2, label="smoothed")
    if np.any(~valid):
        ax.plot(t[~valid], np.zeros(int(np.sum(~valid))), "|", ms=8, label="no estimate")

    ax.set_title("Pitch track")
    ax.set_xlabel("time (s)")
    ax.set_ylabel("frequency (Hz)")
    ax.grid(True, alpha=0.25)
    ax.legend(loc="best", fontsize=9)

    fig.tight_layout()
    fig.savefig(out_png, dpi=150)
    plt.close(fig)
    return out_png


def plot_power_spectrum(
    analysis: FrameAnalysis,
    out_png: Path,
    *,
    sample_rate: float,
    window_length: int,
    fmax_hz: float | None = 2500.0,
) -> Path:
    """Summed power spectrum with noise gate, candidate peaks and the winner."""
    out_png.parent.mkdir(parents=True, exist_ok=True)

    if analysis.power is None:
        raise ValueError("FrameAnalysis carries no power spectrum")

    power = np.asarray(analysis.power, dtype=float)
    f = np.arange(power.size, dtype=float) * float(sample_rate) / float(window_length)
    mask = np.ones_like(f, dtype=bool) if fmax_hz is None else f <= fmax_hz

    fig = plt.figure(figsize=(11, 3.8))
    ax = fig.add_subplot(1, 1, 1)
    ax.plot(f[mask], power[mask], lw=1.0, label="power")

    sel = analysis.selection
    if sel is not None:
        ax.axhline(sel.threshold, linestyle=":", lw=1.0, label="noise gate")
        for rank, pk in enumerate(sel.peaks):
            if pk < 0:
                continue
            ax.plot(f[pk], power[pk], "v", ms=6)
            ax.annotate(str(rank + 1), (f[pk], power[pk]), fontsize=8)

    if analysis.frequency_hz >= 0.0:
        ax.axvline(
            analysis.frequency_hz,
            linestyle="--",
            lw=1.2,
            label=f"f0={analysis.frequency_hz:.2f} Hz",
        )

    ax.set_title("Power spectrum (loudest frame)")
    ax.set_xlabel("frequency (Hz)")
    ax.set_ylabel("summed magnitude (a.u.)")
    ax.grid(True, alpha=0.25)
    ax.legend(loc="best", fontsize=9)

    fig.tight_layout()
    fig.savefig(out_png, dpi=150)
    plt.close(fig)
    return out_png
