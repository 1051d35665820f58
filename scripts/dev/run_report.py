from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).resolve().parents[2] / "src"))

from tuner_pitch.analysis.config import Smoothing, TrackConfig
from tuner_pitch.io.wav_reader import write_mono_wav
from tuner_pitch.pipeline import run_file_report


DEFAULT_OUT = Path("build/dev_reports/demo_tone")


def synth_note(f0: float, *, fs: int, seconds: float) -> np.ndarray:
    """Plucked-string-ish test tone: decaying fundamental plus overtones."""
    t = np.arange(int(fs * seconds), dtype=np.float64) / fs
    env = np.exp(-1.5 * t)
    x = sum((0.6 / k) * np.sin(2.0 * np.pi * k * f0 * t) for k in range(1, 6))
    return 0.8 * env * x / 1.5


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a synthetic note and run the pitch report on it."
    )
    parser.add_argument("--f0", type=float, default=110.0, help="Fundamental in Hz")
    parser.add_argument("--fs", type=int, default=44100, help="Sample rate")
    parser.add_argument("--seconds", type=float, default=2.0, help="Note length")
    parser.add_argument("--out", type=Path, default=DEFAULT_OUT, help="Output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    wav = write_mono_wav(
        args.out / "demo.wav", synth_note(args.f0, fs=args.fs, seconds=args.seconds), args.fs
    )
    art = run_file_report(
        wav,
        out_dir=args.out,
        track_cfg=TrackConfig(buffer_size=8192, hop_size=2048, smoothing=Smoothing.MEDIAN),
        title=f"Synthetic {args.f0:g} Hz note",
    )

    print(f"Wrote report to: {art.report_md}")


if __name__ == "__main__":
    main()
