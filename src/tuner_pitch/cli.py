from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from tuner_pitch.analysis.config import Smoothing, load_config
from tuner_pitch.pipeline import run_file_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuner-pitch",
        description="Estimate the pitch of a mono recording frame by frame.",
    )
    parser.add_argument("--wav", type=Path, required=True, help="Path to input audio file")
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("build/pitch_report"),
        help="Output directory for the report",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument("--buffer-size", type=int, default=None, help="Samples per frame")
    parser.add_argument("--hop-size", type=int, default=None, help="Samples between frames")
    parser.add_argument(
        "--smoothing",
        choices=[s.value for s in Smoothing],
        default=None,
        help="Caller-side smoothing of the pitch track",
    )
    parser.add_argument(
        "--highpass-hz", type=float, default=None, help="High-pass cutoff before framing"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    analysis_cfg, track_cfg = load_config(args.config)

    overrides: dict[str, object] = {}
    if args.buffer_size is not None:
        overrides["buffer_size"] = args.buffer_size
    if args.hop_size is not None:
        overrides["hop_size"] = args.hop_size
    if args.smoothing is not None:
        overrides["smoothing"] = Smoothing(args.smoothing)
    if args.highpass_hz is not None:
        overrides["highpass_hz"] = args.highpass_hz
    track_cfg = replace(track_cfg, **overrides).validate()

    artifacts = run_file_report(
        args.wav,
        out_dir=args.out,
        analysis_cfg=analysis_cfg,
        track_cfg=track_cfg,
    )

    print(f"Wrote report to: {artifacts.report_md}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
