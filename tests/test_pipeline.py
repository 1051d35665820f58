from __future__ import annotations

import csv

import numpy as np
import pytest

from tuner_pitch.analysis.config import AnalysisConfig, Smoothing, TrackConfig
from tuner_pitch.domain.reason_codes import ReasonCode
from tuner_pitch.domain.sentinels import SIGNAL_TOO_QUIET
from tuner_pitch.io.wav_reader import write_mono_wav
from tuner_pitch.pipeline import (
    analyze_loudest_frame,
    check_window_length,
    estimate_track,
    make_smoother,
    run_file_report,
)
from tuner_pitch.smoothing import Debouncer, MedianSmoother

FS = 44100


def test_estimate_track_on_steady_tone(make_sine) -> None:
    x = make_sine(440.0, fs=FS, n=FS)
    track = estimate_track(x, fs=FS, track_cfg=TrackConfig(buffer_size=4096))

    assert len(track) == 10
    assert [e.frame_index for e in track] == list(range(10))
    assert track[1].t_start_s == 4096 / FS
    assert all(abs(e.frequency_hz - 440.0) < 2.0 for e in track)
    assert all(e.reason_code == "" for e in track)


def test_estimate_track_marks_silent_frames(make_sine) -> None:
    x = np.concatenate([np.zeros(4096), make_sine(330.0, fs=FS, n=4096)])
    track = estimate_track(x, fs=FS)

    assert track[0].frequency_hz == SIGNAL_TOO_QUIET
    assert track[0].reason_code == ReasonCode.SIGNAL_TOO_QUIET.value
    assert abs(track[1].frequency_hz - 330.0) < 2.0


def test_estimate_track_with_smoothing_and_highpass(make_sine) -> None:
    x = make_sine(440.0, fs=FS, n=5 * 4096) + 0.3 * make_sine(50.0, fs=FS, n=5 * 4096)
    cfg = TrackConfig(smoothing=Smoothing.MEDIAN, highpass_hz=100.0)

    track = estimate_track(x, fs=FS, track_cfg=cfg)
    assert len(track) == 5
    assert all(abs(e.smoothed_hz - 440.0) < 2.0 for e in track)


def test_make_smoother() -> None:
    assert make_smoother(TrackConfig()) is None
    assert isinstance(make_smoother(TrackConfig(smoothing=Smoothing.MEDIAN)), MedianSmoother)
    assert isinstance(make_smoother(TrackConfig(smoothing=Smoothing.DEBOUNCE)), Debouncer)


def test_analyze_loudest_frame_picks_highest_rms(make_sine) -> None:
    x = np.concatenate(
        [make_sine(330.0, fs=FS, n=4096, amp=0.1), make_sine(660.0, fs=FS, n=4096)]
    )
    result = analyze_loudest_frame(x, fs=FS)

    assert result is not None
    k, analysis = result
    assert k == 1
    assert abs(analysis.frequency_hz - 660.0) < 2.0


def test_analyze_loudest_frame_needs_a_full_buffer() -> None:
    assert analyze_loudest_frame(np.zeros(100), fs=FS) is None


def test_run_file_report_writes_artifacts(tmp_path, make_sine) -> None:
    wav_path = write_mono_wav(
        tmp_path / "a4.wav", make_sine(440.0, fs=FS, n=3 * 4096, amp=0.5), FS
    )

    art = run_file_report(wav_path, out_dir=tmp_path / "out")

    assert art.report_md.exists()
    assert art.fig_track is not None and art.fig_track.exists()
    assert art.fig_spectrum is not None and art.fig_spectrum.exists()

    with art.report_csv.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 3
    assert abs(float(rows[0]["frequency_hz"]) - 440.0) < 2.0

    md = art.report_md.read_text(encoding="utf-8")
    assert "# Pitch track report" in md
    assert "figures/pitch_track.png" in md
    assert "Valid estimates: 3" in md


def test_run_file_report_short_recording(tmp_path) -> None:
    wav_path = write_mono_wav(tmp_path / "short.wav", np.zeros(100), FS)
    art = run_file_report(wav_path, out_dir=tmp_path / "out")

    assert art.fig_track is None
    assert art.fig_spectrum is None
    assert "nothing was estimated" in art.report_md.read_text(encoding="utf-8")


@pytest.mark.parametrize("buffer_size", [4000, 400, 6144])
def test_invalid_buffer_size_is_rejected_up_front(make_sine, buffer_size: int) -> None:
    x = make_sine(440.0, fs=FS, n=FS)
    cfg = TrackConfig(buffer_size=buffer_size)

    with pytest.raises(ValueError, match="power of two"):
        estimate_track(x, fs=FS, track_cfg=cfg)
    with pytest.raises(ValueError, match="power of two"):
        analyze_loudest_frame(x, fs=FS, track_cfg=cfg)


def test_run_file_report_rejects_invalid_buffer_size(tmp_path, make_sine) -> None:
    wav_path = write_mono_wav(tmp_path / "a4.wav", make_sine(440.0, fs=FS, n=FS), FS)
    out_dir = tmp_path / "out"

    with pytest.raises(ValueError, match="power of two"):
        run_file_report(wav_path, out_dir=out_dir, track_cfg=TrackConfig(buffer_size=4000))
    assert not out_dir.exists()


def test_check_window_length_uses_overlap_factor() -> None:
    assert check_window_length(AnalysisConfig(), TrackConfig(buffer_size=4096)) == 1024
    assert check_window_length(AnalysisConfig(overlap_factor=2), TrackConfig(buffer_size=4096)) == 2048
    with pytest.raises(ValueError):
        check_window_length(AnalysisConfig(overlap_factor=3), TrackConfig(buffer_size=4096))


def test_estimate_track_keeps_estimator_reason_code(monkeypatch) -> None:
    spectrum = np.ones(4096 // 8 + 1)
    spectrum[9:12] = 1000.0
    spectrum[40] = 500.0
    monkeypatch.setattr(
        "tuner_pitch.estimator.aggregate_power", lambda *args, **kwargs: spectrum
    )

    track = estimate_track(np.zeros(2 * 4096), fs=FS)

    assert len(track) == 2
    assert all(e.frequency_hz > 0 for e in track)
    assert all(e.reason_code == ReasonCode.FLAT_PEAK.value for e in track)
