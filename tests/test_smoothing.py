from __future__ import annotations

import pytest

from tuner_pitch.domain.sentinels import INSUFFICIENT_SAMPLES, SIGNAL_TOO_QUIET
from tuner_pitch.estimator import FrequencyEstimator
from tuner_pitch.smoothing import Debouncer, MedianSmoother


def test_median_rejects_single_glitch() -> None:
    s = MedianSmoother(history=5)
    for _ in range(3):
        assert s.push(438.0) == 438.0

    assert s.push(1000.0) == 438.0
    assert s.push(1000.0) == 438.0
    # three of five are now the new note
    assert s.push(1000.0) == 1000.0


def test_median_passes_sentinels_through_without_remembering_them() -> None:
    s = MedianSmoother(history=3)
    s.push(440.0)
    assert s.push(SIGNAL_TOO_QUIET) == SIGNAL_TOO_QUIET
    assert s.push(INSUFFICIENT_SAMPLES) == INSUFFICIENT_SAMPLES
    assert s.values == (440.0,)


def test_median_reset_and_validation() -> None:
    s = MedianSmoother(history=2)
    s.push(100.0)
    s.reset()
    assert s.values == ()
    with pytest.raises(ValueError):
        MedianSmoother(history=0)


def test_median_over_live_estimates(make_sine) -> None:
    fs, n = 44100, 4096
    est = FrequencyEstimator(fs, n)
    smoother = MedianSmoother(history=5)
    tone = make_sine(440.0, fs=fs, n=n)
    glitch = make_sine(1000.0, fs=fs, n=n)

    for _ in range(3):
        smoother.push(est.find_frequency(tone))

    assert abs(smoother.push(est.find_frequency(glitch)) - 440.0) < 2.0
    assert abs(smoother.push(est.find_frequency(glitch)) - 440.0) < 2.0
    assert abs(smoother.push(est.find_frequency(glitch)) - 1000.0) < 5.0


def test_debouncer_returns_value_closest_to_recent_mean() -> None:
    d = Debouncer()
    assert d.push(440.0) == INSUFFICIENT_SAMPLES  # history still holds the initial sentinels
    assert d.push(440.0) == 440.0
    assert d.push(1000.0) == 440.0
    assert d.push(440.0) == 440.0

    d.reset()
    assert (d.prev, d.prev2) == (INSUFFICIENT_SAMPLES, INSUFFICIENT_SAMPLES)
