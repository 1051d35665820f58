from __future__ import annotations

import pytest

from tuner_pitch.domain.reason_codes import (
    FAILURE_CODES,
    SOFT_CODES,
    ReasonCode,
    sentinel_for,
)
from tuner_pitch.domain.sentinels import (
    INSUFFICIENT_SAMPLES,
    SIGNAL_TOO_QUIET,
    is_sentinel,
    is_valid_frequency,
)


def test_sentinel_values_are_stable() -> None:
    # Callers across the bridge compare against these literals.
    assert INSUFFICIENT_SAMPLES == -1.0
    assert SIGNAL_TOO_QUIET == -2.0


def test_sign_discriminates_sentinels() -> None:
    assert is_sentinel(INSUFFICIENT_SAMPLES)
    assert is_sentinel(SIGNAL_TOO_QUIET)
    assert not is_sentinel(0.0)
    assert not is_sentinel(440.0)
    assert is_valid_frequency(440.0)
    assert not is_valid_frequency(float("nan"))


def test_reason_codes_are_unique_strings() -> None:
    values = [rc.value for rc in ReasonCode]
    assert len(values) == len(set(values))


def test_failure_and_soft_sets_do_not_overlap() -> None:
    assert FAILURE_CODES.intersection(SOFT_CODES) == set()


def test_every_failure_code_maps_to_a_sentinel() -> None:
    for code in FAILURE_CODES:
        assert is_sentinel(sentinel_for(code))
    assert sentinel_for(ReasonCode.SIGNAL_TOO_QUIET) == SIGNAL_TOO_QUIET
    with pytest.raises(ValueError):
        sentinel_for(ReasonCode.FLAT_PEAK)
