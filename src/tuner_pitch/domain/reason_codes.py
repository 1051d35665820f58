from __future__ import annotations

from enum import StrEnum

from tuner_pitch.domain.sentinels import INSUFFICIENT_SAMPLES, SIGNAL_TOO_QUIET


class ReasonCode(StrEnum):
    """Stable reason/flag codes used in logs, CSV and report outputs."""

    # input contract
    INSUFFICIENT_SAMPLES = "INSUFFICIENT_SAMPLES"
    INVALID_WINDOW_LENGTH = "INVALID_WINDOW_LENGTH"

    # signal quality
    SIGNAL_TOO_QUIET = "SIGNAL_TOO_QUIET"

    # refinement
    FLAT_PEAK = "FLAT_PEAK"
    NEGATIVE_FREQUENCY = "NEGATIVE_FREQUENCY"


# Codes that replace the frequency with a sentinel.
FAILURE_CODES: set[ReasonCode] = {
    ReasonCode.INSUFFICIENT_SAMPLES,
    ReasonCode.INVALID_WINDOW_LENGTH,
    ReasonCode.SIGNAL_TOO_QUIET,
    ReasonCode.NEGATIVE_FREQUENCY,
}

# Informational flags; the frequency is still reported.
SOFT_CODES: set[ReasonCode] = {
    ReasonCode.FLAT_PEAK,
}

SENTINEL_BY_CODE: dict[ReasonCode, float] = {
    ReasonCode.INSUFFICIENT_SAMPLES: INSUFFICIENT_SAMPLES,
    ReasonCode.INVALID_WINDOW_LENGTH: INSUFFICIENT_SAMPLES,
    ReasonCode.NEGATIVE_FREQUENCY: INSUFFICIENT_SAMPLES,
    ReasonCode.SIGNAL_TOO_QUIET: SIGNAL_TOO_QUIET,
}


def sentinel_for(code: ReasonCode) -> float:
    if code not in SENTINEL_BY_CODE:
        raise ValueError(f"{code!r} does not map to a sentinel value")
    return SENTINEL_BY_CODE[code]
