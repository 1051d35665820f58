from __future__ import annotations

import math

# Stable numeric return codes shared with every caller of the estimator.
INSUFFICIENT_SAMPLES: float = -1.0
SIGNAL_TOO_QUIET: float = -2.0


def is_sentinel(freq_hz: float) -> bool:
    """True when `freq_hz` is a failure code rather than a frequency."""

    return float(freq_hz) < 0.0


def is_valid_frequency(freq_hz: float) -> bool:
    x = float(freq_hz)
    return math.isfinite(x) and x >= 0.0
