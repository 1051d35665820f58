import math

from tuner_pitch.domain.sentinels import is_sentinel


def is_finite(x: float) -> bool:
    return isinstance(x, (int, float)) and math.isfinite(float(x))


def format_hz(x: float | None, fmt: str = ".2f") -> str:
    """Frequency for tables: blank for missing values and sentinels."""
    if x is None or not is_finite(x) or is_sentinel(x):
        return ""
    return format(float(x), fmt)


def custom_format(x: float | None, fmt: str) -> str:
    if x is None or not is_finite(x):
        return ""
    return format(float(x), fmt)
