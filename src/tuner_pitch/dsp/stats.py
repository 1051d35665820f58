import numpy as np


def as_f64(x: np.ndarray) -> np.ndarray:
    return np.asarray(x, dtype=np.float64)


def tail_mean(x: np.ndarray, start: int) -> float:
    """Arithmetic mean of x[start:]; 0.0 when that slice is empty."""
    tail = as_f64(x)[int(start):]
    if tail.size == 0:
        return 0.0
    return float(np.mean(tail))


def floored_log(x: np.ndarray, floor: float = 1e-9) -> np.ndarray:
    """Natural log with values clipped from below so it never hits -inf."""
    return np.log(np.maximum(as_f64(x), float(floor)))
