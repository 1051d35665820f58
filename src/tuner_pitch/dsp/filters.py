import numpy as np
from scipy import signal

from tuner_pitch.dsp.stats import as_f64


def highpass(
    x: np.ndarray, fs: float, fc_hz: float = 50.0, order: int = 4
) -> np.ndarray:
    """
    Zero-phase high-pass filter applied to a whole recording before framing.
    Knocks out rumble and mains hum (~50/60 Hz) that can outrank a quiet note.
    """
    x = as_f64(x)
    if fc_hz <= 0:
        raise ValueError(f"fc_hz must be > 0. Got {fc_hz}")
    nyq = 0.5 * float(fs)
    fc = max(1.0, min(float(fc_hz), 0.45 * nyq))
    sos = signal.butter(order, fc / nyq, btype="highpass", output="sos")
    return signal.sosfiltfilt(sos, x)
