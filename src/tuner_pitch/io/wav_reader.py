from pathlib import Path

import numpy as np
import soundfile as sf

from tuner_pitch.domain.types import MonoWav
from tuner_pitch.dsp.stats import as_f64


def load_mono_wav(path: str | Path) -> MonoWav:
    """
    Read a single-channel audio file (anything libsndfile opens).
    Samples come back as float64 in [-1, 1].
    """
    p = Path(path)
    data, fs = sf.read(str(p), always_2d=True)
    if data.shape[1] != 1:
        raise ValueError(f"Expected mono audio (1 channel). Got shape={data.shape}")

    return MonoWav(fs=float(fs), samples=as_f64(data[:, 0]), path=p)


def write_mono_wav(path: str | Path, samples: np.ndarray, fs: int) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    sf.write(str(p), as_f64(samples), int(fs))
    return p
