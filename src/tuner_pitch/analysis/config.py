from __future__ import annotations

import json
from dataclasses import dataclass, fields
from enum import IntEnum, StrEnum
from pathlib import Path
from typing import Any, Mapping


class NoiseSense(IntEnum):
    """Multipliers on the mean spectral power that a peak must exceed."""

    LOW = 5
    MED = 10
    HIGH = 15
    VERY_HIGH = 40


class Smoothing(StrEnum):
    NONE = "none"
    MEDIAN = "median"
    DEBOUNCE = "debounce"


@dataclass(frozen=True)
class AnalysisConfig:
    """Single-frame estimator parameters.

    Defaults are the tuned values the estimator ships with; they are exposed so
    tests and callers can vary them, not because they need tuning per call.
    """

    overlap_factor: int = 4
    num_peaks: int = 5
    start_bin: int = 2  # DC and the first bin are ignored everywhere
    noise_sense: float = float(NoiseSense.VERY_HIGH)
    harmonic_factors: tuple[float, ...] = (2.0, 3.0, 4.0)
    log_floor: float = 1e-9

    @property
    def window_count(self) -> int:
        return 2 * int(self.overlap_factor) - 1

    def validate(self) -> AnalysisConfig:
        if self.overlap_factor < 1:
            raise ValueError(f"overlap_factor must be >= 1. Got {self.overlap_factor}")
        if self.num_peaks < 1:
            raise ValueError(f"num_peaks must be >= 1. Got {self.num_peaks}")
        if self.start_bin < 0:
            raise ValueError(f"start_bin must be >= 0. Got {self.start_bin}")
        if self.noise_sense <= 0:
            raise ValueError(f"noise_sense must be > 0. Got {self.noise_sense}")
        if not self.harmonic_factors:
            raise ValueError("harmonic_factors must not be empty")
        if self.log_floor <= 0:
            raise ValueError(f"log_floor must be > 0. Got {self.log_floor}")
        return self


@dataclass(frozen=True)
class TrackConfig:
    """Frame slicing and smoothing for whole-recording analysis."""

    buffer_size: int = 4096
    hop_size: int | None = None  # None -> one frame per buffer, no overlap
    smoothing: Smoothing = Smoothing.NONE
    median_history: int = 5
    highpass_hz: float | None = None

    @property
    def hop(self) -> int:
        return int(self.hop_size) if self.hop_size is not None else int(self.buffer_size)

    def validate(self) -> TrackConfig:
        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be > 0. Got {self.buffer_size}")
        if self.hop <= 0:
            raise ValueError(f"hop_size must be > 0. Got {self.hop_size}")
        if self.median_history < 1:
            raise ValueError(f"median_history must be >= 1. Got {self.median_history}")
        if self.highpass_hz is not None and self.highpass_hz <= 0:
            raise ValueError(f"highpass_hz must be > 0. Got {self.highpass_hz}")
        return self


def _build(cls: type, data: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    kwargs = dict(data)
    if "harmonic_factors" in kwargs:
        kwargs["harmonic_factors"] = tuple(float(v) for v in kwargs["harmonic_factors"])
    if "smoothing" in kwargs:
        kwargs["smoothing"] = Smoothing(kwargs["smoothing"])
    return cls(**kwargs).validate()


def load_config(path: str | Path | None) -> tuple[AnalysisConfig, TrackConfig]:
    """Read `{"analysis": {...}, "track": {...}}` from a JSON file.

    A missing file (or no path) yields the defaults.
    """

    if path is None:
        return AnalysisConfig(), TrackConfig()

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return AnalysisConfig(), TrackConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a JSON object. Got {type(data).__name__}")

    unknown = set(data) - {"analysis", "track"}
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")

    analysis = _build(AnalysisConfig, data.get("analysis", {}))
    track = _build(TrackConfig, data.get("track", {}))
    return analysis, track
