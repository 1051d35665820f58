from __future__ import annotations

from collections.abc import Sequence

from numpy.typing import ArrayLike

from tuner_pitch.estimator import FrequencyEstimator

# Handle-style entry points mirroring what a native bridge exposes:
# create once per audio configuration, estimate per buffer, destroy when done.


def create_tuner(sample_rate: int, buffer_size: int) -> FrequencyEstimator:
    return FrequencyEstimator(sample_rate, buffer_size)


def find_frequency(
    tuner: FrequencyEstimator, audio_data: ArrayLike | Sequence[float]
) -> float:
    return tuner.find_frequency(audio_data)


def destroy_tuner(tuner: FrequencyEstimator) -> None:
    tuner.close()
