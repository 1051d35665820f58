from __future__ import annotations

import numpy as np
import pytest
from scipy import fft as sp_fft

from tuner_pitch.dsp.fft import fft_recursive, is_power_of_two, rfft, rfft_magnitude


@pytest.mark.parametrize("n", [1, 2, 8, 64, 1024])
def test_unit_impulse_has_flat_unit_magnitude(n: int) -> None:
    x = np.zeros(n, dtype=np.float64)
    x[0] = 1.0

    mag = rfft_magnitude(x)
    assert mag.shape == (n // 2 + 1,)
    np.testing.assert_allclose(mag, np.ones(n // 2 + 1), atol=1e-12)


def test_rfft_matches_reference() -> None:
    rng = np.random.default_rng(7)
    x = rng.standard_normal(256)

    np.testing.assert_allclose(rfft(x), sp_fft.rfft(x), atol=1e-9)


def test_fft_recursive_matches_reference_for_complex_input() -> None:
    rng = np.random.default_rng(3)
    x = rng.standard_normal(32) + 1j * rng.standard_normal(32)

    np.testing.assert_allclose(fft_recursive(x), sp_fft.fft(x), atol=1e-9)


def test_twiddle_sign_convention() -> None:
    # A complex exponential at bin k lands on +k with exp(-2 pi i k n / N).
    n = 16
    k = 3
    x = np.exp(2j * np.pi * k * np.arange(n) / n)
    out = np.abs(fft_recursive(x))
    assert int(np.argmax(out)) == k
    assert out[k] == pytest.approx(n)


def test_length_one_is_returned_unchanged() -> None:
    out = fft_recursive(np.asarray([2.5 - 1.0j]))
    assert out.shape == (1,)
    assert out[0] == 2.5 - 1.0j


@pytest.mark.parametrize("n", [0, 3, 6, 100])
def test_rfft_rejects_non_power_of_two(n: int) -> None:
    with pytest.raises(ValueError):
        rfft(np.ones(n))


def test_is_power_of_two() -> None:
    assert [n for n in range(0, 20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]
