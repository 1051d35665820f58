from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def is_power_of_two(n: int) -> bool:
    n = int(n)
    return n > 0 and (n & (n - 1)) == 0


def fft_recursive(x: NDArray[np.complex128]) -> NDArray[np.complex128]:
    """Radix-2 decimation-in-time DFT with twiddles exp(-2 pi i k / N).

    Length 1 returns the sample unchanged. Odd lengths above 1 raise.
    """

    xx = np.asarray(x, dtype=np.complex128)
    n = xx.size
    if n == 1:
        return xx.copy()
    if n % 2 != 0:
        raise ValueError(f"FFT input length must be a power of two. Got {n}")

    even = fft_recursive(xx[0::2])
    odd = fft_recursive(xx[1::2])

    k = np.arange(n // 2, dtype=np.float64)
    t = np.exp(-2j * np.pi * k / n) * odd

    out = np.empty(n, dtype=np.complex128)
    out[: n // 2] = even + t
    out[n // 2 :] = even - t
    return out


def rfft(data: NDArray[np.float64]) -> NDArray[np.complex128]:
    """Non-redundant half (N/2 + 1 bins) of the DFT of a real sequence."""

    x = np.asarray(data, dtype=np.float64)
    n = x.size
    if not is_power_of_two(n):
        raise ValueError(f"Input length must be a power of two for rfft. Got {n}")
    spectrum = fft_recursive(x.astype(np.complex128))
    return spectrum[: n // 2 + 1]


def rfft_magnitude(data: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.abs(rfft(data)).astype(np.float64)
