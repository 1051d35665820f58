from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure() -> None:
    # Allow importing the package without requiring an editable install.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


def sine(freq_hz: float, *, fs: int, n: int, amp: float = 1.0) -> np.ndarray:
    t = np.arange(n, dtype=np.float64) / float(fs)
    return amp * np.sin(2.0 * np.pi * freq_hz * t)


@pytest.fixture
def make_sine():
    return sine
