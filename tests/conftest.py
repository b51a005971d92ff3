from __future__ import annotations

import numpy as np
import pytest

from discords import generate_synthetic_series, inject_anomaly


@pytest.fixture
def anomalous_series() -> np.ndarray:
    """200 noisy sine samples with a bump injected at index 120."""

    base = generate_synthetic_series(length=200, noise_std=0.05, seed=7)
    return np.asarray(inject_anomaly(base, location=120, width=16, magnitude=2.0))


@pytest.fixture
def ramp_with_spike() -> list[float]:
    data = [float(v) for v in range(1, 1000)]
    data[180] = 500.0
    return data
