"""Synthetic series used to exercise the search strategies."""

from __future__ import annotations

import math
from typing import List, Mapping, Sequence

import numpy as np


def generate_synthetic_series(
    length: int = 512,
    components: Sequence[Mapping[str, float]] | None = None,
    noise_std: float = 0.05,
    seed: int | None = None,
) -> List[float]:
    """Generate a series composed of sinusoids and Gaussian noise.

    ``freq`` is expressed in cycles per sample.
    """

    if components is None:
        components = [{"freq": 1 / 32, "amplitude": 1.0}, {"freq": 1 / 7, "amplitude": 0.2}]

    rng = np.random.default_rng(seed)
    t = np.arange(int(length), dtype=float)
    series = np.zeros_like(t)
    for comp in components:
        freq = float(comp.get("freq", 0.0))
        amp = float(comp.get("amplitude", 0.0))
        phase = float(comp.get("phase", 0.0))
        series += amp * np.sin(2 * math.pi * freq * t + phase)

    if noise_std:
        series += rng.normal(scale=noise_std, size=series.shape)

    return series.tolist()


def inject_anomaly(
    series: Sequence[float],
    location: int,
    width: int,
    magnitude: float = 3.0,
) -> List[float]:
    """Return a copy of ``series`` with a half-sine bump added at ``location``."""

    arr = np.asarray(series, dtype=float).copy()
    end = min(arr.size, int(location) + int(width))
    span = end - int(location)
    if span > 0:
        arr[int(location) : end] += magnitude * np.sin(np.linspace(0.0, math.pi, span + 2)[1:-1])
    return arr.tolist()
