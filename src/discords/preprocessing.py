"""Numeric preprocessing: z-normalization, PAA, SAX and window distance."""

from __future__ import annotations

from typing import Mapping, Sequence

import numpy as np

from .errors import (
    DegenerateInputError,
    InvalidAlphabetError,
    InvalidDimensionError,
    InvalidParameterError,
)

# Gaussian equiprobable cut points from the SAX literature, keyed by alphabet size.
BREAKPOINTS: Mapping[int, tuple[float, ...]] = {
    3: (-0.43, 0.43),
    4: (-0.67, 0.0, 0.67),
    5: (-0.84, -0.25, 0.25, 0.84),
    6: (-0.97, -0.43, 0.0, 0.43, 0.97),
    7: (-1.07, -0.57, -0.18, 0.18, 0.57, 1.07),
}

MIN_ALPHA = min(BREAKPOINTS)
MAX_ALPHA = max(BREAKPOINTS)


def as_series(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``values`` as a one-dimensional float64 array."""

    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim > 1:
        raise InvalidParameterError(f"expected a univariate series, got an array of shape {arr.shape}")
    return arr.reshape(-1)


def mean(series: Sequence[float] | np.ndarray) -> float:
    arr = as_series(series)
    if arr.size == 0:
        raise InvalidParameterError("mean of an empty series is undefined")
    return float(np.mean(arr))


def std_dev(series: Sequence[float] | np.ndarray) -> float:
    """Population standard deviation."""

    arr = as_series(series)
    if arr.size == 0:
        raise InvalidParameterError("standard deviation of an empty series is undefined")
    return float(np.std(arr, ddof=0))


def znorm(series: Sequence[float] | np.ndarray) -> np.ndarray:
    """Z-normalize ``series`` using the population standard deviation.

    Raises :class:`DegenerateInputError` instead of returning NaNs when the
    series is flat.
    """

    arr = as_series(series)
    sigma = std_dev(arr)
    if sigma == 0.0 or not np.isfinite(sigma):
        raise DegenerateInputError(f"cannot z-normalize a series with standard deviation {sigma}")
    normalized = (arr - float(np.mean(arr))) / sigma
    if not np.all(np.isfinite(normalized)):
        raise DegenerateInputError("z-normalization produced non-finite values")
    return normalized


def paa(series: Sequence[float] | np.ndarray, target_len: int) -> np.ndarray:
    """Piecewise aggregate approximation of ``series`` to ``target_len`` points.

    Bucket ``k`` spans ``[floor(k*n/target_len), floor((k+1)*n/target_len))``
    and is replaced by its mean.
    """

    arr = as_series(series)
    n = arr.size
    target_len = int(target_len)
    if target_len < 1:
        raise InvalidDimensionError(f"PAA target length must be positive (got {target_len})")
    if target_len >= n:
        raise InvalidDimensionError(
            f"PAA target length {target_len} must be smaller than the series length {n}"
        )

    bounds = (np.arange(target_len + 1) * n) // target_len
    sums = np.add.reduceat(arr, bounds[:-1])
    return sums / np.diff(bounds)


def check_alpha(alpha: int) -> tuple[float, ...]:
    try:
        return BREAKPOINTS[int(alpha)]
    except (KeyError, TypeError, ValueError):
        raise InvalidAlphabetError(
            f"alphabet size {alpha} is not supported; use a value in {MIN_ALPHA}..{MAX_ALPHA}"
        ) from None


def to_sax_letters(points: np.ndarray, alpha: int) -> str:
    breakpoints = check_alpha(alpha)
    symbols = np.searchsorted(np.asarray(breakpoints), points, side="right")
    return "".join(chr(ord("a") + int(s)) for s in symbols)


def sax(window: Sequence[float] | np.ndarray, word_length: int, alpha: int) -> str:
    """Encode ``window`` as a SAX word of ``word_length`` letters over ``alpha`` symbols."""

    check_alpha(alpha)
    arr = as_series(window)
    word_length = int(word_length)
    if word_length < 1 or word_length > arr.size:
        raise InvalidParameterError(
            f"word length must be in 1..{arr.size} for a window of {arr.size} points (got {word_length})"
        )
    normalized = znorm(arr)
    reduced = normalized if word_length == arr.size else paa(normalized, word_length)
    return to_sax_letters(reduced, alpha)


def gaussian_distance(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Euclidean distance between two equal-length slices."""

    left = as_series(a)
    right = as_series(b)
    if left.size != right.size:
        raise InvalidParameterError(f"cannot compare slices of length {left.size} and {right.size}")
    diff = left - right
    return float(np.sqrt(np.dot(diff, diff)))
