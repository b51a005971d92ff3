"""Shared contract and scanning helpers for discord search strategies."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Collection, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidParameterError, SearchCancelledError
from ..preprocessing import as_series, sax

logger = logging.getLogger(__name__)

# Distances are computed this many windows at a time; abandonment is checked per block.
SCAN_BLOCK = 64

NO_DISCORD: tuple[float, None] = (0.0, None)

SearchResult = Tuple[float, Optional[int]]


@dataclass(frozen=True)
class WordEntry:
    """One row of the word table: a window start, its SAX word and the word's frequency."""

    index: int
    word: str
    frequency: int


def validate_series(data: Sequence[float] | np.ndarray, window_size: int) -> np.ndarray:
    """Check the common input contract and return the series as an array."""

    arr = as_series(data)
    if arr.size == 0:
        raise InvalidParameterError("the series must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("the series must only contain finite values")
    if int(window_size) < 1 or int(window_size) > arr.size:
        raise InvalidParameterError(
            f"window size must be in 1..{arr.size} (got {window_size})"
        )
    return arr


def sliding_windows(data: np.ndarray, window_size: int) -> np.ndarray:
    """Read-only ``(n - window_size + 1, window_size)`` view of every window."""

    return np.lib.stride_tricks.sliding_window_view(data, int(window_size))


def sax_words(windows: np.ndarray, word_length: int, alpha: int) -> list[str]:
    return [sax(window, word_length, alpha) for window in windows]


def build_word_table(words: Sequence[str]) -> list[WordEntry]:
    """Attach to every window the number of times its word occurs in the series."""

    frequencies = Counter(words)
    return [WordEntry(index=i, word=w, frequency=frequencies[w]) for i, w in enumerate(words)]


def window_distances(windows: np.ndarray, index: int, candidates: np.ndarray) -> np.ndarray:
    """Euclidean distance from window ``index`` to each window in ``candidates``."""

    diff = windows[candidates] - windows[index]
    return np.sqrt(np.einsum("ij,ij->i", diff, diff))


def comparable(index: int, candidates: np.ndarray, window_size: int) -> np.ndarray:
    """Keep the candidates that do not self-overlap with ``index``."""

    return candidates[np.abs(candidates - index) >= window_size]


def scan_nearest(
    windows: np.ndarray,
    index: int,
    candidates: np.ndarray,
    best: float,
) -> tuple[float, bool]:
    """Nearest-neighbour distance over ``candidates`` with early abandonment.

    Returns ``(nearest, abandoned)``. Scanning stops as soon as a distance
    below ``best`` is seen, since the window can then no longer be the
    discord.
    """

    nearest = math.inf
    for start in range(0, candidates.size, SCAN_BLOCK):
        dists = window_distances(windows, index, candidates[start : start + SCAN_BLOCK])
        if dists.size:
            nearest = min(nearest, float(dists.min()))
        if nearest < best:
            return nearest, True
    return nearest, False


@dataclass
class SearchContext:
    """Derived structures for one series, built once and owned by one run."""

    data: np.ndarray
    window_size: int
    windows: np.ndarray
    order: list[int] = field(default_factory=list)
    neighbourhoods: Callable[[int], Sequence[int]] | None = None
    should_cancel: Callable[[], bool] | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def n_windows(self) -> int:
        return int(self.windows.shape[0])

    def check_cancelled(self) -> None:
        if self.should_cancel is not None and self.should_cancel():
            raise SearchCancelledError("discord search cancelled by caller")


@dataclass
class SearchStrategy(ABC):
    """Base class for interchangeable discord search strategies."""

    name: str = "strategy"
    metadata: dict[str, Any] = field(default_factory=dict)

    def prepare(
        self,
        data: Sequence[float] | np.ndarray,
        window_size: int,
        rng: np.random.Generator | None = None,
        *,
        should_cancel: Callable[[], bool] | None = None,
    ) -> SearchContext:
        """Validate inputs and build the indexes the strategy searches with."""

        arr = validate_series(data, window_size)
        window_size = int(window_size)
        context = SearchContext(
            data=arr,
            window_size=window_size,
            windows=sliding_windows(arr, window_size),
            should_cancel=should_cancel,
        )
        self._build_index(context, rng if rng is not None else np.random.default_rng())
        return context

    def _build_index(self, context: SearchContext, rng: np.random.Generator) -> None:
        """Populate ``context.order`` and ``context.neighbourhoods``."""

        context.order = list(range(context.n_windows))

    @abstractmethod
    def search(
        self,
        context: SearchContext,
        skip: Collection[int] = frozenset(),
        rng: np.random.Generator | None = None,
    ) -> SearchResult:
        """Return the best ``(distance, location)`` not in ``skip``.

        ``(0.0, None)`` means no discord could be found.
        """

    def find_best(
        self,
        data: Sequence[float] | np.ndarray,
        window_size: int,
        skip: Collection[int] = frozenset(),
        rng: np.random.Generator | None = None,
        *,
        should_cancel: Callable[[], bool] | None = None,
    ) -> SearchResult:
        rng = rng if rng is not None else np.random.default_rng()
        context = self.prepare(data, window_size, rng, should_cancel=should_cancel)
        return self.search(context, skip, rng)

    def describe(self) -> Mapping[str, Any]:
        """Return serializable strategy metadata."""

        return {"name": self.name, **self.metadata}


class OrderedSearchStrategy(SearchStrategy):
    """Candidate-ordered search with two-tier early abandonment.

    For each candidate the neighbourhood supplied by the index is scanned
    first. If any distance there falls below the current best the candidate
    is dropped. Otherwise every remaining window is scanned in random order,
    again abandoning early. Subclasses only decide the candidate order and
    the neighbourhoods.
    """

    def search(
        self,
        context: SearchContext,
        skip: Collection[int] = frozenset(),
        rng: np.random.Generator | None = None,
    ) -> SearchResult:
        rng = rng if rng is not None else np.random.default_rng()
        window_size = context.window_size
        windows = context.windows
        best_dist = 0.0
        best_loc: int | None = None
        abandoned_cheap = abandoned_full = 0

        for index in context.order:
            context.check_cancelled()
            if index in skip:
                continue

            neighbourhood = context.neighbourhoods(index) if context.neighbourhoods else ()
            cheap = comparable(index, np.asarray(neighbourhood, dtype=np.intp), window_size)
            nearest, abandoned = scan_nearest(windows, index, cheap, best_dist)
            if abandoned:
                abandoned_cheap += 1
                continue

            remaining = comparable(index, rng.permutation(context.n_windows), window_size)
            if cheap.size:
                remaining = remaining[~np.isin(remaining, cheap)]
            full_nearest, abandoned = scan_nearest(windows, index, remaining, best_dist)
            if abandoned:
                abandoned_full += 1
                continue
            nearest = min(nearest, full_nearest)

            # Equal distances keep the earliest window, as the exhaustive search does.
            if nearest < math.inf and (
                nearest > best_dist or (nearest == best_dist and best_loc is not None and index < best_loc)
            ):
                best_dist = nearest
                best_loc = int(index)

        logger.debug(
            "%s pass: best=%s at %s, abandoned %s on neighbourhood and %s on full scan",
            self.name,
            best_dist,
            best_loc,
            abandoned_cheap,
            abandoned_full,
        )
        if best_loc is None:
            return NO_DISCORD
        return best_dist, best_loc
