"""Exhaustive discord search, the reference the faster strategies are checked against."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Collection

import numpy as np

from ..base import NO_DISCORD, SearchContext, SearchResult, SearchStrategy

logger = logging.getLogger(__name__)


@dataclass
class BruteForceSearch(SearchStrategy):
    """Compares every window with every non-self-overlapping window.

    Always quadratic in the number of windows. Ties keep the earliest index.
    """

    name: str = "brute_force"

    def search(
        self,
        context: SearchContext,
        skip: Collection[int] = frozenset(),
        rng: np.random.Generator | None = None,
    ) -> SearchResult:
        windows = context.windows
        window_size = context.window_size
        positions = np.arange(context.n_windows)
        best_dist = 0.0
        best_loc: int | None = None

        for index in context.order:
            context.check_cancelled()
            if index in skip:
                continue
            diff = windows - windows[index]
            dists = np.sqrt(np.einsum("ij,ij->i", diff, diff))
            dists[np.abs(positions - index) < window_size] = math.inf
            nearest = float(dists.min())
            if best_dist < nearest < math.inf:
                best_dist = nearest
                best_loc = int(index)

        logger.debug("brute force pass: best=%s at %s over %s windows", best_dist, best_loc, context.n_windows)
        if best_loc is None:
            return NO_DISCORD
        return best_dist, best_loc
