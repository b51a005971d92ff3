"""Cluster-assisted search using the Squeezer index instead of a trie."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ...errors import InvalidParameterError
from ...index import squeezer
from ...preprocessing import check_alpha
from ..base import OrderedSearchStrategy, SearchContext, sax_words

logger = logging.getLogger(__name__)


@dataclass
class ClusterSearch(OrderedSearchStrategy):
    """Visits the smallest cluster first and uses cluster members as the cheap estimate."""

    name: str = "cluster"
    word_length: int = 3
    alpha: int = 3
    threshold: float = 0.5

    def __post_init__(self) -> None:
        if int(self.word_length) < 1:
            raise InvalidParameterError(f"word length must be positive (got {self.word_length})")
        check_alpha(self.alpha)
        if not 0.0 < float(self.threshold) <= 1.0:
            raise InvalidParameterError(f"cluster threshold must be in (0, 1] (got {self.threshold})")
        self.word_length = int(self.word_length)
        self.alpha = int(self.alpha)
        self.threshold = float(self.threshold)
        self.metadata.update(
            {"word_length": self.word_length, "alpha": self.alpha, "threshold": self.threshold}
        )

    def _build_index(self, context: SearchContext, rng: np.random.Generator) -> None:
        if self.word_length > context.window_size:
            raise InvalidParameterError(
                f"word length {self.word_length} exceeds the window size {context.window_size}"
            )
        words = sax_words(context.windows, self.word_length, self.alpha)
        clusters = squeezer(words, self.threshold)

        membership: dict[int, int] = {}
        for cluster_id, members in enumerate(clusters):
            for index in members:
                membership[index] = cluster_id

        smallest = min(clusters, key=len)
        seen = set(smallest)
        context.order = list(smallest) + [i for i in range(context.n_windows) if i not in seen]
        context.neighbourhoods = lambda index: clusters[membership[index]]
        context.extras.update({"clusters": clusters})
        logger.debug(
            "cluster index: %s windows in %s clusters, smallest has %s members",
            len(words),
            len(clusters),
            len(smallest),
        )
