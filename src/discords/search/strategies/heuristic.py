"""HOT-SAX style search: rare SAX words first, trie occurrences as the cheap estimate."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ...errors import InvalidParameterError
from ...index import AugmentedTrie
from ...preprocessing import check_alpha
from ..base import OrderedSearchStrategy, SearchContext, build_word_table, sax_words

logger = logging.getLogger(__name__)


@dataclass
class HeuristicSearch(OrderedSearchStrategy):
    """Orders candidates by SAX word frequency and prunes with the word trie.

    Candidates are visited in ascending word frequency with random tie
    breaking, so the windows whose shape is rarest are tried first. Their
    first neighbours are the other windows sharing the same word.
    """

    name: str = "heuristic"
    word_length: int = 3
    alpha: int = 3

    def __post_init__(self) -> None:
        if int(self.word_length) < 1:
            raise InvalidParameterError(f"word length must be positive (got {self.word_length})")
        check_alpha(self.alpha)
        self.word_length = int(self.word_length)
        self.alpha = int(self.alpha)
        self.metadata.update({"word_length": self.word_length, "alpha": self.alpha})

    def _build_index(self, context: SearchContext, rng: np.random.Generator) -> None:
        if self.word_length > context.window_size:
            raise InvalidParameterError(
                f"word length {self.word_length} exceeds the window size {context.window_size}"
            )
        words = sax_words(context.windows, self.word_length, self.alpha)
        table = build_word_table(words)
        trie = AugmentedTrie.from_words((entry.index, entry.word) for entry in table)

        shuffled = rng.permutation(len(table))
        frequencies = np.array([table[i].frequency for i in shuffled])
        ranked = shuffled[np.argsort(frequencies, kind="stable")]

        context.order = [int(i) for i in ranked]
        context.neighbourhoods = lambda index: trie.lookup(words[index])
        context.extras.update({"word_table": table, "trie": trie})
        logger.debug(
            "heuristic index: %s windows, %s distinct words, min frequency %s",
            len(table),
            len(trie.words()),
            int(frequencies.min()),
        )
