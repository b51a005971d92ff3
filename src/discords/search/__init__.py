from .base import (
    NO_DISCORD,
    OrderedSearchStrategy,
    SearchContext,
    SearchStrategy,
    WordEntry,
    build_word_table,
    validate_series,
)
from .strategies import BruteForceSearch, ClusterSearch, HeuristicSearch

__all__ = [
    "NO_DISCORD",
    "BruteForceSearch",
    "ClusterSearch",
    "HeuristicSearch",
    "OrderedSearchStrategy",
    "SearchContext",
    "SearchStrategy",
    "WordEntry",
    "build_word_table",
    "validate_series",
]
