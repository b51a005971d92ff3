"""Discord discovery for univariate time series."""

from importlib import metadata

from .config import DiscordConfig
from .engine import DiscordEngine, find_discords, run_search
from .errors import (
    DegenerateInputError,
    DiscordSearchError,
    InvalidAlphabetError,
    InvalidDimensionError,
    InvalidParameterError,
    LookupMiscompareError,
    OutOfRangeError,
    SearchCancelledError,
)
from .index import AugmentedTrie, squeezer
from .logging_utils import configure_logging, log_event
from .models import Discord, DiscordReport
from .preprocessing import BREAKPOINTS, gaussian_distance, mean, paa, sax, std_dev, znorm
from .search import BruteForceSearch, ClusterSearch, HeuristicSearch, SearchStrategy
from .synthetic import generate_synthetic_series, inject_anomaly

try:
    __version__ = metadata.version("discords")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
    __version__ = "0.1.0"

__all__ = [
    "AugmentedTrie",
    "BREAKPOINTS",
    "BruteForceSearch",
    "ClusterSearch",
    "DegenerateInputError",
    "Discord",
    "DiscordConfig",
    "DiscordEngine",
    "DiscordReport",
    "DiscordSearchError",
    "HeuristicSearch",
    "InvalidAlphabetError",
    "InvalidDimensionError",
    "InvalidParameterError",
    "LookupMiscompareError",
    "OutOfRangeError",
    "SearchCancelledError",
    "SearchStrategy",
    "configure_logging",
    "find_discords",
    "gaussian_distance",
    "generate_synthetic_series",
    "inject_anomaly",
    "log_event",
    "mean",
    "paa",
    "run_search",
    "sax",
    "squeezer",
    "std_dev",
    "znorm",
]
