"""Discovery loop that turns a single-discord strategy into ranked results."""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, List, Mapping, MutableMapping, Sequence

import numpy as np

from .config import DiscordConfig
from .errors import InvalidParameterError
from .logging_utils import log_event
from .models import Discord, DiscordReport
from .preprocessing import as_series, paa
from .search import BruteForceSearch, ClusterSearch, HeuristicSearch, SearchStrategy

logger = logging.getLogger(__name__)


class DiscordEngine:
    """Runs a search strategy repeatedly, masking each discord it reports.

    After every discord at ``location`` the windows starting in
    ``[location - window_size, location + window_size)`` are skipped, so no
    two reported discords overlap. The loop stops on a zero distance, when
    the requested count is reached, or, in threshold mode, on the first
    distance below ``min_dist``.
    """

    _registry: MutableMapping[str, Callable[[Mapping[str, Any]], SearchStrategy]] = {}

    def __init__(
        self,
        strategy: SearchStrategy,
        rng: np.random.Generator | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> None:
        self.strategy = strategy
        self.rng = rng if rng is not None else np.random.default_rng()
        self.should_cancel = should_cancel

    @classmethod
    def register_strategy(cls, name: str, factory: Callable[[Mapping[str, Any]], SearchStrategy]) -> None:
        cls._registry[name.lower()] = factory

    @classmethod
    def from_config(
        cls,
        config: DiscordConfig | Mapping[str, Any],
        *,
        rng: np.random.Generator | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> "DiscordEngine":
        cfg = config if isinstance(config, DiscordConfig) else DiscordConfig.from_mapping(config)
        factory = cls._registry.get(cfg.algorithm)
        if not factory:
            raise InvalidParameterError(
                f"Unknown strategy '{cfg.algorithm}'. Registered strategies: {sorted(cls._registry)}"
            )
        rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        return cls(factory(cfg.as_dict()), rng=rng, should_cancel=should_cancel)

    def _run(
        self,
        data: Sequence[float] | np.ndarray,
        window_size: int,
        *,
        count: int | None,
        min_dist: float = 0.0,
    ) -> List[Discord]:
        context = self.strategy.prepare(data, window_size, self.rng, should_cancel=self.should_cancel)
        window_size = context.window_size
        discords: list[Discord] = []
        skip: set[int] = set()

        while True:
            distance, location = self.strategy.search(context, skip, self.rng)
            if distance == 0.0 or location is None or distance < min_dist:
                break

            discord = Discord(
                distance=distance,
                location=location,
                window_size=window_size,
                rank=len(discords) + 1,
                strategy=self.strategy.name,
            )
            discords.append(discord)
            logger.info("Found discord %s | distance=%.6g", discord.short_label(), distance)

            if count is not None and len(discords) >= count:
                break
            skip.update(range(max(0, location - window_size), location + window_size))

        return discords

    def find_discords(self, data: Sequence[float] | np.ndarray, window_size: int, count: int) -> List[Discord]:
        """Return up to ``count`` discords, most significant first."""

        if int(count) < 1:
            raise InvalidParameterError(f"count must be at least 1 (got {count})")
        return self._run(data, window_size, count=int(count))

    def find_best(self, data: Sequence[float] | np.ndarray, window_size: int) -> Discord | None:
        found = self._run(data, window_size, count=1)
        return found[0] if found else None

    def find_discords_min_dist(
        self,
        data: Sequence[float] | np.ndarray,
        window_size: int,
        min_dist: float,
    ) -> List[Discord]:
        """Return every discord whose distance is at least ``min_dist``."""

        if math.isnan(float(min_dist)) or float(min_dist) < 0:
            raise InvalidParameterError(f"min_dist must be a non-negative number (got {min_dist})")
        return self._run(data, window_size, count=None, min_dist=float(min_dist))


def _search_slice(engine: DiscordEngine, segment: np.ndarray, window_size: int, cfg: DiscordConfig) -> List[Discord]:
    if cfg.mode == "best":
        best = engine.find_best(segment, window_size)
        return [best] if best else []
    if cfg.mode == "min_dist":
        return engine.find_discords_min_dist(segment, window_size, cfg.min_dist)
    return engine.find_discords(segment, window_size, cfg.count)


def find_discords(
    data: Sequence[float] | np.ndarray,
    config: DiscordConfig | Mapping[str, Any],
    *,
    rng: np.random.Generator | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> List[Discord]:
    """Search ``data`` as configured and report locations in full-series coordinates.

    The configured sub-range is searched on its own. With
    ``dim_reduce_target`` the slice is first reduced with PAA and the window
    size scaled by the same ratio; locations are scaled back afterwards.
    """

    cfg = config if isinstance(config, DiscordConfig) else DiscordConfig.from_mapping(config)
    arr = as_series(data)
    lo, hi = cfg.validate_for(arr.size)
    segment = arr[lo:hi]
    engine = DiscordEngine.from_config(cfg, rng=rng, should_cancel=should_cancel)

    if cfg.dim_reduce_target is None:
        found = _search_slice(engine, segment, cfg.window_size, cfg)
        return [d.model_copy(update={"location": d.location + lo}) for d in found]

    span = segment.size
    target = int(cfg.dim_reduce_target)
    reduced = paa(segment, target)
    found = _search_slice(engine, reduced, cfg.reduced_window(span), cfg)
    last_start = hi - cfg.window_size
    return [
        d.model_copy(
            update={
                "location": min(lo + (d.location * span) // target, last_start),
                "window_size": cfg.window_size,
            }
        )
        for d in found
    ]


def run_search(
    data: Sequence[float] | np.ndarray,
    config: DiscordConfig | Mapping[str, Any],
    *,
    rng: np.random.Generator | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> DiscordReport:
    """Run :func:`find_discords` and wrap the results with the run parameters."""

    cfg = config if isinstance(config, DiscordConfig) else DiscordConfig.from_mapping(config)
    started = time.perf_counter()
    discords = find_discords(data, cfg, rng=rng, should_cancel=should_cancel)
    elapsed = time.perf_counter() - started

    report = DiscordReport(
        series_length=int(as_series(data).size),
        window_size=cfg.window_size,
        strategy=cfg.algorithm,
        mode=cfg.mode,
        parameters=cfg.as_dict(),
        discords=discords,
        elapsed_s=elapsed,
    )
    log_event(
        logger,
        "search_complete",
        strategy=cfg.algorithm,
        samples=report.series_length,
        discords=len(discords),
        elapsed_s=round(elapsed, 6),
    )
    return report


def _register_defaults() -> None:
    DiscordEngine.register_strategy("brute_force", lambda cfg: BruteForceSearch())
    DiscordEngine.register_strategy(
        "heuristic",
        lambda cfg: HeuristicSearch(
            word_length=cfg.get("word_length", 3),
            alpha=cfg.get("alpha", 3),
        ),
    )
    DiscordEngine.register_strategy(
        "cluster",
        lambda cfg: ClusterSearch(
            word_length=cfg.get("word_length", 3),
            alpha=cfg.get("alpha", 3),
            threshold=cfg.get("cluster_threshold", 0.5),
        ),
    )


_register_defaults()
