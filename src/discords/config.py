"""Validated parameters for a discord search run."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .errors import InvalidDimensionError, InvalidParameterError, OutOfRangeError
from .preprocessing import check_alpha

ALGORITHM_ALIASES: Dict[str, str] = {
    "brute_force": "brute_force",
    "bruteforce": "brute_force",
    "brute": "brute_force",
    "heuristic": "heuristic",
    "hotsax": "heuristic",
    "hot_sax": "heuristic",
    "cluster": "cluster",
    "cluster_assisted": "cluster",
    "squeezer": "cluster",
}

MODES = ("top_n", "best", "min_dist")


@dataclass
class DiscordConfig:
    """Parameters of one discovery run.

    Static checks run on construction. Checks that depend on the series
    (window and sub-range bounds, the PAA target) run in :meth:`validate_for`
    before any search work starts.
    """

    window_size: int
    word_length: int = 3
    alpha: int = 3
    algorithm: str = "heuristic"
    cluster_threshold: float = 0.5
    dim_reduce_target: int | None = None
    start: int | None = None
    end: int | None = None
    mode: str = "top_n"
    count: int = 1
    min_dist: float = 0.0
    seed: int | None = None

    def __post_init__(self) -> None:
        key = str(self.algorithm).strip().lower().replace("-", "_")
        if key not in ALGORITHM_ALIASES:
            raise InvalidParameterError(
                f"Unknown algorithm '{self.algorithm}'. Choose one of {sorted(set(ALGORITHM_ALIASES.values()))}"
            )
        self.algorithm = ALGORITHM_ALIASES[key]

        if self.mode not in MODES:
            raise InvalidParameterError(f"mode must be one of {MODES} (got '{self.mode}')")
        if int(self.window_size) < 1:
            raise InvalidParameterError(f"window_size must be positive (got {self.window_size})")
        if int(self.word_length) < 1:
            raise InvalidParameterError(f"word_length must be positive (got {self.word_length})")
        if int(self.word_length) > int(self.window_size):
            raise InvalidParameterError(
                f"word_length ({self.word_length}) must not exceed window_size ({self.window_size})"
            )
        check_alpha(self.alpha)
        if not 0.0 < float(self.cluster_threshold) <= 1.0:
            raise InvalidParameterError(
                f"cluster_threshold must be in (0, 1] (got {self.cluster_threshold})"
            )
        if self.dim_reduce_target is not None:
            if self.algorithm != "brute_force":
                raise InvalidParameterError("dim_reduce_target is only supported by the brute_force algorithm")
            if int(self.dim_reduce_target) < 1:
                raise InvalidDimensionError(
                    f"dim_reduce_target must be positive (got {self.dim_reduce_target})"
                )
        if int(self.count) < 1:
            raise InvalidParameterError(f"count must be at least 1 (got {self.count})")
        if math.isnan(float(self.min_dist)) or float(self.min_dist) < 0:
            raise InvalidParameterError(f"min_dist must be a non-negative number (got {self.min_dist})")

        self.window_size = int(self.window_size)
        self.word_length = int(self.word_length)
        self.alpha = int(self.alpha)
        self.cluster_threshold = float(self.cluster_threshold)
        self.count = int(self.count)
        self.min_dist = float(self.min_dist)

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, object]) -> "DiscordConfig":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in cfg.items() if k in known}
        if "window_size" not in kwargs:
            raise InvalidParameterError("Discord config requires a 'window_size' field.")
        return cls(**kwargs)  # type: ignore[arg-type]

    @classmethod
    def from_file(cls, path: str | Path) -> "DiscordConfig":
        raw = Path(path)
        if not raw.exists():
            raise FileNotFoundError(raw)
        text = raw.read_text(encoding="utf-8")
        cfg = yaml.safe_load(text) if raw.suffix.lower() in {".yml", ".yaml"} else json.loads(text)
        if not isinstance(cfg, Mapping):
            raise InvalidParameterError("Discord config file must contain a mapping/object at the top level")
        return cls.from_mapping(cfg)

    def slice_bounds(self, length: int) -> tuple[int, int]:
        lo = 0 if self.start is None else int(self.start)
        hi = length if self.end is None else int(self.end)
        if lo < 0 or hi > length or lo >= hi:
            raise OutOfRangeError(f"range [{lo}, {hi}) is outside the series bounds [0, {length})")
        return lo, hi

    def validate_for(self, length: int) -> tuple[int, int]:
        """Check the parameters against a series of ``length`` points.

        Returns the ``[lo, hi)`` bounds of the searched slice.
        """

        if length < 1:
            raise InvalidParameterError("the series must not be empty")
        lo, hi = self.slice_bounds(length)
        span = hi - lo
        if self.window_size > span:
            raise InvalidParameterError(
                f"window_size ({self.window_size}) exceeds the searched slice length ({span})"
            )
        if self.dim_reduce_target is not None:
            target = int(self.dim_reduce_target)
            if target >= span:
                raise InvalidDimensionError(
                    f"dim_reduce_target ({target}) must be smaller than the slice length ({span})"
                )
        return lo, hi

    def reduced_window(self, span: int) -> int:
        """Window size in PAA-reduced coordinates for a slice of ``span`` points."""

        if self.dim_reduce_target is None:
            return self.window_size
        return max(1, int(round(self.window_size * int(self.dim_reduce_target) / span)))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
