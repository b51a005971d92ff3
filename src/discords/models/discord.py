"""Discord result representations for downstream reporting."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Discord(BaseModel):
    """A reported discord: its nearest-neighbour distance and window start."""

    model_config = ConfigDict(frozen=True)

    distance: float
    location: int
    window_size: int
    rank: int = 1
    strategy: str = "unknown"

    @field_validator("distance")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("distance must be non-negative")
        return float(value)

    @field_validator("location")
    @classmethod
    def _valid_location(cls, value: int) -> int:
        if value < 0:
            raise ValueError("location must be non-negative")
        return int(value)

    @property
    def end(self) -> int:
        return self.location + self.window_size

    def as_tuple(self) -> tuple[float, int]:
        return self.distance, self.location

    def short_label(self) -> str:
        return f"{self.strategy}#{self.rank}@{self.location}"


class DiscordReport(BaseModel):
    """Result of one configured discovery run."""

    series_length: int
    window_size: int
    strategy: str
    mode: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    discords: List[Discord] = Field(default_factory=list)
    elapsed_s: Optional[float] = None

    @property
    def best(self) -> Optional[Discord]:
        return self.discords[0] if self.discords else None

    def locations(self) -> List[int]:
        return [d.location for d in self.discords]
