"""Recommendation context and per-call options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from models.taxonomy import (
    CONDITIONS,
    OCCASION_ALIASES,
    OCCASIONS,
    SEASONS,
    canonical_condition,
    normalise_seasons,
    normalise_tags,
)


@dataclass(frozen=True)
class Context:
    """What the caller asks for: current weather, occasion and season."""

    temperature_c: float
    condition: str
    season: str
    occasion: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.temperature_c, bool) or not isinstance(self.temperature_c, (int, float)):
            raise TypeError(f"temperature_c must be numeric, got {type(self.temperature_c).__name__}")
        object.__setattr__(self, "temperature_c", float(self.temperature_c))

        condition = canonical_condition(self.condition)
        if condition is None:
            raise ValueError(f"Unsupported condition '{self.condition}'. Allowed: {CONDITIONS}")
        object.__setattr__(self, "condition", condition)

        seasons = normalise_seasons([self.season])
        if len(seasons) != 1:
            raise ValueError(f"Unsupported season '{self.season}'. Allowed: {SEASONS}")
        object.__setattr__(self, "season", seasons[0])

        if self.occasion is not None and str(self.occasion).strip():
            occasions = normalise_tags([self.occasion], OCCASIONS, OCCASION_ALIASES)
            if not occasions:
                raise ValueError(f"Unsupported occasion '{self.occasion}'. Allowed: {OCCASIONS}")
            object.__setattr__(self, "occasion", occasions[0])
        else:
            object.__setattr__(self, "occasion", None)


@dataclass(frozen=True)
class RecommendOptions:
    max_results: int = 5
    max_skeletons: int = 200

    def __post_init__(self) -> None:
        if self.max_results < 1:
            raise ValueError("max_results must be at least 1")
        if self.max_skeletons < 1:
            raise ValueError("max_skeletons must be at least 1")


__all__ = ["Context", "RecommendOptions"]
