"""Outfit candidate and recommendation result schemas."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from models.clothing_item import ClothingItem


@dataclass(frozen=True)
class ScoreRationale:
    """Per-axis breakdown of an outfit score, kept for explainability."""

    color_harmony: float
    coverage: float
    occasion_fit: float
    weights: Dict[str, float]
    color_pairs: List[Tuple[str, str, float]] = field(default_factory=list)
    missing_categories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "color_harmony": self.color_harmony,
            "coverage": self.coverage,
            "occasion_fit": self.occasion_fit,
            "weights": dict(self.weights),
            "color_pairs": [list(pair) for pair in self.color_pairs],
            "missing_categories": list(self.missing_categories),
        }


@dataclass(frozen=True)
class OutfitCandidate:
    """A grouping of catalog items; unscored while it is still a skeleton."""

    items: Tuple[ClothingItem, ...]
    score: Optional[float] = None
    rationale: Optional[ScoreRationale] = None
    name: Optional[str] = None

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    @property
    def identity(self) -> Tuple[str, ...]:
        """Multiset of item ids, used for deduplication."""

        return tuple(sorted(self.item_ids))

    def categories(self) -> List[str]:
        return [item.category for item in self.items]

    def with_score(self, score: float, rationale: ScoreRationale, name: Optional[str] = None) -> "OutfitCandidate":
        return replace(self, score=score, rationale=rationale, name=name or self.name)

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "item_ids": self.item_ids,
            "items": [item.to_record() for item in self.items],
            "score": self.score,
            "rationale": self.rationale.to_dict() if self.rationale else None,
        }


@dataclass(frozen=True)
class RecommendationResult:
    outfits: List[OutfitCandidate]
    truncated: bool = False
    skipped_items: Dict[str, str] = field(default_factory=dict)
    notices: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "outfits": [outfit.to_dict() for outfit in self.outfits],
            "truncated": self.truncated,
            "skipped_items": dict(self.skipped_items),
            "notices": list(self.notices),
        }


__all__ = ["ScoreRationale", "OutfitCandidate", "RecommendationResult"]
