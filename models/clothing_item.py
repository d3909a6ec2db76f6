"""Clothing item data model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from models.taxonomy import CATEGORIES, MAX_WARMTH, MIN_WARMTH


@dataclass(frozen=True)
class ClothingItem:
    """Canonical, immutable view of one owned garment.

    Instances are produced by :func:`logic.normalizer.normalize_item`; the
    engine only ever holds references to them.
    """

    item_id: str
    category: str
    colors: Tuple[str, ...]
    warmth_level: int
    subtype: str = ""
    seasons: FrozenSet[str] = field(default_factory=frozenset)
    occasion_tags: FrozenSet[str] = field(default_factory=frozenset)
    condition_tags: FrozenSet[str] = field(default_factory=frozenset)
    name: Optional[str] = None
    pattern: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"Unsupported category '{self.category}'. Allowed: {CATEGORIES}")
        if not self.colors:
            raise ValueError("ClothingItem.colors must contain at least one color")
        if not MIN_WARMTH <= self.warmth_level <= MAX_WARMTH:
            raise ValueError(f"warmth_level must be within {MIN_WARMTH}..{MAX_WARMTH}")

    @property
    def dominant_color(self) -> str:
        return self.colors[0]

    def suits_occasion(self, occasion: Optional[str]) -> bool:
        return occasion is None or not self.occasion_tags or occasion in self.occasion_tags

    def suits_season(self, season: str) -> bool:
        return not self.seasons or season in self.seasons

    def to_record(self) -> Dict[str, Any]:
        """Serialise into a plain record that the normalizer accepts back."""

        record = asdict(self)
        record["colors"] = list(self.colors)
        record["seasons"] = sorted(self.seasons)
        record["occasion_tags"] = sorted(self.occasion_tags)
        record["condition_tags"] = sorted(self.condition_tags)
        return record


__all__ = ["ClothingItem"]
