"""Deterministic filtering functions for season, warmth and occasion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from models.clothing_item import ClothingItem
from models.taxonomy import ACCESSORY, MAX_WARMTH


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[ClothingItem]
    removed: Dict[str, str]
    debug: Dict[str, object]


def filter_by_season(items: List[ClothingItem], season: str) -> FilteringResult:
    """Drop items whose season tags exclude the current season."""

    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []
    for item in items:
        if item.suits_season(season):
            kept.append(item)
        else:
            removed[item.item_id] = f"not worn in {season}"

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "season": season,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_by_warmth(items: List[ClothingItem], temperature_c: float, hot_threshold_c: float = 25.0) -> FilteringResult:
    """Drop heavily insulated pieces on hot days; accessories are exempt."""

    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []
    too_hot = temperature_c > hot_threshold_c
    for item in items:
        if too_hot and item.warmth_level >= MAX_WARMTH and item.category != ACCESSORY:
            removed[item.item_id] = "too warm for the temperature"
        else:
            kept.append(item)

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "temperature_c": temperature_c,
        "hot": too_hot,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_by_occasion(items: List[ClothingItem], occasion: Optional[str]) -> FilteringResult:
    """Keep items tagged for the occasion or carrying no occasion tags at all."""

    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []
    for item in items:
        if item.suits_occasion(occasion):
            kept.append(item)
        else:
            removed[item.item_id] = f"not tagged for {occasion}"

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "occasion": occasion,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


__all__ = [
    "filter_by_season",
    "filter_by_warmth",
    "filter_by_occasion",
    "FilteringResult",
]
