"""Canonical taxonomy definitions for clothing items and recommendation context.

This module centralises the canonical labels for categories, seasons,
occasions, weather conditions and color tokens. Helper functions keep
normalisation consistent across the normalizer, the filters and the item store.
"""

from typing import Dict, Iterable, List, Optional

TOP = "top"
BOTTOM = "bottom"
OUTERWEAR = "outerwear"
FOOTWEAR = "footwear"
ACCESSORY = "accessory"

CATEGORIES: List[str] = [TOP, BOTTOM, OUTERWEAR, FOOTWEAR, ACCESSORY]

CATEGORY_ALIASES: Dict[str, str] = {
    "tops": TOP,
    "shirt": TOP,
    "bottoms": BOTTOM,
    "pants": BOTTOM,
    "outer": OUTERWEAR,
    "outerwear": OUTERWEAR,
    "jacket": OUTERWEAR,
    "coat": OUTERWEAR,
    "shoes": FOOTWEAR,
    "shoe": FOOTWEAR,
    "accessories": ACCESSORY,
}

# Warmth assumed for an item whose record carries none.
DEFAULT_WARMTH: Dict[str, int] = {
    TOP: 1,
    BOTTOM: 1,
    OUTERWEAR: 2,
    FOOTWEAR: 1,
    ACCESSORY: 0,
}

MIN_WARMTH = 0
MAX_WARMTH = 3

SEASONS: List[str] = ["spring", "summer", "fall", "winter"]
SEASON_ALIASES: Dict[str, str] = {"autumn": "fall"}
# Tags that mean "wearable all year", stored as an empty season set.
ALL_SEASON_TAGS = {"all", "all_year", "all_season", "any"}

OCCASIONS: List[str] = ["casual", "business", "formal", "athletic"]
OCCASION_ALIASES: Dict[str, str] = {
    "work": "business",
    "office": "business",
    "sport": "athletic",
    "sporty": "athletic",
    "gym": "athletic",
    "party": "formal",
    "evening": "formal",
}

CONDITIONS: List[str] = ["clear", "rain", "snow", "wind", "extreme"]
CONDITION_ALIASES: Dict[str, str] = {
    "sunny": "clear",
    "cloudy": "clear",
    "clouds": "clear",
    "drizzle": "rain",
    "showers": "rain",
    "sleet": "snow",
    "windy": "wind",
    "storm": "extreme",
    "thunderstorm": "extreme",
}
# Conditions an item can be explicitly tagged as ready for.
ITEM_CONDITION_TAGS: List[str] = ["rain", "snow"]

NEUTRAL_COLOR = "neutral"

COLOR_MAP: Dict[str, str] = {
    "navy blue": "navy",
    "navy": "navy",
    "dark blue": "navy",
    "light blue": "blue",
    "sky blue": "blue",
    "denim": "blue",
    "blue": "blue",
    "black": "black",
    "charcoal": "gray",
    "white": "white",
    "off white": "white",
    "ivory": "white",
    "cream": "beige",
    "beige": "beige",
    "tan": "beige",
    "khaki": "beige",
    "camel": "brown",
    "brown": "brown",
    "gray": "gray",
    "grey": "gray",
    "silver": "gray",
    "green": "green",
    "olive": "green",
    "red": "red",
    "burgundy": "red",
    "maroon": "red",
    "pink": "pink",
    "yellow": "yellow",
    "mustard": "yellow",
    "gold": "yellow",
    "orange": "orange",
    "purple": "purple",
    "violet": "purple",
    "lavender": "purple",
    "neutral": NEUTRAL_COLOR,
}


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_").replace("-", "_")


def canonical_category(value: object) -> Optional[str]:
    """Return the canonical category for ``value`` or ``None`` when unknown."""

    if value is None:
        return None
    key = _normalize_key(str(value))
    if key in CATEGORIES:
        return key
    return CATEGORY_ALIASES.get(key)


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical hue-bucketed color token."""

    key = " ".join(raw_string.strip().lower().replace("_", " ").replace("-", " ").split())
    return COLOR_MAP.get(key, key)


def canonical_condition(value: object) -> Optional[str]:
    if value is None:
        return None
    key = _normalize_key(str(value))
    if key in CONDITIONS:
        return key
    return CONDITION_ALIASES.get(key)


def normalise_tags(values: Iterable[str], allowed: List[str], aliases: Optional[Dict[str, str]] = None) -> List[str]:
    """Normalise and deduplicate tags against an allowed set.

    Unknown tags are dropped rather than rejected.
    """

    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(str(value))
        if aliases:
            key = aliases.get(key, key)
        if key in allowed and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


def normalise_seasons(values: Iterable[str]) -> List[str]:
    """Normalise season tags; an all-season tag collapses to the empty list."""

    values = list(values)
    if any(_normalize_key(str(value)) in ALL_SEASON_TAGS for value in values):
        return []
    return normalise_tags(values, SEASONS, SEASON_ALIASES)


__all__ = [
    "TOP",
    "BOTTOM",
    "OUTERWEAR",
    "FOOTWEAR",
    "ACCESSORY",
    "CATEGORIES",
    "DEFAULT_WARMTH",
    "MIN_WARMTH",
    "MAX_WARMTH",
    "SEASONS",
    "OCCASIONS",
    "OCCASION_ALIASES",
    "CONDITIONS",
    "ITEM_CONDITION_TAGS",
    "NEUTRAL_COLOR",
    "COLOR_MAP",
    "canonical_category",
    "canonical_condition",
    "normalize_color_name",
    "normalise_tags",
    "normalise_seasons",
]
