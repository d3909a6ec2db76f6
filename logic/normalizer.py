"""Attribute normalizer turning loose item records into canonical clothing items."""

from __future__ import annotations

import hashlib
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from models.clothing_item import ClothingItem
from models.errors import InvalidItemError
from models.taxonomy import (
    CATEGORIES,
    DEFAULT_WARMTH,
    FOOTWEAR,
    ITEM_CONDITION_TAGS,
    MAX_WARMTH,
    MIN_WARMTH,
    NEUTRAL_COLOR,
    OCCASION_ALIASES,
    OCCASIONS,
    canonical_category,
    normalise_seasons,
    normalise_tags,
    normalize_color_name,
)
from stylesync.logging_config import log_event

logger = logging.getLogger(__name__)

_WEATHERPROOF_FOOTWEAR = ("boot", "galosh", "wellington", "wellies", "rain", "snow", "waterproof")


@dataclass(frozen=True)
class NormalizationResult:
    items: List[ClothingItem]
    invalid: Dict[str, str]


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar, comma separated string or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in (chunk.strip() for chunk in value.split(",")) if part]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value not in (None, "", [], ()):
            return value
    return None


def _normalise_colors(values: Iterable[Any]) -> List[str]:
    """Normalise color names using the canonical taxonomy mapping."""

    normalised = []
    seen = set()
    for value in values:
        if value is None:
            continue
        key = normalize_color_name(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


def _warmth(raw: Any, category: str) -> int:
    if raw is None or isinstance(raw, bool):
        return DEFAULT_WARMTH[category]
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_WARMTH[category]
    if not math.isfinite(value):
        return DEFAULT_WARMTH[category]
    level = int(value)
    return max(MIN_WARMTH, min(MAX_WARMTH, level))


def _condition_tags(raw: Any, category: str, subtype: str, warmth: int) -> List[str]:
    tags = normalise_tags(_ensure_list(raw), ITEM_CONDITION_TAGS)
    if tags or raw is not None or category != FOOTWEAR:
        return tags
    label = subtype.lower()
    if warmth >= 2 or any(keyword in label for keyword in _WEATHERPROOF_FOOTWEAR):
        return list(ITEM_CONDITION_TAGS)
    return []


def _anonymous_id(record: Mapping[str, Any]) -> str:
    # Keys are stringified so records with mixed key types still hash.
    content = {str(key): value for key, value in record.items()}
    try:
        payload = json.dumps(content, sort_keys=True, default=str)
    except (TypeError, ValueError):
        payload = repr(sorted(content.items(), key=lambda entry: entry[0]))
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()
    return f"anon-{digest[:12]}"


def normalize_item(record: Mapping[str, Any]) -> ClothingItem:
    """Build a :class:`ClothingItem` from a raw or partial item record.

    Only the category is validated strictly; every other attribute degrades
    to a permissive default because manual tagging is routinely incomplete.
    Canonical records (``ClothingItem.to_record``) normalise to themselves.
    """

    if not isinstance(record, Mapping):
        raise InvalidItemError(f"expected a mapping, got {type(record).__name__}")
    raw_id = _first_present(record, "item_id", "id", "_id")
    item_id = str(raw_id) if raw_id is not None else None

    raw_category = record.get("category")
    if raw_category is None or not str(raw_category).strip():
        raise InvalidItemError("category is required", item_id=item_id)
    category = canonical_category(raw_category)
    if category is None:
        raise InvalidItemError(
            f"unsupported category '{raw_category}', expected one of {CATEGORIES}", item_id=item_id
        )

    subtype = str(_first_present(record, "subtype", "sub_category", "type") or "").strip()
    colors = _normalise_colors(_ensure_list(_first_present(record, "colors", "color")))
    warmth = _warmth(_first_present(record, "warmth_level", "warmth"), category)
    seasons = normalise_seasons(_ensure_list(_first_present(record, "seasons", "season")))
    occasions = normalise_tags(
        _ensure_list(_first_present(record, "occasion_tags", "occasions", "occasion")),
        OCCASIONS,
        OCCASION_ALIASES,
    )
    conditions = _condition_tags(record.get("condition_tags"), category, subtype, warmth)

    name = record.get("name")
    pattern = record.get("pattern")
    image_url = _first_present(record, "image_url", "imageUrl")
    return ClothingItem(
        item_id=item_id or _anonymous_id(record),
        category=category,
        subtype=subtype,
        colors=tuple(colors or [NEUTRAL_COLOR]),
        seasons=frozenset(seasons),
        occasion_tags=frozenset(occasions),
        condition_tags=frozenset(conditions),
        warmth_level=warmth,
        name=str(name) if name else None,
        pattern=str(pattern) if pattern else None,
        image_url=str(image_url) if image_url else None,
    )


def normalize_catalog(records: Iterable[Mapping[str, Any]]) -> NormalizationResult:
    """Normalise a whole catalog, collecting invalid records instead of aborting."""

    items: List[ClothingItem] = []
    invalid: Dict[str, str] = {}
    for index, record in enumerate(records):
        if isinstance(record, ClothingItem):
            items.append(record)
            continue
        try:
            items.append(normalize_item(record))
        except InvalidItemError as exc:
            key: Optional[str] = exc.item_id or f"#{index}"
            invalid[key] = exc.reason
            log_event(logger, logging.WARNING, "invalid_item_skipped", item_id=key, reason=exc.reason)
    logger.info("Normalised %s items, skipped %s invalid records", len(items), len(invalid))
    return NormalizationResult(items=items, invalid=invalid)


__all__ = ["normalize_item", "normalize_catalog", "NormalizationResult"]
