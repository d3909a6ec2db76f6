"""Bounded outfit skeleton enumeration with transparent diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from math import isqrt
from typing import Dict, List, Optional, Sequence, Tuple

from logic.context_synthesizer import WeatherRequirements, derive_requirements
from logic.contextual_filtering import (
    FilteringResult,
    filter_by_occasion,
    filter_by_season,
    filter_by_warmth,
)
from logic.outfit_scoring import occasion_credit
from models.clothing_item import ClothingItem
from models.context import Context
from models.errors import InsufficientWardrobeError
from models.outfit import OutfitCandidate
from models.taxonomy import ACCESSORY, BOTTOM, CATEGORIES, FOOTWEAR, OUTERWEAR, TOP
from stylesync.config import EngineConfig
from stylesync.logging_config import log_event

logger = logging.getLogger(__name__)

REQUIRED_CATEGORIES = (TOP, BOTTOM)


@dataclass(frozen=True)
class GenerationResult:
    candidates: List[OutfitCandidate]
    truncated: bool
    required_categories: List[str]
    notices: List[str] = field(default_factory=list)
    diagnostics: Dict[str, object] = field(default_factory=dict)


def _group(items: Sequence[ClothingItem]) -> Dict[str, List[ClothingItem]]:
    grouped: Dict[str, List[ClothingItem]] = {category: [] for category in CATEGORIES}
    for item in items:
        grouped[item.category].append(item)
    for values in grouped.values():
        values.sort(key=lambda i: i.item_id)
    return grouped


def pre_score(item: ClothingItem, context: Context) -> int:
    """Cheap relevance: how many of the item's tags name the occasion and season."""

    score = 0
    if context.occasion and context.occasion in item.occasion_tags:
        score += 1
    if context.season in item.seasons:
        score += 1
    return score


def truncation_limits(top_count: int, bottom_count: int, cap: int) -> Tuple[int, int]:
    """Return per-category counts whose product stays within ``cap``."""

    if top_count * bottom_count <= cap:
        return top_count, bottom_count
    k = max(1, isqrt(cap))
    if top_count <= k:
        return top_count, max(1, cap // top_count)
    if bottom_count <= k:
        return max(1, cap // bottom_count), bottom_count
    return k, k


def _select_top_k(items: List[ClothingItem], k: int, context: Context) -> List[ClothingItem]:
    ranked = sorted(items, key=lambda item: (-pre_score(item, context), item.item_id))
    return sorted(ranked[:k], key=lambda item: item.item_id)


def _attachment_key(item: ClothingItem, chosen: Sequence[ClothingItem], context: Context, config: EngineConfig):
    affinity = config.affinity_table.mean_affinity(item.dominant_color, [c.dominant_color for c in chosen])
    credit = occasion_credit(item, context.occasion, config.unconstrained_occasion_credit)
    return -affinity, -credit, -item.warmth_level, item.item_id


def _best_attachment(
    pool: Sequence[ClothingItem], chosen: Sequence[ClothingItem], context: Context, config: EngineConfig
) -> Optional[ClothingItem]:
    if not pool:
        return None
    return min(pool, key=lambda item: _attachment_key(item, chosen, context, config))


def _attach_accessories(
    pool: Sequence[ClothingItem], chosen: Sequence[ClothingItem], config: EngineConfig
) -> List[ClothingItem]:
    """Greedily add the most color-compatible accessories, up to the cap."""

    picked: List[ClothingItem] = []
    remaining = list(pool)
    while remaining and len(picked) < config.max_accessories:
        colors = [item.dominant_color for item in list(chosen) + picked]
        scored = [
            (config.affinity_table.mean_affinity(item.dominant_color, colors), item) for item in remaining
        ]
        best_affinity, best = min(scored, key=lambda entry: (-entry[0], entry[1].item_id))
        if best_affinity < config.accessory_min_affinity:
            break
        picked.append(best)
        remaining.remove(best)
    return picked


def _apply_filters(items: List[ClothingItem], context: Context, config: EngineConfig) -> Dict[str, object]:
    reasons: Dict[str, str] = {}
    debug_steps: List[Dict[str, object]] = []
    filtered = items

    steps = [
        ("season", lambda values: filter_by_season(values, context.season)),
        ("warmth", lambda values: filter_by_warmth(values, context.temperature_c, config.hot_threshold_c)),
        ("occasion", lambda values: filter_by_occasion(values, context.occasion)),
    ]
    for name, func in steps:
        result: FilteringResult = func(filtered)
        reasons.update(result.removed)
        debug_steps.append({"step": name, "debug": result.debug, "removed": result.removed})
        filtered = result.items

    return {"items": filtered, "steps": debug_steps, "reasons": reasons, "final_count": len(filtered)}


def _outerwear_pool(
    grouped: Dict[str, List[ClothingItem]], requirements: WeatherRequirements, notices: List[str]
) -> Tuple[List[ClothingItem], Tuple[bool, ...]]:
    """Return the outerwear to choose from and the layer variants to build per pair.

    Each variant flag says whether that skeleton gets an outerwear piece. Cold
    weather forces the layer; adverse weather only offers it next to the
    layer-free pair, and ranking decides between the two.
    """

    if requirements.outerwear_required:
        warm = [item for item in grouped[OUTERWEAR] if item.warmth_level >= requirements.min_outerwear_warmth]
        if not warm:
            notices.append(
                f"No outerwear with warmth >= {requirements.min_outerwear_warmth} available for the cold"
            )
            return [], (False,)
        return warm, (True,)
    if requirements.adverse_weather and grouped[OUTERWEAR]:
        return grouped[OUTERWEAR], (False, True)
    return [], (False,)


def _footwear_pool(
    grouped: Dict[str, List[ClothingItem]], requirements: WeatherRequirements, notices: List[str]
) -> Tuple[List[ClothingItem], bool]:
    """Return the footwear to choose from and whether the condition rule applies."""

    condition = requirements.footwear_condition
    if condition is None:
        return grouped[FOOTWEAR], False
    ready = [item for item in grouped[FOOTWEAR] if condition in item.condition_tags]
    if ready:
        return ready, True
    notices.append(f"No {condition}-ready footwear in the wardrobe; footwear requirement waived")
    return grouped[FOOTWEAR], False


def generate_candidates(
    items: Sequence[ClothingItem],
    context: Context,
    config: Optional[EngineConfig] = None,
    max_skeletons: Optional[int] = None,
) -> GenerationResult:
    """Enumerate outfit skeletons: one top and one bottom plus optional pieces.

    Raises :class:`InsufficientWardrobeError` when filtering leaves no top or
    no bottom.
    """

    config = config or EngineConfig()
    cap = max_skeletons if max_skeletons is not None else config.default_max_skeletons
    requirements = derive_requirements(
        context,
        cold_threshold_c=config.cold_threshold_c,
        hot_threshold_c=config.hot_threshold_c,
        min_outerwear_warmth=config.min_outerwear_warmth,
    )

    filter_results = _apply_filters(list(items), context, config)
    grouped = _group(filter_results["items"])
    counts = {category: len(values) for category, values in grouped.items()}
    logger.info("Filtered catalog to %s items: %s", filter_results["final_count"], counts)

    missing = [category for category in REQUIRED_CATEGORIES if not grouped[category]]
    if missing:
        log_event(logger, logging.INFO, "insufficient_wardrobe", missing_categories=missing, counts=counts)
        raise InsufficientWardrobeError(missing, counts, {TOP: 1, BOTTOM: 1})

    notices: List[str] = []
    if context.condition == "extreme":
        notices.append("Extreme weather reported; consider limiting time outdoors")

    outerwear_pool, layer_variants = _outerwear_pool(grouped, requirements, notices)
    footwear_pool, footwear_rule_active = _footwear_pool(grouped, requirements, notices)

    # Layer variants share the skeleton budget with the pairs they extend.
    pair_cap = max(1, cap // len(layer_variants))
    tops, bottoms = grouped[TOP], grouped[BOTTOM]
    truncated = len(tops) * len(bottoms) > pair_cap
    if truncated:
        top_k, bottom_k = truncation_limits(len(tops), len(bottoms), pair_cap)
        tops = _select_top_k(tops, top_k, context)
        bottoms = _select_top_k(bottoms, bottom_k, context)
        log_event(
            logger,
            logging.INFO,
            "skeletons_truncated",
            cap=cap,
            layer_variants=len(layer_variants),
            top_count=counts[TOP],
            bottom_count=counts[BOTTOM],
            kept_tops=len(tops),
            kept_bottoms=len(bottoms),
        )

    candidates: List[OutfitCandidate] = []
    seen = set()
    for top in tops:
        for bottom in bottoms:
            for layered in layer_variants:
                chosen: List[ClothingItem] = [top, bottom]
                if layered:
                    outer = _best_attachment(outerwear_pool, chosen, context, config)
                    if outer is not None:
                        chosen.append(outer)
                shoes = _best_attachment(footwear_pool, chosen, context, config)
                if shoes is not None:
                    chosen.append(shoes)
                chosen.extend(_attach_accessories(grouped[ACCESSORY], chosen, config))

                candidate = OutfitCandidate(items=tuple(chosen))
                if candidate.identity in seen:
                    continue
                seen.add(candidate.identity)
                candidates.append(candidate)

    diagnostics: Dict[str, object] = {
        "filters": filter_results["steps"],
        "removed": filter_results["reasons"],
        "counts": counts,
        "skeletons": len(candidates),
        "outerwear_variants": [("layered" if layered else "bare") for layered in layer_variants],
        "footwear_rule_active": footwear_rule_active,
    }
    logger.info("Generated %s outfit skeletons (truncated=%s)", len(candidates), truncated)
    return GenerationResult(
        candidates=candidates,
        truncated=truncated,
        required_categories=requirements.required_categories(footwear_rule_active),
        notices=notices,
        diagnostics=diagnostics,
    )


__all__ = [
    "generate_candidates",
    "truncation_limits",
    "pre_score",
    "GenerationResult",
    "REQUIRED_CATEGORIES",
]
