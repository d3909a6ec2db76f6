"""Deterministic scoring and ranking for candidate outfits."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from logic.context_synthesizer import derive_requirements
from models.clothing_item import ClothingItem
from models.color_theory import ColorAffinityTable, IDENTICAL_AFFINITY
from models.context import Context
from models.outfit import OutfitCandidate, ScoreRationale
from stylesync.config import EngineConfig

SCORE_PRECISION = 6


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def color_harmony(
    items: Sequence[ClothingItem], table: ColorAffinityTable
) -> Tuple[float, List[Tuple[str, str, float]]]:
    """Average affinity over every pair of distinct dominant colors.

    A single-color outfit has nothing to penalise and scores 1.0.
    """

    pairs = table.pairwise([item.dominant_color for item in items])
    if not pairs:
        return IDENTICAL_AFFINITY, pairs
    return _clamp(sum(value for _, _, value in pairs) / len(pairs)), pairs


def coverage(items: Sequence[ClothingItem], required_categories: Sequence[str]) -> Tuple[float, List[str]]:
    present = {item.category for item in items}
    missing = [category for category in required_categories if category not in present]
    if not required_categories:
        return 1.0, missing
    return _clamp(1.0 - len(missing) / len(required_categories)), missing


def occasion_credit(item: ClothingItem, occasion: Optional[str], unconstrained_credit: float = 0.5) -> float:
    """Explicit tags earn full credit, untagged items only partial credit."""

    if occasion is None:
        return 1.0
    if occasion in item.occasion_tags:
        return 1.0
    if not item.occasion_tags:
        return unconstrained_credit
    return 0.0


def occasion_fit(items: Sequence[ClothingItem], occasion: Optional[str], unconstrained_credit: float = 0.5) -> float:
    if not items:
        return 0.0
    return _clamp(sum(occasion_credit(item, occasion, unconstrained_credit) for item in items) / len(items))


def default_required_categories(context: Context, config: EngineConfig) -> List[str]:
    requirements = derive_requirements(
        context,
        cold_threshold_c=config.cold_threshold_c,
        hot_threshold_c=config.hot_threshold_c,
        min_outerwear_warmth=config.min_outerwear_warmth,
    )
    return requirements.required_categories(footwear_rule_active=requirements.footwear_condition is not None)


def score_outfit(
    candidate: OutfitCandidate,
    context: Context,
    config: Optional[EngineConfig] = None,
    required_categories: Optional[Sequence[str]] = None,
) -> OutfitCandidate:
    """Return ``candidate`` with its composite score and rationale filled in."""

    config = config or EngineConfig()
    if required_categories is None:
        required_categories = default_required_categories(context, config)
    weights = config.weights

    harmony_val, pairs = color_harmony(candidate.items, config.affinity_table)
    coverage_val, missing = coverage(candidate.items, required_categories)
    occasion_val = occasion_fit(candidate.items, context.occasion, config.unconstrained_occasion_credit)

    composite = _clamp(
        harmony_val * weights["color_harmony"]
        + coverage_val * weights["coverage"]
        + occasion_val * weights["occasion_fit"]
    )
    rationale = ScoreRationale(
        color_harmony=round(harmony_val, SCORE_PRECISION),
        coverage=round(coverage_val, SCORE_PRECISION),
        occasion_fit=round(occasion_val, SCORE_PRECISION),
        weights=dict(weights),
        color_pairs=[(c1, c2, round(value, SCORE_PRECISION)) for c1, c2, value in pairs],
        missing_categories=missing,
    )
    return candidate.with_score(round(composite, SCORE_PRECISION), rationale)


def _id_sum_key(item_ids: Iterable[str]) -> Tuple[int, object]:
    """Sum numeric ids; fall back to the sorted id tuple for opaque ids."""

    item_ids = list(item_ids)
    try:
        return 0, sum(int(item_id) for item_id in item_ids)
    except ValueError:
        return 1, tuple(sorted(item_ids))


def ranking_key(candidate: OutfitCandidate) -> Tuple[float, int, Tuple[int, object]]:
    """Score descending, then fewer items, then lower id sum."""

    return -(candidate.score or 0.0), len(candidate.items), _id_sum_key(candidate.item_ids)


def _outfit_name(context: Context, rank: int) -> str:
    label = context.occasion or context.season
    return f"{label.capitalize()} look #{rank}"


def rank_outfits(
    candidates: Sequence[OutfitCandidate],
    context: Context,
    config: Optional[EngineConfig] = None,
    max_results: Optional[int] = None,
    required_categories: Optional[Sequence[str]] = None,
) -> List[OutfitCandidate]:
    """Score, deduplicate and sort candidates, returning at most ``max_results``."""

    config = config or EngineConfig()
    limit = max_results if max_results is not None else config.default_max_results
    seen = set()
    scored: List[OutfitCandidate] = []
    for candidate in candidates:
        if candidate.identity in seen:
            continue
        seen.add(candidate.identity)
        scored.append(score_outfit(candidate, context, config, required_categories))
    scored.sort(key=ranking_key)
    top = scored[: max(0, limit)]
    return [
        outfit.with_score(outfit.score, outfit.rationale, _outfit_name(context, rank))
        for rank, outfit in enumerate(top, start=1)
    ]


__all__ = [
    "color_harmony",
    "coverage",
    "occasion_credit",
    "occasion_fit",
    "score_outfit",
    "rank_outfits",
    "ranking_key",
    "SCORE_PRECISION",
]
