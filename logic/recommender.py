"""Outfit recommendation pipeline: normalize, generate, score and rank."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from logic.candidate_generator import generate_candidates
from logic.normalizer import normalize_catalog
from logic.outfit_scoring import rank_outfits
from models.clothing_item import ClothingItem
from models.context import Context, RecommendOptions
from models.outfit import RecommendationResult
from stylesync.config import EngineConfig
from stylesync.logging_config import log_event

logger = logging.getLogger(__name__)


def recommend(
    catalog: Iterable[Union[Mapping[str, Any], ClothingItem]],
    context: Context,
    options: Optional[RecommendOptions] = None,
    config: Optional[EngineConfig] = None,
) -> RecommendationResult:
    """Return the best outfits from ``catalog`` for ``context``.

    Invalid records are skipped and reported in ``skipped_items``. Raises
    :class:`models.errors.InsufficientWardrobeError` when no top or no bottom
    survives filtering. The catalog is never mutated.
    """

    config = config or EngineConfig()
    options = options or RecommendOptions(
        max_results=config.default_max_results, max_skeletons=config.default_max_skeletons
    )

    normalized = normalize_catalog(catalog)
    generation = generate_candidates(normalized.items, context, config, max_skeletons=options.max_skeletons)
    outfits = rank_outfits(
        generation.candidates,
        context,
        config,
        max_results=options.max_results,
        required_categories=generation.required_categories,
    )

    log_event(
        logger,
        logging.INFO,
        "recommendation_completed",
        catalog_size=len(normalized.items) + len(normalized.invalid),
        skipped=len(normalized.invalid),
        skeletons=len(generation.candidates),
        returned=len(outfits),
        truncated=generation.truncated,
        best_score=outfits[0].score if outfits else None,
    )
    return RecommendationResult(
        outfits=outfits,
        truncated=generation.truncated,
        skipped_items=dict(normalized.invalid),
        notices=list(generation.notices),
    )


__all__ = ["recommend"]
