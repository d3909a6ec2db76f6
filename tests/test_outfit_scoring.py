"""Compatibility scorer and ranker tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.normalizer import normalize_item
from logic.outfit_scoring import (
    color_harmony,
    coverage,
    occasion_fit,
    rank_outfits,
    ranking_key,
    score_outfit,
)
from models.color_theory import DEFAULT_TABLE
from models.context import Context
from models.outfit import OutfitCandidate
from stylesync.config import EngineConfig


def _item(item_id: str, category: str, color: str, **extra):
    return normalize_item({"item_id": item_id, "category": category, "colors": [color], **extra})


def _mild(occasion=None) -> Context:
    return Context(temperature_c=18, condition="clear", season="spring", occasion=occasion)


def test_single_color_outfit_scores_full_harmony() -> None:
    items = [_item("1", "top", "black"), _item("2", "bottom", "black")]
    score, pairs = color_harmony(items, DEFAULT_TABLE)
    assert score == 1.0
    assert pairs == []


def test_harmony_averages_pairwise_affinity() -> None:
    items = [_item("1", "top", "navy"), _item("2", "bottom", "white"), _item("3", "footwear", "black")]
    score, pairs = color_harmony(items, DEFAULT_TABLE)
    assert len(pairs) == 3
    assert score == pytest.approx((0.9 + 0.6 + 0.9) / 3)


def test_adding_clashing_color_strictly_lowers_harmony() -> None:
    base = [_item("1", "top", "red"), _item("2", "bottom", "black")]
    clashing = base + [_item("3", "accessory", "pink")]
    base_score, _ = color_harmony(base, DEFAULT_TABLE)
    clash_score, _ = color_harmony(clashing, DEFAULT_TABLE)
    assert clash_score < base_score


def test_coverage_reduces_linearly_per_missing_category() -> None:
    items = [_item("1", "top", "navy"), _item("2", "bottom", "gray")]
    assert coverage(items, ["top", "bottom"]) == (1.0, [])
    value, missing = coverage(items, ["top", "bottom", "outerwear"])
    assert value == pytest.approx(2 / 3)
    assert missing == ["outerwear"]
    value, missing = coverage(items, ["top", "bottom", "outerwear", "footwear"])
    assert value == pytest.approx(0.5)
    assert missing == ["outerwear", "footwear"]


def test_occasion_fit_rewards_explicit_tags() -> None:
    tagged = [_item("1", "top", "navy", occasion_tags=["business"]), _item("2", "bottom", "gray", occasion_tags=["business"])]
    generic = [_item("3", "top", "navy"), _item("4", "bottom", "gray")]
    mixed = [_item("5", "top", "navy", occasion_tags=["business"]), _item("6", "bottom", "gray", occasion_tags=["casual", "business"]), _item("7", "footwear", "black", occasion_tags=["athletic"])]
    assert occasion_fit(tagged, "business") == 1.0
    assert occasion_fit(generic, "business") == 0.5
    assert occasion_fit(mixed, "business") == pytest.approx(2 / 3)
    assert occasion_fit(generic, None) == 1.0


def test_score_outfit_records_rationale() -> None:
    candidate = OutfitCandidate(items=(_item("1", "top", "navy"), _item("2", "bottom", "white")))
    scored = score_outfit(candidate, _mild("casual"))
    assert scored.score == pytest.approx(0.5 * 0.9 + 0.2 * 1.0 + 0.3 * 0.5)
    assert scored.rationale.color_harmony == 0.9
    assert scored.rationale.coverage == 1.0
    assert scored.rationale.occasion_fit == 0.5
    assert scored.rationale.weights == {"color_harmony": 0.5, "coverage": 0.2, "occasion_fit": 0.3}
    assert scored.rationale.color_pairs == [("navy", "white", 0.9)]
    assert candidate.score is None


def test_score_is_bounded_and_uses_configured_weights() -> None:
    config = EngineConfig(weights={"color_harmony": 1.0, "coverage": 0.0, "occasion_fit": 0.0})
    candidate = OutfitCandidate(items=(_item("1", "top", "red"), _item("2", "bottom", "pink")))
    scored = score_outfit(candidate, _mild(), config)
    assert scored.score == pytest.approx(0.1)
    assert 0.0 <= scored.score <= 1.0


def test_cold_context_requires_outerwear_in_coverage() -> None:
    cold = Context(temperature_c=3, condition="clear", season="winter")
    candidate = OutfitCandidate(items=(_item("1", "top", "navy"), _item("2", "bottom", "navy")))
    scored = score_outfit(candidate, cold)
    assert scored.rationale.missing_categories == ["outerwear"]
    assert scored.rationale.coverage == pytest.approx(2 / 3, abs=1e-6)


def test_ties_prefer_fewer_items_then_lower_id_sum() -> None:
    top_a, top_b = _item("3", "top", "navy"), _item("1", "top", "navy")
    bottom = _item("2", "bottom", "navy")
    scarf = _item("9", "accessory", "navy")
    larger = OutfitCandidate(items=(top_b, bottom, scarf))
    high_ids = OutfitCandidate(items=(top_a, bottom))
    low_ids = OutfitCandidate(items=(top_b, bottom))

    ranked = rank_outfits([larger, high_ids, low_ids], _mild())
    assert [outfit.item_ids for outfit in ranked] == [["1", "2"], ["3", "2"], ["1", "2", "9"]]
    assert ranked[0].score == ranked[1].score == ranked[2].score
    assert ranking_key(ranked[0]) < ranking_key(ranked[1])


def test_rank_outfits_limits_deduplicates_and_names() -> None:
    bottom = _item("b", "bottom", "white")
    tops = [_item(f"t{i}", "top", color) for i, color in enumerate(["navy", "black", "gray", "red", "blue", "green", "pink"])]
    candidates = [OutfitCandidate(items=(top, bottom)) for top in tops]
    candidates.append(OutfitCandidate(items=(bottom, tops[0])))

    ranked = rank_outfits(candidates, _mild("casual"), max_results=5)
    assert len(ranked) == 5
    assert len({tuple(outfit.identity) for outfit in ranked}) == 5
    assert [outfit.score for outfit in ranked] == sorted((outfit.score for outfit in ranked), reverse=True)
    assert ranked[0].name == "Casual look #1"

    assert len(rank_outfits(candidates[:2], _mild(), max_results=5)) == 2
