"""Taxonomy and attribute normalizer tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.normalizer import normalize_catalog, normalize_item
from models import taxonomy
from models.errors import InvalidItemError


@pytest.fixture()
def sample_record() -> Dict[str, object]:
    return {
        "item_id": "item-1",
        "category": "Top",
        "subtype": "Blouse",
        "colors": ["navy blue", "White"],
        "seasons": ["Autumn", "winter"],
        "occasion_tags": ["Work", "casual"],
        "warmth_level": 2,
        "image_url": "https://example.com/blouse.jpg",
    }


def test_taxonomy_contains_expected_categories() -> None:
    assert taxonomy.CATEGORIES == ["top", "bottom", "outerwear", "footwear", "accessory"]
    assert taxonomy.canonical_category("Shoes") == "footwear"
    assert taxonomy.canonical_category("Outerwear") == "outerwear"
    assert taxonomy.canonical_category("Casual") is None


def test_normalize_color_name_handles_variants() -> None:
    assert taxonomy.normalize_color_name("navy blue") == "navy"
    assert taxonomy.normalize_color_name("Light Blue") == "blue"
    assert taxonomy.normalize_color_name("off-white") == "white"
    assert taxonomy.normalize_color_name("Teal") == "teal"


def test_normalize_item_canonicalises_fields(sample_record: Dict[str, object]) -> None:
    item = normalize_item(sample_record)
    assert item.item_id == "item-1"
    assert item.category == "top"
    assert item.subtype == "Blouse"
    assert item.colors == ("navy", "white")
    assert item.dominant_color == "navy"
    assert item.seasons == frozenset({"fall", "winter"})
    assert item.occasion_tags == frozenset({"business", "casual"})
    assert item.warmth_level == 2


@pytest.mark.parametrize(
    "category, expected",
    [("outerwear", 2), ("footwear", 1), ("top", 1), ("bottom", 1), ("accessory", 0)],
)
def test_missing_warmth_is_inferred_from_category(category: str, expected: int) -> None:
    assert normalize_item({"item_id": "x", "category": category}).warmth_level == expected


def test_partial_record_degrades_to_permissive_defaults() -> None:
    item = normalize_item({"id": "42", "category": "bottom", "warmth_level": "lots"})
    assert item.item_id == "42"
    assert item.colors == ("neutral",)
    assert item.seasons == frozenset()
    assert item.occasion_tags == frozenset()
    assert item.warmth_level == 1


def test_original_record_shape_is_accepted() -> None:
    item = normalize_item(
        {"_id": "abc", "name": "Linen shirt", "category": "top", "color": "cream, tan", "season": "all", "pattern": "striped"}
    )
    assert item.item_id == "abc"
    assert item.colors == ("beige",)
    assert item.seasons == frozenset()
    assert item.name == "Linen shirt"
    assert item.pattern == "striped"


def test_warmth_is_clamped_and_unknown_tags_dropped() -> None:
    item = normalize_item(
        {"item_id": "x", "category": "outerwear", "warmth_level": 9, "seasons": ["monsoon"], "occasion_tags": ["wedding"]}
    )
    assert item.warmth_level == 3
    assert item.seasons == frozenset()
    assert item.occasion_tags == frozenset()


def test_footwear_condition_defaults() -> None:
    boots = normalize_item({"item_id": "b", "category": "footwear", "subtype": "Rain boots"})
    sneakers = normalize_item({"item_id": "s", "category": "footwear", "subtype": "sneakers"})
    insulated = normalize_item({"item_id": "i", "category": "footwear", "warmth_level": 2})
    tagged_off = normalize_item({"item_id": "t", "category": "footwear", "subtype": "boots", "condition_tags": []})
    assert boots.condition_tags == frozenset({"rain", "snow"})
    assert sneakers.condition_tags == frozenset()
    assert insulated.condition_tags == frozenset({"rain", "snow"})
    assert tagged_off.condition_tags == frozenset()


def test_missing_id_gets_stable_content_id() -> None:
    record = {"category": "accessory", "colors": ["gold"]}
    first = normalize_item(record)
    second = normalize_item(dict(record))
    assert first.item_id.startswith("anon-")
    assert first.item_id == second.item_id


@pytest.mark.parametrize("record", [{"item_id": "x"}, {"item_id": "x", "category": ""}, {"item_id": "x", "category": "Casual"}])
def test_invalid_category_raises(record: Dict[str, object]) -> None:
    with pytest.raises(InvalidItemError) as excinfo:
        normalize_item(record)
    assert excinfo.value.item_id == "x"


def test_canonical_record_normalises_to_itself(sample_record: Dict[str, object]) -> None:
    item = normalize_item(sample_record)
    assert normalize_item(item.to_record()) == item


def test_normalize_catalog_collects_invalid_records() -> None:
    result = normalize_catalog(
        [
            {"item_id": "ok", "category": "top"},
            {"item_id": "bad", "category": "hat-stand"},
            {"colors": ["red"]},
            "not a record",
        ]
    )
    assert [item.item_id for item in result.items] == ["ok"]
    assert set(result.invalid) == {"bad", "#2", "#3"}
    assert "category" in result.invalid["#2"]


@pytest.mark.parametrize("warmth", ["inf", "-inf", "1e999", float("inf"), float("nan"), "nan", ["2"], {"level": 2}])
def test_non_finite_or_odd_warmth_falls_back_to_category_default(warmth: object) -> None:
    item = normalize_item({"item_id": "coat", "category": "outerwear", "warmth_level": warmth})
    assert item.warmth_level == taxonomy.DEFAULT_WARMTH["outerwear"]


def test_record_without_id_and_mixed_key_types_still_gets_an_id() -> None:
    record = {"category": "accessory", 1: "x", "colors": ["gold"]}
    first = normalize_item(record)
    assert first.item_id.startswith("anon-")
    assert normalize_item(dict(record)).item_id == first.item_id


def test_hostile_optional_fields_never_abort_the_catalog() -> None:
    result = normalize_catalog(
        [
            {"item_id": "a", "category": "top", "warmth_level": "1e999"},
            {"category": "accessory", 2: {"nested": {3: "x", "k": "y"}}},
            {"item_id": "c", "category": "bottom", "colors": [None, 7], "seasons": {"summer": True}},
        ]
    )
    assert [item.category for item in result.items] == ["top", "accessory", "bottom"]
    assert result.invalid == {}
