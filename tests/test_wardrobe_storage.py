"""SQLite item store tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.normalizer import normalize_item
from tools.wardrobe_store import SQLiteWardrobeStore


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore(tmp_path / "nested" / "wardrobe.db")


@pytest.fixture()
def boots():
    return normalize_item(
        {
            "item_id": "boots-1",
            "category": "shoes",
            "subtype": "Chelsea boots",
            "name": "Brown Chelsea boots",
            "colors": ["brown"],
            "seasons": ["fall", "winter"],
            "occasion_tags": ["casual"],
            "image_url": "https://example.com/boots.jpg",
        }
    )


def test_store_round_trips_items(store: SQLiteWardrobeStore, boots) -> None:
    store.create_item("user-1", boots)
    loaded = store.get_item("user-1", "boots-1")
    assert loaded == boots
    assert loaded.condition_tags == frozenset({"rain", "snow"})
    assert store.database_path.exists()


def test_items_are_scoped_per_user(store: SQLiteWardrobeStore, boots) -> None:
    store.create_item("user-1", boots)
    assert store.get_item("user-2", "boots-1") is None
    assert store.list_items_for_user("user-2") == []
    assert [item.item_id for item in store.list_items_for_user("user-1")] == ["boots-1"]


def test_list_is_ordered_by_item_id(store: SQLiteWardrobeStore) -> None:
    for item_id in ["c", "a", "b"]:
        store.create_item("user-1", normalize_item({"item_id": item_id, "category": "top"}))
    assert [item.item_id for item in store.list_items_for_user("user-1")] == ["a", "b", "c"]


def test_update_renormalises_fields(store: SQLiteWardrobeStore, boots) -> None:
    store.create_item("user-1", boots)
    updated = store.update_item("user-1", "boots-1", {"colors": ["Charcoal"], "warmth_level": 7})
    assert updated.colors == ("gray",)
    assert updated.warmth_level == 3
    assert store.get_item("user-1", "boots-1") == updated
    assert store.update_item("user-1", "missing", {"name": "x"}) is None


def test_category_cannot_change_in_place(store: SQLiteWardrobeStore, boots) -> None:
    store.create_item("user-1", boots)
    with pytest.raises(ValueError):
        store.update_item("user-1", "boots-1", {"category": "top"})
    assert store.update_item("user-1", "boots-1", {"category": "Footwear", "name": "Boots"}).name == "Boots"


def test_delete_reports_whether_anything_was_removed(store: SQLiteWardrobeStore, boots) -> None:
    store.create_item("user-1", boots)
    assert store.delete_item("user-1", "boots-1") is True
    assert store.delete_item("user-1", "boots-1") is False
    assert store.get_item("user-1", "boots-1") is None


def test_records_feed_back_into_the_normalizer(store: SQLiteWardrobeStore, boots) -> None:
    store.create_item("user-1", boots)
    (record,) = store.list_records_for_user("user-1")
    assert record["category"] == "footwear"
    assert normalize_item(record) == boots


def test_inferred_footwear_tags_follow_a_subtype_change(store: SQLiteWardrobeStore) -> None:
    store.create_item("user-1", normalize_item({"item_id": "s1", "category": "footwear", "subtype": "loafers"}))
    assert store.get_item("user-1", "s1").condition_tags == frozenset()

    updated = store.update_item("user-1", "s1", {"subtype": "rain boots"})
    assert updated.condition_tags == frozenset({"rain", "snow"})
    assert store.update_item("user-1", "s1", {"subtype": "loafers"}).condition_tags == frozenset()


def test_explicit_footwear_tags_survive_a_subtype_change(store: SQLiteWardrobeStore) -> None:
    store.create_item(
        "user-1",
        normalize_item({"item_id": "s2", "category": "footwear", "subtype": "sneakers", "condition_tags": ["rain"]}),
    )
    updated = store.update_item("user-1", "s2", {"subtype": "trail runners"})
    assert updated.condition_tags == frozenset({"rain"})
    assert store.update_item("user-1", "s2", {"condition_tags": []}).condition_tags == frozenset()
