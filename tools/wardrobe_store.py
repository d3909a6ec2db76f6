"""Item store abstractions and SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from logic.normalizer import normalize_item
from models.clothing_item import ClothingItem
from models.taxonomy import canonical_category
from tools.observability import instrument_operation


def _tags_were_derived(record: Dict[str, Any]) -> bool:
    inferred = normalize_item({key: value for key, value in record.items() if key != "condition_tags"})
    return set(record.get("condition_tags") or ()) == set(inferred.condition_tags)


class WardrobeStore:
    """Persistence interface for clothing items, scoped per user."""

    def create_item(self, user_id: str, item: ClothingItem) -> ClothingItem:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        raise NotImplementedError

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClothingItem]:
        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError

    def list_records_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Raw item records, the shape the recommendation engine consumes."""

        return [item.to_record() for item in self.list_items_for_user(user_id)]


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for clothing items."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    user_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    category TEXT NOT NULL,
                    subtype TEXT,
                    name TEXT,
                    colors TEXT NOT NULL,
                    seasons TEXT,
                    occasion_tags TEXT,
                    condition_tags TEXT,
                    warmth_level INTEGER NOT NULL,
                    pattern TEXT,
                    image_url TEXT,
                    PRIMARY KEY (user_id, item_id)
                );
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[object]) -> str:
        return json.dumps(sorted(values) if isinstance(values, frozenset) else list(values or []))

    @staticmethod
    def _deserialise_list(raw: str) -> List[str]:
        return json.loads(raw) if raw else []

    @instrument_operation("create_clothing_item")
    def create_item(self, user_id: str, item: ClothingItem) -> ClothingItem:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO clothing_items (
                    user_id, item_id, category, subtype, name, colors, seasons,
                    occasion_tags, condition_tags, warmth_level, pattern, image_url
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    item.item_id,
                    item.category,
                    item.subtype,
                    item.name,
                    self._serialise_list(item.colors),
                    self._serialise_list(item.seasons),
                    self._serialise_list(item.occasion_tags),
                    self._serialise_list(item.condition_tags),
                    item.warmth_level,
                    item.pattern,
                    item.image_url,
                ),
            )
        return item

    def _row_to_item(self, row: sqlite3.Row) -> ClothingItem:
        return ClothingItem(
            item_id=row["item_id"],
            category=row["category"],
            subtype=row["subtype"] or "",
            name=row["name"],
            colors=tuple(self._deserialise_list(row["colors"])),
            seasons=frozenset(self._deserialise_list(row["seasons"])),
            occasion_tags=frozenset(self._deserialise_list(row["occasion_tags"])),
            condition_tags=frozenset(self._deserialise_list(row["condition_tags"])),
            warmth_level=int(row["warmth_level"]),
            pattern=row["pattern"],
            image_url=row["image_url"],
        )

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            row = cursor.fetchone()
            return self._row_to_item(row) if row else None

    @instrument_operation("list_clothing_items")
    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY item_id",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClothingItem]:
        """Apply attribute updates; the category can only change by delete + recreate."""

        current = self.get_item(user_id, item_id)
        if not current:
            return None
        if "category" in updated_fields and canonical_category(updated_fields["category"]) != current.category:
            raise ValueError("category is immutable; delete the item and create a new one instead")

        stored = current.to_record()
        if "condition_tags" not in updated_fields and _tags_were_derived(stored):
            # Footwear tags inferred from subtype and warmth follow those fields.
            stored.pop("condition_tags")
        record = {**stored, **updated_fields, "item_id": item_id}
        validated = normalize_item(record)
        return self.create_item(user_id, validated)

    def delete_item(self, user_id: str, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            return cursor.rowcount > 0


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
