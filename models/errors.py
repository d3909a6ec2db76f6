"""Engine error taxonomy."""

from __future__ import annotations

from typing import Dict, List, Optional


class InvalidItemError(ValueError):
    """A raw item record cannot be turned into a :class:`ClothingItem`.

    Recoverable: the engine logs the record, lists its id in the result and
    keeps going with the rest of the catalog.
    """

    def __init__(self, reason: str, item_id: Optional[str] = None) -> None:
        self.item_id = item_id
        self.reason = reason
        label = f"item '{item_id}'" if item_id else "item"
        super().__init__(f"Invalid {label}: {reason}")


class InsufficientWardrobeError(ValueError):
    """Not enough items survive filtering to compose a single outfit."""

    def __init__(
        self,
        missing_categories: List[str],
        counts: Dict[str, int],
        minimum_counts: Optional[Dict[str, int]] = None,
    ) -> None:
        self.missing_categories = list(missing_categories)
        self.counts = dict(counts)
        self.minimum_counts = dict(minimum_counts or {category: 1 for category in missing_categories})
        hint = ", ".join(f"at least {count} {category}" for category, count in self.minimum_counts.items())
        super().__init__(f"Add more items to your wardrobe to get recommendations (need {hint})")

    def to_dict(self) -> Dict[str, object]:
        return {
            "message": str(self),
            "missing_categories": self.missing_categories,
            "counts": self.counts,
            "minimum_counts": self.minimum_counts,
        }


__all__ = ["InvalidItemError", "InsufficientWardrobeError"]
