"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import ClothingItem
from models.context import Context, RecommendOptions
from models.errors import InsufficientWardrobeError, InvalidItemError
from models.outfit import OutfitCandidate, RecommendationResult, ScoreRationale

__all__ = [
    "ClothingItem",
    "Context",
    "RecommendOptions",
    "InsufficientWardrobeError",
    "InvalidItemError",
    "OutfitCandidate",
    "RecommendationResult",
    "ScoreRationale",
]
