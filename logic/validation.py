"""Pydantic schemas and helpers for validating service IO payloads."""

from __future__ import annotations

from datetime import date as dt_date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from models.outfit import OutfitCandidate, RecommendationResult


class ItemPayload(BaseModel):
    """Loose item record accepted from manual entry.

    Only ``category`` is mandatory; the normalizer fills in the rest.
    """

    item_id: Optional[str] = None
    category: str = Field(min_length=1)
    subtype: Optional[str] = None
    name: Optional[str] = None
    colors: List[str] = []
    seasons: List[str] = []
    occasion_tags: List[str] = []
    condition_tags: Optional[List[str]] = None
    warmth_level: Optional[int] = None
    pattern: Optional[str] = None
    image_url: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ItemUpdatePayload(BaseModel):
    """Partial attribute update; fields left out keep their stored value."""

    category: Optional[str] = None
    subtype: Optional[str] = None
    name: Optional[str] = None
    colors: Optional[List[str]] = None
    seasons: Optional[List[str]] = None
    occasion_tags: Optional[List[str]] = None
    condition_tags: Optional[List[str]] = None
    warmth_level: Optional[int] = None
    pattern: Optional[str] = None
    image_url: Optional[str] = None

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class WeatherInput(BaseModel):
    temperature_c: float
    condition: str = "clear"


class RecommendationRequest(BaseModel):
    """Envelope for one recommendation call.

    Either explicit ``weather`` or a ``location`` for the weather source is
    required.
    """

    user_id: str = Field(min_length=1)
    location: Optional[str] = None
    weather: Optional[WeatherInput] = None
    occasion: Optional[str] = None
    season: Optional[str] = None
    date: Optional[dt_date] = None
    max_results: int = Field(default=5, ge=1, le=50)
    max_skeletons: int = Field(default=200, ge=1, le=5000)

    @model_validator(mode="after")
    def _require_weather_source(self) -> "RecommendationRequest":
        if self.weather is None and not self.location:
            raise ValueError("either weather or location must be provided")
        return self


class OutfitView(BaseModel):
    name: Optional[str]
    item_ids: List[str]
    items: List[Dict[str, Any]]
    score: float
    rationale: Dict[str, Any]

    @classmethod
    def from_candidate(cls, outfit: OutfitCandidate) -> "OutfitView":
        return cls.model_validate(outfit.to_dict())


class RecommendationResponse(BaseModel):
    status: Literal["ok", "needs_more_items"]
    outfits: List[OutfitView] = []
    truncated: bool = False
    skipped_items: Dict[str, str] = {}
    notices: List[str] = []
    message: Optional[str] = None
    minimum_counts: Dict[str, int] = {}
    context: Dict[str, Any] = {}

    @classmethod
    def from_result(cls, result: RecommendationResult, context: Dict[str, Any]) -> "RecommendationResponse":
        return cls(
            status="ok",
            outfits=[OutfitView.from_candidate(outfit) for outfit in result.outfits],
            truncated=result.truncated,
            skipped_items=result.skipped_items,
            notices=result.notices,
            context=context,
        )


__all__ = [
    "ItemPayload",
    "ItemUpdatePayload",
    "WeatherInput",
    "RecommendationRequest",
    "RecommendationResponse",
    "OutfitView",
]
