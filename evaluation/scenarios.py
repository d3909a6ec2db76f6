"""Evaluation scenarios exercising weather bands, occasions and catalog sizes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from tools.weather_provider import WeatherReport


@dataclass
class EvaluationScenario:
    name: str
    description: str
    location: str
    target_date: date
    weather: WeatherReport
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    occasion: Optional[str] = None
    max_skeletons: int = 200
    max_results: int = 5
    tags: List[str] = field(default_factory=list)


def _wardrobe_fixtures() -> List[Dict[str, object]]:
    return [
        {
            "item_id": "top_oxford",
            "category": "top",
            "subtype": "oxford shirt",
            "colors": ["light blue"],
            "occasion_tags": ["business"],
            "warmth_level": 1,
        },
        {
            "item_id": "top_tee",
            "category": "top",
            "subtype": "tee",
            "colors": ["white"],
            "occasion_tags": ["casual", "athletic"],
            "seasons": ["spring", "summer"],
            "warmth_level": 0,
        },
        {
            "item_id": "top_sweater",
            "category": "top",
            "subtype": "sweater",
            "colors": ["gray"],
            "occasion_tags": ["casual"],
            "seasons": ["fall", "winter"],
            "warmth_level": 2,
        },
        {
            "item_id": "bottom_chinos",
            "category": "bottom",
            "subtype": "chinos",
            "colors": ["khaki"],
            "occasion_tags": ["business", "casual"],
        },
        {
            "item_id": "bottom_shorts",
            "category": "bottom",
            "subtype": "shorts",
            "colors": ["navy"],
            "occasion_tags": ["casual", "athletic"],
            "seasons": ["summer"],
            "warmth_level": 0,
        },
        {
            "item_id": "bottom_wool_trousers",
            "category": "bottom",
            "subtype": "trousers",
            "colors": ["charcoal"],
            "occasion_tags": ["business", "formal"],
            "seasons": ["fall", "winter"],
            "warmth_level": 2,
        },
        {
            "item_id": "outer_wool_coat",
            "category": "outerwear",
            "subtype": "coat",
            "colors": ["navy"],
            "occasion_tags": ["business", "formal"],
            "seasons": ["fall", "winter"],
            "warmth_level": 3,
        },
        {
            "item_id": "outer_rain_shell",
            "category": "outerwear",
            "subtype": "rain jacket",
            "colors": ["yellow"],
            "condition_tags": ["rain"],
            "warmth_level": 1,
        },
        {
            "item_id": "shoes_sneakers",
            "category": "shoes",
            "subtype": "sneakers",
            "colors": ["white"],
            "occasion_tags": ["casual", "athletic"],
        },
        {
            "item_id": "shoes_boots",
            "category": "footwear",
            "subtype": "chelsea boots",
            "colors": ["brown"],
        },
        {
            "item_id": "acc_scarf",
            "category": "accessory",
            "subtype": "scarf",
            "colors": ["beige"],
            "seasons": ["fall", "winter"],
        },
    ]


def _stress_wardrobe() -> List[Dict[str, object]]:
    colors = ["navy", "white", "gray", "black", "beige"]
    items: List[Dict[str, object]] = []
    for index in range(50):
        items.append({"item_id": f"top_{index:02d}", "category": "top", "colors": [colors[index % 5]]})
        items.append({"item_id": f"bottom_{index:02d}", "category": "bottom", "colors": [colors[(index + 2) % 5]]})
    return items


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="winter_business_day",
        description="Cold office day requires the warm coat on every outfit.",
        location="Amsterdam",
        target_date=date(2025, 1, 14),
        weather=WeatherReport(temperature_c=2.0, condition="clear"),
        occasion="business",
        wardrobe_items=_wardrobe_fixtures(),
        expectations={"min_outfits": 1, "requires_category": "outerwear", "all_outfits_include": "outer_wool_coat"},
    ),
    EvaluationScenario(
        name="summer_casual_weekend",
        description="Hot weekend keeps heavy pieces out.",
        location="Lisbon",
        target_date=date(2025, 7, 12),
        weather=WeatherReport(temperature_c=29.0, condition="clear"),
        occasion="casual",
        wardrobe_items=_wardrobe_fixtures(),
        expectations={"min_outfits": 1, "excludes_item": "outer_wool_coat"},
    ),
    EvaluationScenario(
        name="rainy_commute",
        description="Rain steers footwear toward the boots.",
        location="London",
        target_date=date(2025, 10, 8),
        weather=WeatherReport(temperature_c=13.0, condition="rain"),
        wardrobe_items=_wardrobe_fixtures(),
        expectations={"min_outfits": 1, "all_outfits_include": "shoes_boots"},
    ),
    EvaluationScenario(
        name="large_wardrobe_truncation",
        description="A 50x50 wardrobe is bounded by the skeleton cap.",
        location="Berlin",
        target_date=date(2025, 4, 20),
        weather=WeatherReport(temperature_c=16.0, condition="clear"),
        wardrobe_items=_stress_wardrobe(),
        expectations={"min_outfits": 5, "truncated": True},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
