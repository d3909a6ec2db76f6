"""Deterministic context synthesizer combining weather, date and occasion."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from models.context import Context
from models.taxonomy import FOOTWEAR, OUTERWEAR

_NORTHERN_SEASONS: Dict[int, str] = {
    12: "winter",
    1: "winter",
    2: "winter",
    3: "spring",
    4: "spring",
    5: "spring",
    6: "summer",
    7: "summer",
    8: "summer",
    9: "fall",
    10: "fall",
    11: "fall",
}
_OPPOSITE_SEASON = {"winter": "summer", "summer": "winter", "spring": "fall", "fall": "spring"}

ADVERSE_CONDITIONS = {"rain", "snow", "wind", "extreme"}
FOOTWEAR_CONDITIONS = {"rain", "snow"}


@dataclass(frozen=True)
class WeatherRequirements:
    """Outfit-level obligations derived from the weather in a context."""

    outerwear_required: bool
    min_outerwear_warmth: int
    footwear_condition: Optional[str]
    adverse_weather: bool
    exclude_heavy_items: bool

    def required_categories(self, footwear_rule_active: bool) -> List[str]:
        required = ["top", "bottom"]
        if self.outerwear_required:
            required.append(OUTERWEAR)
        if footwear_rule_active:
            required.append(FOOTWEAR)
        return required


def season_for_date(on_date: date, hemisphere: str = "north") -> str:
    """Return the meteorological season for ``on_date``."""

    season = _NORTHERN_SEASONS[on_date.month]
    if hemisphere == "south":
        return _OPPOSITE_SEASON[season]
    return season


def derive_requirements(
    context: Context,
    cold_threshold_c: float = 10.0,
    hot_threshold_c: float = 25.0,
    min_outerwear_warmth: int = 2,
) -> WeatherRequirements:
    """Translate temperature bands and condition into outfit requirements."""

    return WeatherRequirements(
        outerwear_required=context.temperature_c < cold_threshold_c,
        min_outerwear_warmth=min_outerwear_warmth,
        footwear_condition=context.condition if context.condition in FOOTWEAR_CONDITIONS else None,
        adverse_weather=context.condition in ADVERSE_CONDITIONS,
        exclude_heavy_items=context.temperature_c > hot_threshold_c,
    )


def synthesize_context(
    temperature_c: float,
    condition: str,
    occasion: Optional[str] = None,
    season: Optional[str] = None,
    on_date: Optional[date] = None,
    hemisphere: str = "north",
) -> Context:
    """Build a :class:`Context`, deriving the season from the date when absent."""

    if not season:
        season = season_for_date(on_date or date.today(), hemisphere)
    return Context(temperature_c=temperature_c, condition=condition, season=season, occasion=occasion)


__all__ = [
    "WeatherRequirements",
    "season_for_date",
    "derive_requirements",
    "synthesize_context",
]
