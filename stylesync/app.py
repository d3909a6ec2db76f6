"""StyleSync application bootstrap."""

from __future__ import annotations

from datetime import date as dt_date
import logging
from typing import Any, Dict, List, Mapping, Optional

from logic.context_synthesizer import synthesize_context
from logic.normalizer import normalize_item
from logic.recommender import recommend
from logic.validation import RecommendationResponse
from models.clothing_item import ClothingItem
from models.context import RecommendOptions
from models.errors import InsufficientWardrobeError
from stylesync.config import AppConfig
from stylesync.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.observability import instrument_operation
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.weather_provider import OpenWeatherProvider, WeatherProvider, WeatherReport


LOGGER = get_logger(__name__)


class StyleSyncApp:
    """Wires the item store, the weather source and the outfit engine together."""

    def __init__(
        self,
        config: AppConfig | None = None,
        wardrobe_store: WardrobeStore | None = None,
        weather_provider: WeatherProvider | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()
        self.wardrobe_store = wardrobe_store or SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.weather_provider = weather_provider or OpenWeatherProvider(api_key=self.config.weather_api_key)

    def add_item(self, user_id: str, record: Mapping[str, Any]) -> ClothingItem:
        """Normalise a raw record and persist it; raises ``InvalidItemError``."""

        item = normalize_item(record)
        return self.wardrobe_store.create_item(user_id, item)

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        return self.wardrobe_store.get_item(user_id, item_id)

    def list_items(self, user_id: str) -> List[ClothingItem]:
        return self.wardrobe_store.list_items_for_user(user_id)

    def update_item(self, user_id: str, item_id: str, fields: Mapping[str, Any]) -> Optional[ClothingItem]:
        return self.wardrobe_store.update_item(user_id, item_id, dict(fields))

    def delete_item(self, user_id: str, item_id: str) -> bool:
        return self.wardrobe_store.delete_item(user_id, item_id)

    def _resolve_weather(self, location: Optional[str], weather: Optional[WeatherReport]) -> WeatherReport:
        if weather is not None:
            return weather
        location = location or self.config.default_location
        if not location:
            raise ValueError("either weather or a location is required")
        return self.weather_provider.get_current(location)

    @instrument_operation("recommend_for_user")
    def recommend_for_user(
        self,
        user_id: str,
        location: Optional[str] = None,
        weather: Optional[WeatherReport] = None,
        occasion: Optional[str] = None,
        season: Optional[str] = None,
        on_date: Optional[dt_date] = None,
        options: Optional[RecommendOptions] = None,
    ) -> RecommendationResponse:
        """Run the outfit engine over the user's stored wardrobe.

        A wardrobe that cannot form an outfit yields an advisory
        ``needs_more_items`` response rather than an error.
        """

        with operation_context("recommend_for_user", user_id=user_id) as correlation_id:
            report = self._resolve_weather(location, weather)
            context = synthesize_context(
                temperature_c=report.temperature_c,
                condition=report.condition,
                occasion=occasion,
                season=season,
                on_date=on_date,
                hemisphere=self.config.hemisphere,
            )
            context_view: Dict[str, Any] = {
                "temperature_c": context.temperature_c,
                "condition": context.condition,
                "occasion": context.occasion,
                "season": context.season,
            }
            catalog = self.wardrobe_store.list_records_for_user(user_id)
            options = options or RecommendOptions(
                max_results=self.config.engine.default_max_results,
                max_skeletons=self.config.engine.default_max_skeletons,
            )

            try:
                result = recommend(catalog, context, options, self.config.engine)
            except InsufficientWardrobeError as exc:
                log_event(
                    LOGGER,
                    logging.INFO,
                    "recommendation_needs_more_items",
                    correlation_id=correlation_id,
                    missing_categories=exc.missing_categories,
                )
                return RecommendationResponse(
                    status="needs_more_items",
                    message=str(exc),
                    minimum_counts=exc.minimum_counts,
                    context=context_view,
                )
            return RecommendationResponse.from_result(result, context_view)


__all__ = ["StyleSyncApp"]
