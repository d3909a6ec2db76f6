"""Weather source abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

import requests
from pydantic import BaseModel, ValidationError

from tools.observability import instrument_operation


LOGGER = logging.getLogger(__name__)

# Beaufort 6 ("strong breeze") and above counts as windy.
WINDY_SPEED_MS = 10.8

_CONDITION_BY_GROUP = {
    "thunderstorm": "extreme",
    "drizzle": "rain",
    "rain": "rain",
    "snow": "snow",
    "tornado": "extreme",
    "squall": "extreme",
    "clear": "clear",
    "clouds": "clear",
}


class _WeatherCondition(BaseModel):
    main: str = "Clear"
    description: str = "unknown"


class _Wind(BaseModel):
    speed: float = 0.0


class _Main(BaseModel):
    temp: float


class _CurrentWeatherResponse(BaseModel):
    main: _Main
    wind: _Wind = _Wind()
    weather: List[_WeatherCondition] = []


@dataclass
class WeatherReport:
    """Current conditions as the engine consumes them."""

    temperature_c: float
    condition: str
    wind_speed: float = 0.0
    description: str = ""


def condition_from_openweather(group: str, wind_speed: float) -> str:
    """Map an OpenWeather condition group and wind speed onto engine conditions."""

    condition = _CONDITION_BY_GROUP.get(group.strip().lower(), "clear")
    if condition == "clear" and wind_speed >= WINDY_SPEED_MS:
        return "wind"
    return condition


class WeatherProvider(ABC):
    """Abstract weather source interface."""

    @abstractmethod
    def get_current(self, location: str) -> WeatherReport:
        """Return the current conditions for ``location``."""


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather provider with schema validation and graceful fallbacks."""

    url = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0, units: str = "metric") -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.units = units

    def _fallback_report(self, reason: str) -> WeatherReport:
        LOGGER.warning("Using fallback weather report", extra={"reason": reason})
        return WeatherReport(temperature_c=15.0, condition="clear", description="fallback")

    @instrument_operation("get_current_weather")
    def get_current(self, location: str) -> WeatherReport:
        if not location:
            raise ValueError("location is required for weather lookups")

        if not self.api_key:
            return self._fallback_report("missing_api_key")

        LOGGER.info("Fetching current weather", extra={"location": location})
        params = {
            "q": location,
            "appid": self.api_key,
            "units": self.units,
        }

        try:
            response = requests.get(self.url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _CurrentWeatherResponse.model_validate(response.json())
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return self._fallback_report("request_error")
        except ValidationError as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return self._fallback_report("schema_validation")

        group = parsed.weather[0].main if parsed.weather else "Clear"
        description = parsed.weather[0].description if parsed.weather else "unknown"
        return WeatherReport(
            temperature_c=parsed.main.temp,
            condition=condition_from_openweather(group, parsed.wind.speed),
            wind_speed=parsed.wind.speed,
            description=description,
        )


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests."""

    def __init__(self, report: WeatherReport | None = None) -> None:
        self.report = report or WeatherReport(temperature_c=18.0, condition="clear", description="mock")
        self.calls: List[str] = []

    def get_current(self, location: str) -> WeatherReport:
        LOGGER.info("Returning mock weather", extra={"location": location})
        self.calls.append(location)
        return self.report


__all__ = [
    "WeatherReport",
    "WeatherProvider",
    "OpenWeatherProvider",
    "MockWeatherProvider",
    "condition_from_openweather",
]
