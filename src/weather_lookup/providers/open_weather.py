"""OpenWeather (api.openweathermap.org) provider implementation."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from typing import Any

from ..exceptions import ForecastNotAvailable, ForecastNotFound
from ..forecast import Forecast
from .base import WeatherProvider, extract, format_display_date, require_float, require_str

MIN_FORECAST_OFFSET = 1
MAX_FORECAST_OFFSET = 5
ABSOLUTE_ZERO_CELSIUS = 273.15


def kelvin_to_celsius(kelvin: float) -> float:
    """Convert Kelvin to Celsius rounded to two decimals, halves away from zero."""
    hundredths = (kelvin - ABSOLUTE_ZERO_CELSIUS) * 100
    # + 0.0 turns a rounded -0.0 into 0.0
    return math.copysign(math.floor(abs(hundredths) + 0.5), hundredths) / 100 + 0.0


def timestamp_to_date(seconds: int) -> date:
    return datetime.fromtimestamp(seconds, UTC).date()


class OpenWeatherProvider(WeatherProvider):
    """Current weather and the 5-day / 3-hour forecast from OpenWeather."""

    provider_name = "OpenWeather"
    default_base_url = "https://api.openweathermap.org/data/2.5"

    def get_weather(self, address: str, forecast_date: date | None = None) -> Forecast:
        if forecast_date is None:
            payload = self._request_json(
                f"{self.base_url}/weather",
                {"q": address, "appid": self.api_key},
            )
            return self._parse_entry(payload)

        self.check_window(forecast_date)
        payload = self._request_json(
            f"{self.base_url}/forecast",
            {"q": address, "appid": self.api_key},
        )
        return self._parse_entry(self._find_entry(payload, forecast_date))

    def check_window(self, forecast_date: date) -> None:
        offset = (forecast_date - self._today()).days
        if not MIN_FORECAST_OFFSET <= offset <= MAX_FORECAST_OFFSET:
            raise ForecastNotAvailable(self.provider_name, format_display_date(forecast_date))

    @staticmethod
    def _find_entry(payload: Any, forecast_date: date) -> Any:
        # First 3-hour slot on the requested UTC day wins, whatever its time of day.
        entries = extract(payload, "list")
        if isinstance(entries, list):
            for entry in entries:
                stamp = extract(entry, "dt")
                if isinstance(stamp, bool) or not isinstance(stamp, int):
                    continue
                try:
                    if timestamp_to_date(stamp) == forecast_date:
                        return entry
                except (OverflowError, OSError, ValueError):
                    continue
        raise ForecastNotFound(format_display_date(forecast_date))

    @staticmethod
    def _parse_entry(entry: Any) -> Forecast:
        return Forecast(
            temperature=kelvin_to_celsius(require_float(entry, "main", "temp")),
            condition=require_str(entry, "weather", -1, "main"),
        )
