"""WeatherApi (api.weatherapi.com) provider implementation."""

from __future__ import annotations

from datetime import date
from typing import Any

from ..exceptions import ForecastNotAvailable, ForecastNotFound
from ..forecast import Forecast
from .base import WeatherProvider, extract, format_display_date, require_float, require_str

# The forecast endpoint counts today as day 1, so tomorrow is days=2.
MIN_FORECAST_DAYS = 2
MAX_FORECAST_DAYS = 14


class WeatherApiProvider(WeatherProvider):
    """Current weather and up to 13 days ahead from WeatherApi."""

    provider_name = "WeatherApi"
    default_base_url = "http://api.weatherapi.com/v1"

    def get_weather(self, address: str, forecast_date: date | None = None) -> Forecast:
        if forecast_date is None:
            payload = self._request_json(
                f"{self.base_url}/current.json",
                {"key": self.api_key, "q": address, "aqi": "no"},
            )
            return self._parse_current(payload)

        days = self.forecast_days(forecast_date)
        payload = self._request_json(
            f"{self.base_url}/forecast.json",
            {"key": self.api_key, "q": address, "days": days, "aqi": "no", "alerts": "no"},
        )
        return self._parse_forecast(payload, forecast_date)

    def forecast_days(self, forecast_date: date) -> int:
        """Inclusive day count for the forecast endpoint, validated against the window."""
        days = (forecast_date - self._today()).days + 1
        if not MIN_FORECAST_DAYS <= days <= MAX_FORECAST_DAYS:
            raise ForecastNotAvailable(self.provider_name, format_display_date(forecast_date))
        return days

    @staticmethod
    def _parse_current(payload: Any) -> Forecast:
        return Forecast(
            temperature=require_float(payload, "current", "temp_c"),
            condition=require_str(payload, "current", "condition", "text"),
        )

    @staticmethod
    def _parse_forecast(payload: Any, forecast_date: date) -> Forecast:
        wanted = forecast_date.isoformat()
        entries = extract(payload, "forecast", "forecastday")
        if not isinstance(entries, list):
            entries = []

        match = next(
            (
                entry
                for entry in entries
                if isinstance(entry, dict) and entry.get("date") == wanted
            ),
            None,
        )
        if match is None:
            raise ForecastNotFound(format_display_date(forecast_date))

        return Forecast(
            temperature=require_float(match, "day", "avgtemp_c"),
            condition=require_str(match, "day", "condition", "text"),
        )
