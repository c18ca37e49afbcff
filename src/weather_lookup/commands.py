"""Handlers for the ``configure`` and ``get`` commands."""

from __future__ import annotations

import logging
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from .config import Settings
from .exceptions import APIKeyMissing, InvalidDate, PastDate
from .forecast import Forecast
from .providers.base import DISPLAY_DATE_FORMAT, format_display_date, today
from .providers.registry import ProviderType, resolve
from .store import ConfigStore, get_default_provider

logger = logging.getLogger(__name__)


class WeatherReport(BaseModel):
    """Forecast together with the address and day it was requested for."""

    model_config = ConfigDict(frozen=True)

    address: str
    day: date
    forecast: Forecast

    def render(self) -> str:
        return (
            f"Weather information for {self.address} on {format_display_date(self.day)}:\n"
            f"{self.forecast.render()}"
        )


def parse_forecast_date(raw: str | None, current: date | None = None) -> date | None:
    """Validate a ``DD.MM.YYYY`` date; None means current weather.

    Past dates are rejected and today collapses to None.
    """
    if raw is None:
        return None
    current = current or today()
    try:
        parsed = datetime.strptime(raw, DISPLAY_DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDate(raw, exc) from exc
    if parsed < current:
        raise PastDate(format_display_date(parsed))
    if parsed == current:
        return None
    return parsed


def configure(store: ConfigStore, provider_name: str, api_key: str | None = None) -> ProviderType:
    """Store ``api_key`` (if given) and make the provider the default."""
    provider = resolve(provider_name)

    store.load()
    if api_key is not None:
        store.set_provider_key(provider, api_key)
    elif provider not in store.get().keys:
        raise APIKeyMissing(provider_name)

    store.set_default_provider(provider)
    store.save()
    logger.info("Default provider set to %s", provider, extra={"provider": provider.value})
    return provider


def get(
    store: ConfigStore,
    address: str,
    raw_date: str | None = None,
    *,
    settings: Settings | None = None,
    provider_logger: logging.Logger | None = None,
) -> WeatherReport:
    """Fetch the weather for ``address`` from the default provider."""
    store.load()
    current = today()
    forecast_date = parse_forecast_date(raw_date, current)

    with get_default_provider(store, settings=settings, logger=provider_logger) as provider:
        logger.info(
            "Requesting %s weather for %s on %s",
            provider.provider_name,
            address,
            forecast_date or "now",
            extra={"provider": provider.provider_name, "address": address},
        )
        forecast = provider.get_weather(address, forecast_date)

    return WeatherReport(address=address, day=forecast_date or current, forecast=forecast)
