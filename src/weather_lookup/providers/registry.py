"""Provider name/type table and construction from a (type, key) pair."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..exceptions import ProviderNotSupported
from .base import WeatherProvider
from .open_weather import OpenWeatherProvider
from .weather_api import WeatherApiProvider


class ProviderType(str, Enum):
    """Supported providers; the value is the persisted and command-line name."""

    WEATHER_API = "WeatherApi"
    OPEN_WEATHER = "OpenWeather"

    def __str__(self) -> str:
        return self.value


class ProviderIR(BaseModel):
    """Transient (type, key) pair consumed by ``construct``."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderType
    key: str


_PROVIDER_CLASSES: Mapping[ProviderType, type[WeatherProvider]] = MappingProxyType(
    {
        ProviderType.WEATHER_API: WeatherApiProvider,
        ProviderType.OPEN_WEATHER: OpenWeatherProvider,
    }
)

PROVIDER_TYPE_MAP: Mapping[str, ProviderType] = MappingProxyType(
    {provider_type.value: provider_type for provider_type in ProviderType}
)


def supported_names() -> list[str]:
    return list(PROVIDER_TYPE_MAP)


def resolve(name: str) -> ProviderType:
    """Exact, case-sensitive lookup of a provider name."""
    try:
        return PROVIDER_TYPE_MAP[name]
    except KeyError as exc:
        raise ProviderNotSupported(name) from exc


def construct(
    provider: ProviderType,
    key: str,
    *,
    logger: logging.Logger | None = None,
    **options: Any,
) -> WeatherProvider:
    """Build the provider for ``provider`` holding ``key``.

    ``options`` (``base_url``, ``timeout``) are passed to the provider constructor.
    """
    ir = ProviderIR(provider=provider, key=key)
    provider_cls = _PROVIDER_CLASSES[ir.provider]
    return provider_cls(ir.key, logger=logger, **options)
