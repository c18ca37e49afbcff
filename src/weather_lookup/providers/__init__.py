"""Weather provider integrations."""

from .base import WeatherProvider
from .open_weather import OpenWeatherProvider, kelvin_to_celsius
from .registry import PROVIDER_TYPE_MAP, ProviderIR, ProviderType, construct, resolve
from .weather_api import WeatherApiProvider

__all__ = [
    "OpenWeatherProvider",
    "PROVIDER_TYPE_MAP",
    "ProviderIR",
    "ProviderType",
    "WeatherApiProvider",
    "WeatherProvider",
    "construct",
    "kelvin_to_celsius",
    "resolve",
]
