"""Application exception classes."""

from __future__ import annotations

from typing import Any


class WeatherLookupError(Exception):
    """Base class for every error reported by the weather lookup tool."""


class ConfigError(WeatherLookupError):
    """Raised when process settings are invalid or incomplete."""


class ConfigurationError(WeatherLookupError):
    """Raised when a configure request cannot be applied."""


class ProviderNotSupported(ConfigurationError):
    """Raised when a provider name is not registered."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Provider {provider} is not supported")
        self.provider = provider


class APIKeyMissing(ConfigurationError):
    """Raised when a provider without a stored key is selected as default."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Provider {provider} does not have API key")
        self.provider = provider


class ConfigStoreError(WeatherLookupError):
    """Raised when the persisted provider config cannot be used."""


class ConfigNotLoaded(ConfigStoreError):
    def __init__(self) -> None:
        super().__init__("Config has not been loaded")


class ConfigReadError(ConfigStoreError):
    def __init__(self, path: str, error: Exception) -> None:
        super().__init__(f"Failed to read config from {path} with error '{error}'")
        self.path = path
        self.error = error


class ConfigParseError(ConfigStoreError):
    def __init__(self, path: str, error: Exception) -> None:
        super().__init__(f"Failed to parse config {path} with error '{error}'")
        self.path = path
        self.error = error


class ConfigWriteError(ConfigStoreError):
    def __init__(self, path: str, error: Exception) -> None:
        super().__init__(f"Failed to save config in {path} with error '{error}'")
        self.path = path
        self.error = error


class APIKeyNotFound(ConfigStoreError):
    """Raised when no API key is stored for the requested provider."""

    def __init__(self, provider: Any) -> None:
        super().__init__(f"API key for provider {provider} is not found")
        self.provider = provider


class DefaultProviderNotSet(ConfigStoreError):
    """Raised when a forecast is requested before any provider was configured."""

    def __init__(self) -> None:
        super().__init__("Default provider has not been set")


class DateError(WeatherLookupError):
    """Raised when a user-supplied forecast date is rejected."""


class InvalidDate(DateError):
    def __init__(self, date: str, error: Exception) -> None:
        super().__init__(f"Date {date} is in unsupported format with error '{error}'")
        self.date = date
        self.error = error


class PastDate(DateError):
    def __init__(self, date: str) -> None:
        super().__init__(f"Date {date} should be >= now")
        self.date = date


class ProviderError(WeatherLookupError):
    """Raised when weather provider requests or normalization fail."""


class BadResponse(ProviderError):
    """Raised for transport failures and non-success HTTP statuses."""

    def __init__(self, error: str, *, status_code: int | None = None) -> None:
        super().__init__(f"Bad response with error '{error}'")
        self.error = error
        self.status_code = status_code


class InvalidJson(ProviderError):
    """Raised when a response body is not decodable JSON."""

    def __init__(self, error: str) -> None:
        super().__init__(f"Json is invalid with error '{error}'")
        self.error = error


class InvalidJsonFormat(ProviderError):
    """Raised when a required field is missing or has the wrong type."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Something wrong with {field} in json")
        self.field = field


class ForecastNotFound(ProviderError):
    def __init__(self, date: str) -> None:
        super().__init__(f"Forecast is not found for date {date}")
        self.date = date


class ForecastNotAvailable(ProviderError):
    """Raised when a date falls outside the provider's forecast window."""

    def __init__(self, provider: str, date: str) -> None:
        super().__init__(f"Forecast with provider {provider} is not available for {date}")
        self.provider = provider
        self.date = date
