"""Typed settings loader for the weather lookup CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    config_path: Path = Field(default=Path("config.json"), alias="WEATHER_CONFIG_PATH")
    timeout_seconds: float = Field(default=15.0, alias="WEATHER_TIMEOUT_SECONDS")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        alias="WEATHER_LOG_LEVEL",
    )
    weatherapi_base_url: str = Field(
        default="http://api.weatherapi.com/v1",
        alias="WEATHERAPI_BASE_URL",
    )
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        alias="OPENWEATHER_BASE_URL",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept lower-case level names from the environment."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_values(self) -> Settings:
        if self.timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        for name in ("weatherapi_base_url", "openweather_base_url"):
            url = getattr(self, name)
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"{name.upper()} must be an http(s) URL.")
            setattr(self, name, url.rstrip("/"))
        return self

    def provider_options(self, provider: str) -> dict[str, Any]:
        """Keyword options forwarded to the constructor of the named provider."""
        base_urls = {
            "WeatherApi": self.weatherapi_base_url,
            "OpenWeather": self.openweather_base_url,
        }
        return {"base_url": base_urls[provider], "timeout": self.timeout_seconds}


def load_settings(**overrides: Any) -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
