"""Persisted provider config: default provider and API keys."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .config import Settings
from .exceptions import (
    APIKeyNotFound,
    ConfigNotLoaded,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    DefaultProviderNotSet,
)
from .providers.base import WeatherProvider
from .providers.registry import ProviderType, construct

logger = logging.getLogger(__name__)


class StoredConfig(BaseModel):
    """On-disk shape: ``{"default": <name or null>, "keys": {<name>: <key>}}``."""

    default: ProviderType | None = None
    keys: dict[ProviderType, str] = Field(default_factory=dict)


class ConfigStore(ABC):
    """Load/mutate/save contract for the persisted provider config."""

    @abstractmethod
    def load(self) -> None:
        """Read the full config into memory."""

    @abstractmethod
    def save(self) -> None:
        """Write the full in-memory config back."""

    @abstractmethod
    def get(self) -> StoredConfig:
        """Return the loaded config, raising ConfigNotLoaded before ``load``."""

    def set_default_provider(self, provider: ProviderType) -> None:
        self.get().default = provider

    def set_provider_key(self, provider: ProviderType, key: str) -> None:
        self.get().keys[provider] = key


class JsonConfigStore(ConfigStore):
    """Config store backed by a JSON file.

    Nothing touches the disk until ``load``; a missing file is then written
    blank and loaded.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._config: StoredConfig | None = None

    def load(self) -> None:
        if not self.path.exists():
            logger.info("Config %s not found; creating a blank one", self.path)
            self._config = StoredConfig()
            self.save()
            return
        try:
            raw_config = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigReadError(str(self.path), exc) from exc
        try:
            self._config = StoredConfig.model_validate_json(raw_config)
        except ValidationError as exc:
            raise ConfigParseError(str(self.path), exc) from exc

    def get(self) -> StoredConfig:
        if self._config is None:
            raise ConfigNotLoaded()
        return self._config

    def save(self) -> None:
        raw_config = self.get().model_dump_json(indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(raw_config + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigWriteError(str(self.path), exc) from exc


def get_provider(
    store: ConfigStore,
    provider: ProviderType,
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> WeatherProvider:
    """Build ``provider`` with the key stored for it."""
    key = store.get().keys.get(provider)
    if key is None:
        raise APIKeyNotFound(provider)
    options: dict[str, Any] = settings.provider_options(provider.value) if settings else {}
    return construct(provider, key, logger=logger, **options)


def get_default_provider(
    store: ConfigStore,
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
) -> WeatherProvider:
    default = store.get().default
    if default is None:
        raise DefaultProviderNotSet()
    return get_provider(store, default, settings=settings, logger=logger)
