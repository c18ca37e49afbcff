"""JSON config store: creation, round-trip, and provider lookup."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from weather_lookup.config import Settings
from weather_lookup.exceptions import (
    APIKeyNotFound,
    ConfigNotLoaded,
    ConfigParseError,
    ConfigReadError,
    DefaultProviderNotSet,
)
from weather_lookup.providers.open_weather import OpenWeatherProvider
from weather_lookup.providers.registry import ProviderType
from weather_lookup.providers.weather_api import WeatherApiProvider
from weather_lookup.store import JsonConfigStore, StoredConfig, get_default_provider, get_provider


def test_missing_file_is_created_blank_on_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    store = JsonConfigStore(path)

    assert not path.exists()
    with pytest.raises(ConfigNotLoaded):
        store.get()
    store.load()
    assert store.get() == StoredConfig()
    assert json.loads(path.read_text(encoding="utf-8")) == {"default": None, "keys": {}}


def test_undecodable_config_raises_read_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_bytes(b"\xff\xfe")
    store = JsonConfigStore(path)

    with pytest.raises(ConfigReadError) as exc_info:
        store.load()
    assert exc_info.value.path == str(path)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_round_trip_preserves_default_and_keys(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    store = JsonConfigStore(path)
    store.load()
    store.set_provider_key(ProviderType.OPEN_WEATHER, "abc123")
    store.set_default_provider(ProviderType.OPEN_WEATHER)
    store.save()

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "default": "OpenWeather",
        "keys": {"OpenWeather": "abc123"},
    }

    reread = JsonConfigStore(path)
    reread.load()
    assert reread.get().default is ProviderType.OPEN_WEATHER
    assert reread.get().keys == {ProviderType.OPEN_WEATHER: "abc123"}


def test_existing_file_is_not_overwritten(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default": "WeatherApi", "keys": {"WeatherApi": "k"}}))

    store = JsonConfigStore(path)
    store.load()

    assert store.get().default is ProviderType.WEATHER_API


@pytest.mark.parametrize(
    "content",
    ["not json", json.dumps({"default": "Nope", "keys": {}}), json.dumps({"keys": {"Bad": "k"}})],
)
def test_unparseable_config_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(content)
    store = JsonConfigStore(path)
    with pytest.raises(ConfigParseError) as exc_info:
        store.load()
    assert exc_info.value.path == str(path)


def test_mutation_before_load_raises(tmp_path: Path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    with pytest.raises(ConfigNotLoaded):
        store.set_default_provider(ProviderType.WEATHER_API)
    with pytest.raises(ConfigNotLoaded):
        store.save()


def test_default_may_lack_key_at_load_time(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default": "WeatherApi", "keys": {}}))
    store = JsonConfigStore(path)
    store.load()

    with pytest.raises(APIKeyNotFound) as exc_info:
        get_default_provider(store)
    assert exc_info.value.provider is ProviderType.WEATHER_API


def test_get_default_provider_without_default_raises(tmp_path: Path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    store.load()
    with pytest.raises(DefaultProviderNotSet):
        get_default_provider(store)


def test_get_provider_builds_with_settings(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"default": "WeatherApi", "keys": {"WeatherApi": "wa", "OpenWeather": "ow"}})
    )
    store = JsonConfigStore(path)
    store.load()
    settings = Settings(
        _env_file=None,
        WEATHER_TIMEOUT_SECONDS=2.5,
        OPENWEATHER_BASE_URL="https://ow.example.test/2.5",
    )

    with get_provider(store, ProviderType.OPEN_WEATHER, settings=settings) as provider:
        assert isinstance(provider, OpenWeatherProvider)
        assert provider.api_key == "ow"
        assert provider.base_url == "https://ow.example.test/2.5"

    with get_default_provider(store) as provider:
        assert isinstance(provider, WeatherApiProvider)
        assert provider.api_key == "wa"
