"""CLI offline smoke tests."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from weather_lookup.cli import main
from weather_lookup.forecast import Forecast
from weather_lookup.providers.open_weather import OpenWeatherProvider


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "config.json"
    monkeypatch.setenv("WEATHER_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("WEATHER_LOG_LEVEL", "warning")
    # Fresh handler per test so log output lands in the active capture.
    monkeypatch.setattr(logging.getLogger("weather_lookup"), "handlers", [])
    return config_path


def test_configure_then_reconfigure_without_key(capsys: Any, tmp_path: Path) -> None:
    assert main(["configure", "--provider", "WeatherApi", "--api-key", "XYZ"]) == 0
    assert main(["configure", "--provider", "WeatherApi"]) == 0

    output = capsys.readouterr().out
    assert output.count("Success! Provider WeatherApi is default provider now") == 2
    saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert saved == {"default": "WeatherApi", "keys": {"WeatherApi": "XYZ"}}


def test_configure_unknown_provider_exit_code(capsys: Any, tmp_path: Path) -> None:
    assert main(["configure", "--provider", "Unknown"]) == 3
    assert "Provider Unknown is not supported" in capsys.readouterr().err
    assert not (tmp_path / "config.json").exists()


def test_undecodable_config_exit_code(capsys: Any, tmp_path: Path) -> None:
    (tmp_path / "config.json").write_bytes(b"\xff\xfe")
    assert main(["get", "-a", "London"]) == 3
    assert "Failed to read config" in capsys.readouterr().err


def test_config_flag_overrides_env(tmp_path: Path) -> None:
    custom = tmp_path / "elsewhere" / "providers.json"
    assert main(["--config", str(custom), "configure", "-p", "OpenWeather", "-a", "k"]) == 0
    assert json.loads(custom.read_text(encoding="utf-8"))["default"] == "OpenWeather"
    assert not (tmp_path / "config.json").exists()


def test_get_prints_report(capsys: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    assert main(["configure", "-p", "OpenWeather", "-a", "ow-key"]) == 0
    capsys.readouterr()

    def _fake_get_weather(self: Any, address: str, forecast_date: date | None = None) -> Forecast:
        assert forecast_date is None
        return Forecast(temperature=26.85, condition="Clear")

    monkeypatch.setattr(OpenWeatherProvider, "get_weather", _fake_get_weather)

    assert main(["get", "--address", "Madrid"]) == 0
    output = capsys.readouterr().out
    assert f"Weather information for Madrid on {date.today():%d.%m.%Y}:" in output
    assert "Temperature: 26.85\nCondition: Clear\n" in output


def test_get_past_date_exit_code(capsys: Any) -> None:
    assert main(["configure", "-p", "WeatherApi", "-a", "k"]) == 0
    assert main(["get", "-a", "London", "-d", "01.01.2000"]) == 4
    assert "Date 01.01.2000 should be >= now" in capsys.readouterr().err


def test_get_without_configuration_exit_code(capsys: Any) -> None:
    assert main(["get", "-a", "London"]) == 3
    assert "Default provider has not been set" in capsys.readouterr().err


def test_invalid_settings_exit_code(monkeypatch: pytest.MonkeyPatch, capsys: Any) -> None:
    monkeypatch.setenv("WEATHER_TIMEOUT_SECONDS", "0")
    assert main(["get", "-a", "London"]) == 2
    assert "WEATHER_TIMEOUT_SECONDS must be > 0" in capsys.readouterr().err


def test_provider_failure_exit_code_and_key_not_logged(
    monkeypatch: pytest.MonkeyPatch, capsys: Any
) -> None:
    assert main(["configure", "-p", "OpenWeather", "-a", "super-secret"]) == 0
    capsys.readouterr()

    def _broken(self: Any, url: str, params: dict[str, Any]) -> Any:
        from weather_lookup.exceptions import BadResponse

        raise BadResponse(f"HTTP 401 from {url}?q=x&appid=super-secret")

    monkeypatch.setattr(OpenWeatherProvider, "_request_json", _broken)

    assert main(["get", "-a", "Paris"]) == 5
    err = capsys.readouterr().err
    assert "Bad response" in err
    assert "super-secret" not in err
