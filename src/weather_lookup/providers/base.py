"""Provider-agnostic weather interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any

import httpx

from ..exceptions import BadResponse, InvalidJson, InvalidJsonFormat
from ..forecast import Forecast
from ..redaction import sanitize_for_logging, sanitize_text

DISPLAY_DATE_FORMAT = "%d.%m.%Y"


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def today() -> date:
    """Current local calendar day."""
    return date.today()


class WeatherProvider(ABC):
    """Base contract for weather providers.

    A provider owns one API key and one HTTP client. ``get_weather`` with
    ``forecast_date=None`` returns the current weather; with a date it returns
    the forecast for that day, which callers guarantee is today or later.
    Each provider enforces its own forecast window before any request is made.
    """

    provider_name: str
    default_base_url: str

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = 15.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.logger = logger or logging.getLogger(f"weather_lookup.providers.{self.provider_name}")
        self._client = httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> WeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP client."""
        self._client.close()

    def _today(self) -> date:
        return today()

    @abstractmethod
    def get_weather(self, address: str, forecast_date: date | None = None) -> Forecast:
        """Fetch current weather or the forecast for ``forecast_date``."""

    def _request_json(self, url: str, params: dict[str, Any]) -> Any:
        self.logger.debug(
            "%s request %s params=%s",
            self.provider_name,
            url,
            sanitize_for_logging(params),
        )
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise BadResponse(
                sanitize_text(f"HTTP {status} from {exc.request.url}: {exc.response.text[:300]}"),
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise BadResponse(sanitize_text(f"{type(exc).__name__}: {exc}")) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise InvalidJson(str(exc)) from exc


def _field_path(path: tuple[str | int, ...]) -> str:
    return ":".join(str(part) for part in path if part != -1)


def extract(payload: Any, *path: str | int) -> Any:
    """Walk ``path`` through nested dicts/lists, returning None on any miss.

    Integer steps index lists (``-1`` takes the last element).
    """
    node = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or not node:
                return None
            try:
                node = node[step]
            except IndexError:
                return None
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(step)
    return node


def require_float(payload: Any, *path: str | int) -> float:
    value = extract(payload, *path)
    # bool is an int subclass but never a valid temperature
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidJsonFormat(_field_path(path))
    return float(value)


def require_str(payload: Any, *path: str | int) -> str:
    value = extract(payload, *path)
    if not isinstance(value, str):
        raise InvalidJsonFormat(_field_path(path))
    return value
