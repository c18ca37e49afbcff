"""Helpers for redacting API keys from logs and error text."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_RE = re.compile(
    r"^(key|appid|api[_-]?key|token|secret)$",
    re.IGNORECASE,
)
# Query-string and assignment forms: key=..., appid=..., api_key: ...
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    (?<![A-Za-z0-9_])
    (
      appid|
      api[_-]?key|
      key|
      token|
      secret
    )
    (\s*[:=]\s*)
    ([^\s&,;'"]+)
    """
)


def sanitize_text(text: str) -> str:
    """Redact API keys embedded in plain text such as request URLs."""
    return _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text)


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact sensitive values in nested structures."""
    if isinstance(value, dict):
        sanitized: dict[Any, Any] = {}
        for key, child in value.items():
            if _SENSITIVE_KEY_RE.search(str(key)):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(child)
        return sanitized
    if isinstance(value, list):
        return [sanitize_for_logging(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
