"""JSON log lines on stderr for the weather lookup CLI.

stdout is reserved for the forecast text, so every diagnostic goes to stderr
as one JSON object per line. API keys are masked before a line is written.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from .redaction import sanitize_text

# Optional ``extra=`` attributes copied into the JSON object when present.
CONTEXT_FIELDS = ("command", "provider", "address")


class JsonConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = sanitize_text(str(value))
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(
    name: str = "weather_lookup",
    level: int | str = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Return the CLI logger, attaching the JSON handler on first use.

    Later calls only adjust the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
