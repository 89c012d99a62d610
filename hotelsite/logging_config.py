from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from hotelsite.logging_context import get_request_id

REDACTED = "[REDACTED]"
DEFAULT_REDACT_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        "password_hash",
        "token",
        "admin_token",
        "admin_api_token",
        "csrf_token",
        "session_secret_key",
        "authorization",
        "cookie",
    }
)

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.makeLogRecord({})).keys()
) | {"message", "asctime"}
_DROPPED_FIELDS: frozenset[str] = frozenset({"color_message"})


def parse_redact_fields(raw_value: str) -> frozenset[str]:
    extras = {part.strip().lower() for part in raw_value.split(",") if part.strip()}
    return DEFAULT_REDACT_FIELDS | extras


def _redact(value: Any, redact_fields: frozenset[str]) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in redact_fields else _redact(item, redact_fields)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_redact(item, redact_fields) for item in value]
    return value


class JsonLogFormatter(logging.Formatter):
    def __init__(self, *, redact_fields: frozenset[str] = DEFAULT_REDACT_FIELDS) -> None:
        super().__init__()
        self._redact_fields = redact_fields

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": timestamp.strftime("%Y-%m-%d %H:%M:%SZ"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id

        for key, value in vars(record).items():
            if key in _RESERVED_RECORD_ATTRS or key in _DROPPED_FIELDS:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(_redact(payload, self._redact_fields), default=str)


class ConsoleLogFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        request_id = get_request_id()
        if request_id:
            return f"{base} request_id={request_id}"
        return base


def configure_logging(
    *,
    level: str,
    log_format: str,
    redact_fields: frozenset[str] = DEFAULT_REDACT_FIELDS,
    include_uvicorn_access: bool = False,
) -> None:
    handler = logging.StreamHandler(sys.stdout)
    if log_format.strip().lower() == "json":
        handler.setFormatter(JsonLogFormatter(redact_fields=redact_fields))
    else:
        handler.setFormatter(ConsoleLogFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in ("uvicorn", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.handlers.clear()
    access_logger.propagate = include_uvicorn_access
    access_logger.disabled = not include_uvicorn_access
