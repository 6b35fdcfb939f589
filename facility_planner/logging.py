"""Structured logging helpers: formatters and request-scoped context."""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from typing import Any

# Attributes present on every LogRecord; anything else came from `extra=`
RESERVED_LOG_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_log_context: contextvars.ContextVar[Mapping[str, Any] | None] = contextvars.ContextVar(
    "log_context", default=None
)


def bind_log_context(**context: Any) -> contextvars.Token:
    """Bind contextual fields (request_id, path, remote_ip...) for the current request or task."""
    filtered = {k: v for k, v in context.items() if v not in {None, ""}}
    return _log_context.set(filtered)


def reset_log_context(token: contextvars.Token) -> None:
    """Restore the context that was active before `bind_log_context`."""
    with contextlib.suppress(ValueError):
        _log_context.reset(token)


def current_log_context() -> dict[str, Any]:
    """Return a copy of the bound fields, safe to pass into a queued task."""
    return dict(_log_context.get(None) or {})


@contextlib.contextmanager
def log_context(context: Mapping[str, Any] | None, **extra: Any) -> Iterator[None]:
    """Re-bind a captured context (plus extras) for the duration of a background task."""
    token = bind_log_context(**{**(context or {}), **extra})
    try:
        yield
    finally:
        reset_log_context(token)


class RequestContextFilter(logging.Filter):
    """Copy the bound context fields onto every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_log_context.get(None) or {}).items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _get_extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in RESERVED_LOG_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including every `extra` field.

    Values that cannot be serialized are written with `str()`.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in _get_extra_fields(record).items():
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            log_data[key] = value

        return json.dumps(log_data)


class DevFormatter(logging.Formatter):
    """Human-readable formatter for local development.

    Format: timestamp LEVEL    logger message | key=value key2=value2
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} {record.levelname:8} {record.name} {record.getMessage()}"

        extras = _get_extra_fields(record)
        if extras:
            line = f"{line} | " + " ".join(f"{k}={v!r}" for k, v in extras.items())

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
