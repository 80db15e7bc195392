"""Structured logging configuration with per-operation correlation ids."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import Flask

# Whitelisted ``extra=`` attributes rendered into the JSON payload
EXTRA_KEYS = ("identity", "error_code", "count", "backend")

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class JSONFormatter(logging.Formatter):
    """Render log records as JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload, default=str)


class CorrelationFilter(logging.Filter):
    """Stamp records with the correlation id of the enclosing scope."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _correlation_id.get()
        return True


@contextmanager
def correlation_scope(value: str | None = None) -> Iterator[str]:
    """Tag every record logged inside the block with one correlation id.

    :param value: Id to use; a random one is generated when omitted.
    :returns: The active id.
    """
    correlation_id = value or uuid4().hex
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


def current_correlation_id() -> str | None:
    return _correlation_id.get()


def configure_logging(level: str | int = "INFO") -> None:
    """Configure the root logger with JSON-formatted stdout output."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(CorrelationFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level_value: int | str = level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level_value = resolved if isinstance(resolved, int) else level.upper()
    root.setLevel(level_value)


def init_app(app: Flask) -> None:
    """Attach the correlation filter to the application logger."""

    app.logger.addFilter(CorrelationFilter())


__all__ = [
    "configure_logging",
    "init_app",
    "correlation_scope",
    "current_correlation_id",
    "JSONFormatter",
]
