"""Structured logging and correlation helpers for the StyleSync service.

Every engine stage and service operation logs through :func:`log_event`, which
attaches the active correlation id and scrubs personal data before the record
reaches a handler. ``LOG_FORMAT=plain`` switches to a single-line text format
for local runs; JSON is the default.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_REDACT_KEYS = {
    "user_id",
    "email",
    "location",
    "image_url",
    "credential",
    "token",
    "appid",
}
_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: redact_for_log(value)
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRIBUTES and key not in {"event", "correlation_id"}
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line with event name and correlation id."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", record.getMessage()),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        payload.update(_extra_fields(record))
        return json.dumps(payload, default=str)


class PlainFormatter(logging.Formatter):
    """``time level logger event key=value ...`` for reading logs in a terminal."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        head = f"{self.formatTime(record, datefmt='%H:%M:%S')} {record.levelname:<7} {record.name} {record.getMessage()}"
        fields = " ".join(f"{key}={value}" for key, value in sorted(_extra_fields(record).items()))
        text = f"{head} {fields}" if fields else head
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


def configure_logging(level: int | str | None = None, fmt: str | None = None) -> None:
    """Install a single root handler; ``LOG_LEVEL``/``LOG_FORMAT`` fill in defaults."""

    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    desired_format = (fmt or os.getenv("LOG_FORMAT", "json")).lower()
    handler = logging.StreamHandler()
    handler.setFormatter(PlainFormatter() if desired_format == "plain" else JsonFormatter())
    logging.root.handlers.clear()
    logging.basicConfig(level=desired_level, handlers=[handler])


def _redact_string(value: str) -> str:
    if _EMAIL_PATTERN.search(value):
        return _EMAIL_PATTERN.sub("[redacted-email]", value)
    if value.lower().startswith("http"):
        return "[redacted-url]"
    return value


def redact_for_log(payload: Any) -> Any:
    """Recursively scrub user ids, locations, photo URLs and credentials."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _redact_string(payload)
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _REDACT_KEYS else redact_for_log(value) for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in payload]
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring the root logger on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, keep the active one, or mint a fresh id."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    new_id = uuid.uuid4().hex
    CORRELATION_ID.set(new_id)
    return new_id


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Temporarily bind a correlation id, restoring the previous one on exit."""

    token = CORRELATION_ID.set(correlation_id or ensure_correlation_id())
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with structured ``fields``.

    ``fields`` must not reuse LogRecord attribute names such as ``name`` or
    ``message``; ``exc_info`` is passed through to the logger.
    """

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Scope a correlation id around one named operation and log its boundaries."""

    logger = logging.getLogger(__name__)
    correlation_id = ensure_correlation_id(attributes.pop("correlation_id", None))
    with correlation_context(correlation_id) as scoped_id:
        log_event(logger, logging.DEBUG, f"{name}_started", correlation_id=scoped_id, **attributes)
        yield scoped_id
        log_event(logger, logging.DEBUG, f"{name}_finished", correlation_id=scoped_id)


__all__ = [
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "JsonFormatter",
    "log_event",
    "operation_context",
    "PlainFormatter",
    "redact_for_log",
]
