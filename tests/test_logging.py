"""Structured logging helper tests."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylesync.logging_config import (
    CORRELATION_ID,
    JsonFormatter,
    PlainFormatter,
    correlation_context,
    redact_for_log,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.makeLogRecord(
        {"name": "stylesync.test", "levelno": logging.INFO, "levelname": "INFO", "msg": "skeletons_truncated"}
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_redaction_scrubs_personal_fields() -> None:
    payload = {
        "user_id": "u-1",
        "location": "Oslo",
        "items": [{"image_url": "https://cdn/x.jpg", "note": "mail me at a@b.com"}],
        "count": 3,
    }
    assert redact_for_log(payload) == {
        "user_id": "[redacted]",
        "location": "[redacted]",
        "items": [{"image_url": "[redacted]", "note": "mail me at [redacted-email]"}],
        "count": 3,
    }
    assert redact_for_log(("https://example.com",)) == ["[redacted-url]"]


def test_json_formatter_includes_event_fields() -> None:
    line = JsonFormatter().format(_record(event="skeletons_truncated", correlation_id="abc", cap=200))
    payload = json.loads(line)
    assert payload["event"] == "skeletons_truncated"
    assert payload["correlation_id"] == "abc"
    assert payload["cap"] == 200
    assert payload["level"] == "INFO"


def test_plain_formatter_renders_key_values() -> None:
    line = PlainFormatter().format(_record(event="skeletons_truncated", kept_tops=14, cap=200))
    assert "skeletons_truncated" in line
    assert line.endswith("cap=200 kept_tops=14")


def test_correlation_context_restores_previous_id() -> None:
    with correlation_context("outer"):
        with correlation_context("inner") as inner:
            assert inner == "inner"
        assert CORRELATION_ID.get() == "outer"
