"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from persona_creator.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="persona_creator.registry.store",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Registered %s",
        args=("alice",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_lifts_persona_context() -> None:
    payload = json.loads(JsonFormatter().format(_record(persona="alice", repo="org/a")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "persona_creator.registry.store"
    assert payload["message"] == "Registered alice"
    assert payload["persona"] == "alice"
    assert payload["repo"] == "org/a"
    assert "extra" not in payload


def test_json_formatter_keeps_other_fields_under_extra() -> None:
    record = _record(key_type="openai", path=Path("/tmp/r.json"), personas=3)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["key_type"] == "openai"
    assert payload["extra"] == {"path": "/tmp/r.json", "personas": 3}


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("kaboom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: kaboom" in payload["exception"]


def test_configure_logging_replaces_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        configure_logging("debug")
        configure_logging("debug")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("github").level == logging.INFO
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)
