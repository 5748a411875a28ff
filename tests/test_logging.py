"""Tests for logging utilities."""

from __future__ import annotations

import logging

from mediashelf.logging import SearchFormatter, _ContextFilter, search_context, set_source


def _record(**extra) -> logging.LogRecord:
    record = logging.makeLogRecord({"name": "mediashelf.test", "msg": "Source search ok", "levelno": logging.INFO})
    record.__dict__.update(extra)
    return record


def test_formatter_appends_extra_fields() -> None:
    """Structured `extra` fields should appear as sorted key=value pairs."""

    out = SearchFormatter().format(_record(provider="gr", result_count=3))

    assert out.endswith("Source search ok provider=gr result_count=3")
    assert out.startswith("search=- source=-")


def test_context_filter_binds_search_and_source() -> None:
    record = _record()
    with search_context(search_id="abc123"):
        set_source("sp")
        _ContextFilter().filter(record)

    out = SearchFormatter().format(record)
    assert out.startswith("search=abc123 source=sp mediashelf.test:")
