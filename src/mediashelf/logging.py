"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


_search_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("mediashelf_search_id", default="-")
_source_var: contextvars.ContextVar[str] = contextvars.ContextVar("mediashelf_source", default="-")


class _ContextFilter(logging.Filter):
    """Inject search context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.search_id = _search_id_var.get()  # type: ignore[attr-defined]
        record.source = _source_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def search_context(*, search_id: str, source: str | None = None) -> Any:
    """Temporarily bind search context for structured logging.

    Args:
        search_id: Identifier of one aggregation call.
        source: Optional source name.
    """

    token_search = _search_id_var.set(search_id)
    token_source = _source_var.set(source or _source_var.get())
    try:
        yield
    finally:
        _search_id_var.reset(token_search)
        _source_var.reset(token_source)


def set_source(source: str) -> None:
    """Update current source in context.

    Each asyncio task runs in a copy of the context, so a unit of work can call
    this without affecting its siblings.
    """

    _source_var.set(source)


# Attributes every LogRecord carries; anything else on a record came from `extra`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "search_id", "source"}


class SearchFormatter(logging.Formatter):
    """Prefix records with the search context and append `extra` fields.

    Source clients and the aggregator log their outcome as `extra` fields
    (`provider`, `result_count`, `error`, `elapsed_ms`, ...); they are rendered
    as sorted ``key=value`` pairs after the message.
    """

    def __init__(self) -> None:
        super().__init__(
            fmt="search=%(search_id)s source=%(source)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        for attr in ("search_id", "source"):
            if not hasattr(record, attr):
                setattr(record, attr, "-")
        text = super().format(record)
        fields = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS and not k.startswith("_")}
        if not fields:
            return text
        return text + " " + " ".join(f"{k}={v}" for k, v in sorted(fields.items()))


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    root = logging.getLogger()
    root.setLevel(level)

    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        # stderr keeps `--json` output on stdout clean
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_level=True)
        root.addHandler(handler)
    if not any(isinstance(f, _ContextFilter) for f in handler.filters):
        handler.addFilter(_ContextFilter())
    handler.setFormatter(SearchFormatter())


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
