"""Sinks for per-source failure records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from mediashelf.logging import get_logger
from mediashelf.models.bundle import SourceFailure

logger = get_logger(__name__)


class FailureSink(Protocol):
    """Receives one record per failed source call."""

    def emit(self, failure: SourceFailure) -> None:
        """Record a failure."""


class LoggingFailureSink:
    """Report failures as structured warning log records."""

    def emit(self, failure: SourceFailure) -> None:
        logger.warning(
            "Source search failed",
            extra={
                "provider": failure.source,
                "query_len": len(failure.query),
                "error_type": failure.error_type,
                "error": failure.error,
                "elapsed_ms": failure.elapsed_ms,
            },
        )


@dataclass
class MemoryFailureSink:
    """Keep failure records in memory."""

    records: list[SourceFailure] = field(default_factory=list)

    def emit(self, failure: SourceFailure) -> None:
        self.records.append(failure)

    def sources(self) -> list[str]:
        """Names of failed sources, in emission order."""

        return [r.source for r in self.records]
