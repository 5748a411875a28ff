"""Wiring between settings, sources and the aggregator."""

from __future__ import annotations

from typing import Sequence

from mediashelf.config import Settings
from mediashelf.core.aggregator import Aggregator
from mediashelf.core.normalize import TitleNormalizer
from mediashelf.core.observability import FailureSink
from mediashelf.models.bundle import ResultBundle
from mediashelf.sources import SourceClient, build_sources


def build_aggregator(
    settings: Settings,
    *,
    sources: Sequence[SourceClient] | None = None,
    sink: FailureSink | None = None,
) -> Aggregator:
    """Create an aggregator from settings.

    Args:
        settings: Application settings.
        sources: Override the configured source clients.
        sink: Override the failure sink.
    """

    return Aggregator(
        sources if sources is not None else build_sources(settings),
        normalizer=TitleNormalizer(limit=settings.title_max_len, suffix=settings.title_suffix),
        sink=sink,
        timeout_s=settings.source_timeout_s,
    )


def search_media(query: str, settings: Settings) -> ResultBundle:
    """Search every configured source and block until all have answered.

    This is a convenience wrapper around :meth:`Aggregator.search`.
    """

    return build_aggregator(settings).search_sync(query)
