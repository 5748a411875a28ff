"""Concurrent multi-source search aggregation."""

from __future__ import annotations

import asyncio
import contextvars
import functools
import inspect
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Sequence

from mediashelf.core.normalize import TitleNormalizer
from mediashelf.core.observability import FailureSink, LoggingFailureSink
from mediashelf.errors import ConfigurationError
from mediashelf.logging import get_logger, log_exception, search_context, set_source
from mediashelf.models.bundle import ResultBundle, SourceFailure, SourceSlot
from mediashelf.models.media import MediaItem
from mediashelf.sources.protocol import SourceClient

logger = get_logger(__name__)

Normalizer = Callable[[Iterable[MediaItem]], list[MediaItem]]


class Aggregator:
    """Fan a query out to every source and join the results.

    Each source gets its own task. A task owns its slot and hands it back
    through `asyncio.gather`, so units never share mutable state. A failing
    or hung source yields an empty slot and one failure record; it never
    aborts the call.
    """

    def __init__(
        self,
        sources: Sequence[SourceClient],
        *,
        normalizer: Normalizer | None = None,
        sink: FailureSink | None = None,
        timeout_s: float = 10.0,
    ) -> None:
        """Initialize the aggregator.

        Args:
            sources: Source clients; their order fixes the slot order.
            normalizer: Applied once to every successful result list.
            sink: Receives failure records. Defaults to logging.
            timeout_s: Deadline for a single source call.

        Raises:
            ConfigurationError: If the sources or the deadline are unusable.
        """
        self._sources = tuple(_validate_sources(sources))
        if timeout_s <= 0:
            raise ConfigurationError(f"timeout_s must be > 0, got {timeout_s}")
        self._normalizer: Normalizer = normalizer or TitleNormalizer()
        self._sink: FailureSink = sink or LoggingFailureSink()
        self._timeout_s = timeout_s

    async def search(self, query: str) -> ResultBundle:
        """Search every source concurrently.

        The query is handed to the sources as-is. The call returns once the
        slowest source has finished or hit its deadline.

        Args:
            query: Decoded query string.

        Returns:
            One slot per source, in configuration order.
        """
        search_id = uuid.uuid4().hex[:12]
        started = time.monotonic()

        # Sync clients get their own threads. A hung one is abandoned without
        # being joined, so neither this call nor asyncio.run() waits for it.
        sync_count = sum(1 for s in self._sources if not inspect.iscoroutinefunction(s.search))
        executor = (
            ThreadPoolExecutor(max_workers=sync_count, thread_name_prefix="mediashelf-source")
            if sync_count
            else None
        )

        with search_context(search_id=search_id):
            try:
                units = [self._run_unit(source, query, executor) for source in self._sources]
                slots = await asyncio.gather(*units)
            finally:
                if executor is not None:
                    executor.shutdown(wait=False)

            bundle = ResultBundle(query=query, slots=list(slots))
            logger.info(
                "Aggregation done",
                extra={
                    "query_len": len(query),
                    "source_count": len(bundle),
                    "failed": bundle.failed,
                    "elapsed_ms": int((time.monotonic() - started) * 1000),
                },
            )
        return bundle

    def search_sync(self, query: str) -> ResultBundle:
        """Blocking variant of :meth:`search`."""

        return asyncio.run(self.search(query))

    async def _run_unit(
        self, source: SourceClient, query: str, executor: ThreadPoolExecutor | None
    ) -> SourceSlot:
        set_source(source.name)
        started = time.monotonic()
        try:
            items = await asyncio.wait_for(_call_search(source, query, executor), timeout=self._timeout_s)
            normalized = self._normalizer(items)
        except Exception as e:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            error = str(e) or type(e).__name__
            if isinstance(e, asyncio.TimeoutError):
                error = f"no response within {self._timeout_s:g}s"
            self._report(
                SourceFailure(
                    source=source.name,
                    query=query,
                    error_type=type(e).__name__,
                    error=error,
                    elapsed_ms=elapsed_ms,
                )
            )
            return SourceSlot(source=source.name, items=[], ok=False, error=error, elapsed_ms=elapsed_ms)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "Source search ok",
            extra={
                "provider": source.name,
                "query_len": len(query),
                "result_count": len(normalized),
                "elapsed_ms": elapsed_ms,
            },
        )
        return SourceSlot(source=source.name, items=normalized, ok=True, elapsed_ms=elapsed_ms)

    def _report(self, failure: SourceFailure) -> None:
        try:
            self._sink.emit(failure)
        except Exception:
            log_exception(
                logger,
                "Failure sink raised",
                sink=type(self._sink).__name__,
                source=failure.source,
                error=failure.error,
            )


async def _call_search(
    source: SourceClient, query: str, executor: ThreadPoolExecutor | None
) -> list[MediaItem]:
    """Call a source once, awaiting async clients and threading sync ones."""

    if inspect.iscoroutinefunction(source.search):
        result = await source.search(query)
    else:
        loop = asyncio.get_running_loop()
        ctx = contextvars.copy_context()
        call = functools.partial(ctx.run, source.search, query)
        result = await loop.run_in_executor(executor, call)
    if result is None:
        return []
    return list(result)


def _validate_sources(sources: Sequence[SourceClient]) -> list[SourceClient]:
    if sources is None or isinstance(sources, (str, bytes)):
        raise ConfigurationError("sources must be a sequence of source clients")
    out = list(sources)
    if not out:
        raise ConfigurationError("at least one source is required")

    seen: set[str] = set()
    for i, source in enumerate(out):
        if not callable(getattr(source, "search", None)):
            raise ConfigurationError(f"source #{i} ({type(source).__name__}) has no search() method")
        name = getattr(source, "name", None)
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"source #{i} ({type(source).__name__}) has no name")
        if name in seen:
            raise ConfigurationError(f"duplicate source name: {name}")
        seen.add(name)
    return out
