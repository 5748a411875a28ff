"""Shared HTTP plumbing for source clients."""

from __future__ import annotations

import time
from typing import Any

import httpx

from mediashelf.errors import SourceError, SourceResponseError
from mediashelf.logging import get_logger

logger = get_logger(__name__)


def make_client(
    *,
    timeout_s: float,
    user_agent: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a short-lived async client for one search call."""

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_s),
        headers={"User-Agent": user_agent},
        follow_redirects=True,
        transport=transport,
    )


async def send(
    client: httpx.AsyncClient,
    source: str,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request, turning transport and status errors into `SourceError`."""

    started = time.monotonic()
    try:
        resp = await client.request(method, url, **kwargs)
        resp.raise_for_status()
    except httpx.TimeoutException as e:
        raise SourceError(source, f"request timed out: {e}") from e
    except httpx.HTTPStatusError as e:
        raise SourceError(source, f"HTTP {e.response.status_code} from {e.request.url.host}") from e
    except httpx.RequestError as e:
        raise SourceError(source, f"request failed: {e}") from e

    logger.debug(
        "Source request ok",
        extra={
            "provider": source,
            "status_code": resp.status_code,
            "latency_ms": int((time.monotonic() - started) * 1000),
        },
    )
    return resp


def json_object(resp: httpx.Response, source: str) -> dict[str, Any]:
    """Decode a JSON object body."""

    try:
        data = resp.json()
    except ValueError as e:
        raise SourceResponseError(source, "response is not valid JSON") from e
    if not isinstance(data, dict):
        raise SourceResponseError(source, "response not a JSON object")
    return data
