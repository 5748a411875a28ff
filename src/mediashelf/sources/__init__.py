"""Content-search source clients."""

from __future__ import annotations

from mediashelf.config import Settings
from mediashelf.sources.goodreads import GoodreadsClient
from mediashelf.sources.protocol import SourceClient
from mediashelf.sources.rotten_tomatoes import RottenTomatoesClient
from mediashelf.sources.spotify import SpotifyClient

__all__ = [
    "GoodreadsClient",
    "RottenTomatoesClient",
    "SourceClient",
    "SpotifyClient",
    "build_sources",
]


def build_sources(settings: Settings) -> list[SourceClient]:
    """Create the movie, book and album clients, in that order.

    Raises:
        ConfigurationError: If a source is missing its credentials.
    """

    common = {
        "max_results": settings.search_max_results,
        "timeout_s": settings.http_timeout_s,
        "user_agent": settings.http_user_agent,
    }
    return [
        RottenTomatoesClient(
            api_key=settings.rt_api_key or "",
            base_url=settings.rt_api_base_url,
            **common,
        ),
        GoodreadsClient(
            api_key=settings.gr_api_key or "",
            api_secret=settings.gr_api_secret or "",
            base_url=settings.gr_api_base_url,
            **common,
        ),
        SpotifyClient(
            client_id=settings.sp_client_id or "",
            client_secret=settings.sp_client_secret or "",
            base_url=settings.sp_api_base_url,
            accounts_url=settings.sp_accounts_url,
            **common,
        ),
    ]
