"""Rotten Tomatoes movie search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from mediashelf.errors import ConfigurationError, SourceResponseError
from mediashelf.models.media import Movie
from mediashelf.sources.transport import json_object, make_client, send


@dataclass(frozen=True)
class RottenTomatoesClient:
    """Rotten Tomatoes public API client.

    Notes:
        - API key must be provided via settings (`MEDIASHELF_RT_API_KEY`).
    """

    api_key: str
    base_url: str = "https://api.rottentomatoes.com/api/public/v1.0"
    max_results: int = 10
    timeout_s: float = 8.0
    user_agent: str = "mediashelf/0.1"
    transport: httpx.AsyncBaseTransport | None = None
    name: str = "rt"

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Missing MEDIASHELF_RT_API_KEY for the Rotten Tomatoes source.")

    async def search(self, query: str) -> list[Movie]:
        """Search movies by title.

        Args:
            query: Search query.

        Returns:
            Movies in the order the API ranks them.
        """

        url = f"{self.base_url.rstrip('/')}/movies.json"
        params = {"apikey": self.api_key, "q": query, "page_limit": self.max_results}
        async with make_client(
            timeout_s=self.timeout_s, user_agent=self.user_agent, transport=self.transport
        ) as client:
            resp = await send(client, self.name, "GET", url, params=params)
        data = json_object(resp, self.name)

        if "error" in data:
            raise SourceResponseError(self.name, str(data["error"]))
        raw_movies = data.get("movies", [])
        if not isinstance(raw_movies, list):
            raise SourceResponseError(self.name, "response missing movies list")

        return [m for m in (_parse_movie(item) for item in raw_movies) if m is not None]


def _parse_movie(item: Any) -> Movie | None:
    if not isinstance(item, dict) or not item.get("id"):
        return None
    links = item.get("links") or {}
    posters = item.get("posters") or {}
    year = item.get("year")
    return Movie(
        id=str(item["id"]),
        title=item.get("title") or "",
        year=year if isinstance(year, int) and year > 0 else None,
        link=links.get("alternate"),
        image_url=posters.get("thumbnail") or posters.get("profile"),
    )
