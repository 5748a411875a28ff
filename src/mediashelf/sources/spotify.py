"""Spotify album search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from mediashelf.errors import ConfigurationError, SourceError, SourceResponseError
from mediashelf.models.media import Album
from mediashelf.sources.transport import json_object, make_client, send


@dataclass(frozen=True)
class SpotifyClient:
    """Spotify Web API client using the client-credentials flow.

    A fresh token is requested for every search; both requests share one
    connection pool and the caller's deadline.
    """

    client_id: str
    client_secret: str
    base_url: str = "https://api.spotify.com"
    accounts_url: str = "https://accounts.spotify.com/api/token"
    max_results: int = 10
    timeout_s: float = 8.0
    user_agent: str = "mediashelf/0.1"
    transport: httpx.AsyncBaseTransport | None = None
    name: str = "sp"

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_secret:
            raise ConfigurationError(
                "Missing MEDIASHELF_SP_CLIENT_ID / MEDIASHELF_SP_CLIENT_SECRET for the Spotify source."
            )

    async def search(self, query: str) -> list[Album]:
        """Search albums by name."""

        async with make_client(
            timeout_s=self.timeout_s, user_agent=self.user_agent, transport=self.transport
        ) as client:
            token = await self._fetch_token(client)
            resp = await send(
                client,
                self.name,
                "GET",
                f"{self.base_url.rstrip('/')}/v1/search",
                params={"q": query, "type": "album", "limit": self.max_results},
                headers={"Authorization": f"Bearer {token}"},
            )
        data = json_object(resp, self.name)

        albums = data.get("albums")
        if not isinstance(albums, dict) or not isinstance(albums.get("items"), list):
            raise SourceResponseError(self.name, "response missing albums.items list")

        return [a for a in (_parse_album(item) for item in albums["items"]) if a is not None]

    async def _fetch_token(self, client: httpx.AsyncClient) -> str:
        resp = await send(
            client,
            self.name,
            "POST",
            self.accounts_url,
            data={"grant_type": "client_credentials"},
            auth=(self.client_id, self.client_secret),
        )
        token = json_object(resp, self.name).get("access_token")
        if not isinstance(token, str) or not token:
            raise SourceError(self.name, "token response missing access_token")
        return token


def _parse_album(item: Any) -> Album | None:
    if not isinstance(item, dict) or not item.get("id"):
        return None
    images = item.get("images") or []
    artists = item.get("artists") or []
    return Album(
        id=str(item["id"]),
        name=item.get("name") or "",
        artists=[a["name"] for a in artists if isinstance(a, dict) and a.get("name")],
        link=(item.get("external_urls") or {}).get("spotify") or item.get("uri"),
        image_url=images[0].get("url") if images and isinstance(images[0], dict) else None,
    )
