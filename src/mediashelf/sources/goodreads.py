"""Goodreads book search."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

import httpx

from mediashelf.errors import ConfigurationError, SourceResponseError
from mediashelf.models.media import Book
from mediashelf.sources.transport import make_client, send

BOOK_URL = "https://www.goodreads.com/book/show/{id}"


@dataclass(frozen=True)
class GoodreadsClient:
    """Goodreads search API client.

    The API answers in XML: each `work` carries a `best_book` which becomes a
    :class:`Book`.
    """

    api_key: str
    api_secret: str
    base_url: str = "https://www.goodreads.com"
    max_results: int = 10
    timeout_s: float = 8.0
    user_agent: str = "mediashelf/0.1"
    transport: httpx.AsyncBaseTransport | None = None
    name: str = "gr"

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_secret:
            raise ConfigurationError(
                "Missing MEDIASHELF_GR_API_KEY / MEDIASHELF_GR_API_SECRET for the Goodreads source."
            )

    async def search(self, query: str) -> list[Book]:
        """Search books by title, author or ISBN."""

        url = f"{self.base_url.rstrip('/')}/search/index.xml"
        async with make_client(
            timeout_s=self.timeout_s, user_agent=self.user_agent, transport=self.transport
        ) as client:
            resp = await send(client, self.name, "GET", url, params={"key": self.api_key, "q": query})

        try:
            root = ET.fromstring(resp.content)
        except ET.ParseError as e:
            raise SourceResponseError(self.name, f"response is not valid XML: {e}") from e

        results = root.find("search/results")
        if results is None:
            raise SourceResponseError(self.name, "response missing search results")

        books: list[Book] = []
        for work in results.findall("work"):
            book = _parse_best_book(work.find("best_book"))
            if book is not None:
                books.append(book)
            if len(books) >= self.max_results:
                break
        return books


def _text(el: ET.Element | None, path: str) -> str | None:
    if el is None:
        return None
    found = el.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip() or None


def _parse_best_book(el: ET.Element | None) -> Book | None:
    book_id = _text(el, "id")
    if not book_id:
        return None
    return Book(
        id=book_id,
        title=_text(el, "title") or "",
        author=_text(el, "author/name"),
        link=BOOK_URL.format(id=book_id),
        image_url=_text(el, "image_url"),
    )
