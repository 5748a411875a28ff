"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Sequence

import pytest

from mediashelf.models.media import Album, Book, MediaItem, Movie


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handlers/level that configure_logging attaches to the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)


@dataclass
class FakeSource:
    """Async source returning canned items or raising a canned error."""

    name: str
    items: Sequence[MediaItem] = ()
    error: Exception | None = None
    delay_s: float = 0.0
    calls: list[str] = field(default_factory=list)

    async def search(self, query: str) -> list[MediaItem]:
        self.calls.append(query)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return list(self.items)


def make_movies(n: int) -> list[Movie]:
    return [
        Movie(id=f"m{i}", title=f"Movie {i}", year=2000 + i, link=f"https://rt.example/m{i}")
        for i in range(n)
    ]


def make_books(n: int) -> list[Book]:
    return [Book(id=f"b{i}", title=f"Book {i}", author="Author") for i in range(n)]


def make_albums(n: int) -> list[Album]:
    return [Album(id=f"a{i}", name=f"Album {i}", artists=["Band"]) for i in range(n)]


@pytest.fixture
def three_sources() -> tuple[FakeSource, FakeSource, FakeSource]:
    return (
        FakeSource("rt", items=make_movies(5)),
        FakeSource("gr", items=make_books(3)),
        FakeSource("sp", items=make_albums(2)),
    )
