"""Source-specific result items."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field


class MediaItem(BaseModel):
    """Common shape of an item returned by a content-search source.

    Only the display title is ever touched by the aggregator; `title_field`
    names the attribute that holds it for each item type.
    """

    title_field: ClassVar[str] = "title"

    id: str
    link: str | None = None
    image_url: str | None = None

    @property
    def display_title(self) -> str:
        return getattr(self, self.title_field) or ""


class Movie(MediaItem):
    """A Rotten Tomatoes movie."""

    title: str = ""
    year: int | None = None


class Book(MediaItem):
    """A Goodreads work, represented by its best book."""

    title: str = ""
    author: str | None = None


class Album(MediaItem):
    """A Spotify album."""

    title_field: ClassVar[str] = "name"

    name: str = ""
    artists: list[str] = Field(default_factory=list)
