"""Pydantic models used across the project."""

from __future__ import annotations

from mediashelf.models.bundle import ResultBundle, SourceFailure, SourceSlot
from mediashelf.models.entry import Entry
from mediashelf.models.media import Album, Book, MediaItem, Movie

__all__ = [
    "Album",
    "Book",
    "Entry",
    "MediaItem",
    "Movie",
    "ResultBundle",
    "SourceFailure",
    "SourceSlot",
]
