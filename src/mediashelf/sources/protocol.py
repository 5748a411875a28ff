"""Source client interface."""

from __future__ import annotations

from typing import Awaitable, Protocol, Sequence, runtime_checkable

from mediashelf.models.media import MediaItem


@runtime_checkable
class SourceClient(Protocol):
    """A content-search provider.

    `search` may be a coroutine function or a plain blocking function. Errors
    are raised, never returned.
    """

    name: str

    def search(self, query: str) -> Sequence[MediaItem] | Awaitable[Sequence[MediaItem]]:
        """Search the provider."""
