"""Display normalization for source items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TypeVar

from mediashelf.models.media import MediaItem

ItemT = TypeVar("ItemT", bound=MediaItem)


def truncate(s: str | None, suffix: str, limit: int) -> str:
    """Bound a title to `limit` characters.

    Lengths are counted in characters, so multi-byte text is never split
    inside a code point. A string of exactly `limit` characters is returned
    unchanged; longer strings keep their first `limit` characters followed
    by `suffix`.

    Args:
        s: Title; `None` is treated as an empty string.
        suffix: Appended when truncation happens.
        limit: Maximum number of characters kept.

    Returns:
        The bounded title.
    """

    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    s = s or ""
    if len(s) <= limit:
        return s
    return s[:limit] + suffix


def normalize_item(item: ItemT, *, limit: int, suffix: str) -> ItemT:
    """Return a copy of `item` with only its display title truncated."""

    field = item.title_field
    return item.model_copy(update={field: truncate(getattr(item, field), suffix, limit)})


def normalize_items(items: Iterable[ItemT], *, limit: int, suffix: str) -> list[ItemT]:
    """Normalize items, preserving order."""

    return [normalize_item(it, limit=limit, suffix=suffix) for it in items]


@dataclass(frozen=True)
class TitleNormalizer:
    """Title truncation bound to one limit and suffix."""

    limit: int = 60
    suffix: str = "..."

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")

    def __call__(self, items: Iterable[ItemT]) -> list[ItemT]:
        return normalize_items(items, limit=self.limit, suffix=self.suffix)
