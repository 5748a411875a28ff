"""Saved bookmark entries."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Entry(BaseModel):
    """A search result the user chose to keep."""

    id: str
    title: str
    link: str
    image_url: str | None = None
    media_type: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
