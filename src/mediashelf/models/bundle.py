"""Aggregation result models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, SerializeAsAny

from mediashelf.models.media import MediaItem


class SourceSlot(BaseModel):
    """The outcome of one source for one query."""

    source: str
    items: list[SerializeAsAny[MediaItem]] = Field(default_factory=list)
    ok: bool = True
    error: str | None = None
    elapsed_ms: int = 0


class ResultBundle(BaseModel):
    """One slot per configured source, in configuration order."""

    query: str
    slots: list[SourceSlot]

    @property
    def names(self) -> list[str]:
        return [s.source for s in self.slots]

    @property
    def failed(self) -> list[str]:
        """Names of sources whose call failed."""

        return [s.source for s in self.slots if not s.ok]

    def items(self, source: str) -> list[MediaItem]:
        """Items for a source; empty if it failed."""

        return self[source].items

    def __getitem__(self, source: str) -> SourceSlot:
        for slot in self.slots:
            if slot.source == source:
                return slot
        raise KeyError(source)

    def __len__(self) -> int:
        return len(self.slots)


class SourceFailure(BaseModel):
    """Structured record of one source failing during an aggregation call."""

    source: str
    query: str
    error_type: str
    error: str
    elapsed_ms: int = 0
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
