"""Persistence for saved entries."""

from __future__ import annotations

from mediashelf.store.entries import EntryStore

__all__ = ["EntryStore"]
