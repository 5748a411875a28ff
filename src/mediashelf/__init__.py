"""Concurrent movie, book and album search with a personal shelf."""

from __future__ import annotations

__version__ = "0.1.0"
