"""Bookmark store.

Entries live in a single JSON file that is rewritten atomically on every
change. The file is small and edited by one process, so the whole list is kept
in memory.
"""

from __future__ import annotations

import json
import os
import threading
import uuid
from pathlib import Path

from pydantic import HttpUrl, TypeAdapter

from mediashelf.logging import get_logger
from mediashelf.models.entry import Entry

logger = get_logger(__name__)

_ENTRIES = TypeAdapter(list[Entry])
_URL = TypeAdapter(HttpUrl)


class EntryStore:
    """JSON-file backed list of saved entries."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._entries: dict[str, Entry] = {}
        self._load_existing()

    def _load_existing(self) -> None:
        if not self._path.exists():
            return
        raw = self._path.read_text(encoding="utf-8").strip()
        if not raw:
            return
        for entry in _ENTRIES.validate_json(raw):
            self._entries[entry.id] = entry
        logger.info("Loaded %d entries from %s", len(self._entries), self._path)

    def add(self, *, title: str, link: str, media_type: str, image_url: str | None = None) -> Entry:
        """Save a new entry.

        Args:
            title: Display title.
            link: Where the item lives on its source.
            media_type: Free-form kind, e.g. ``movie``.
            image_url: Optional http(s) image URL.

        Returns:
            The stored entry.

        Raises:
            ValueError: If `image_url` is not a valid http(s) URL.
        """

        if image_url:
            _URL.validate_python(image_url)

        entry = Entry(
            id=uuid.uuid4().hex,
            title=title,
            link=link,
            image_url=image_url or None,
            media_type=media_type,
        )
        with self._lock:
            entries = {**self._entries, entry.id: entry}
            self._write(entries)
            self._entries = entries
        return entry

    def get(self, entry_id: str) -> Entry:
        """Get an entry by id."""

        with self._lock:
            return self._entries[entry_id]

    def list_all(self) -> list[Entry]:
        """List entries in insertion order."""

        with self._lock:
            return list(self._entries.values())

    def grouped(self) -> dict[str, list[Entry]]:
        """Entries grouped by media type."""

        out: dict[str, list[Entry]] = {}
        for entry in self.list_all():
            out.setdefault(entry.media_type, []).append(entry)
        return out

    def remove(self, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            KeyError: If no entry has this id.
        """

        with self._lock:
            if entry_id not in self._entries:
                raise KeyError(entry_id)
            entries = {k: v for k, v in self._entries.items() if k != entry_id}
            self._write(entries)
            self._entries = entries

    def count(self) -> int:
        """Number of saved entries."""

        with self._lock:
            return len(self._entries)

    def _write(self, entries: dict[str, Entry]) -> None:
        # Disk first; callers swap `_entries` only after this succeeds
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = _ENTRIES.dump_python(list(entries.values()), mode="json")
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)
