# textshare/repositories/history_repository.py
# Bounded, most-recent-first list of generated links, persisted under one key

from __future__ import annotations

import json
import logging
import threading
import time
from datetime import date, datetime
from typing import List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from textshare.constants import (
    HISTORY_CAPACITY,
    HISTORY_STORAGE_KEY,
    MAX_ENTRY_ID,
    PREVIEW_ELLIPSIS,
    PREVIEW_LENGTH,
)
from textshare.errors import PersistenceFailure
from textshare.observability.metrics import record_persistence_failure
from textshare.repositories.local_storage_repository import LocalStorage
from textshare.schemas.share import HistoryEntry

logger = logging.getLogger(__name__)


def make_preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """First `length` characters, with an ellipsis when text was cut."""
    if len(text) > length:
        return text[:length] + PREVIEW_ELLIPSIS
    return text


def format_entry_date(day: date) -> str:
    """Render a date as M/D/YYYY."""
    return f"{day.month}/{day.day}/{day.year}"


class HistoryStore:
    """
    Exclusive owner of the recent-links list.

    Entries are only ever prepended or evicted by capacity; storage errors
    are logged and swallowed so the in-memory list keeps working.
    """

    def __init__(
        self,
        storage: LocalStorage,
        key: str = HISTORY_STORAGE_KEY,
        capacity: int = HISTORY_CAPACITY,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.storage = storage
        self.key = key
        self.capacity = capacity
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> List[HistoryEntry]:
        """Read persisted history; absent or malformed data yields []."""
        try:
            raw = self.storage.get_item(self.key)
        except PersistenceFailure as e:
            record_persistence_failure("read")
            logger.warning("history read failed, starting empty: %s", e.message)
            raw = None

        entries = self._parse(raw) if raw is not None else []
        with self._lock:
            self._entries = entries
        return list(entries)

    def _parse(self, raw: str) -> List[HistoryEntry]:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            logger.warning("history blob under %r is not JSON, ignoring it", self.key)
            return []
        if not isinstance(data, list):
            logger.warning("history blob under %r is not a list, ignoring it", self.key)
            return []
        try:
            entries = [HistoryEntry.model_validate(item) for item in data]
        except PydanticValidationError:
            logger.warning("history blob under %r has malformed entries, ignoring it", self.key)
            return []
        kept = [e for e in entries if 0 <= e.id <= MAX_ENTRY_ID]
        if len(kept) != len(entries):
            logger.warning("dropped %d history entries with out-of-range ids", len(entries) - len(kept))
        return kept[:self.capacity]

    def _prepend(self, entry: HistoryEntry) -> List[HistoryEntry]:
        # caller holds self._lock
        updated = [entry, *self._entries][:self.capacity]
        self._entries = updated
        payload = json.dumps([e.model_dump() for e in updated], ensure_ascii=False)
        try:
            self.storage.set_item(self.key, payload)
        except PersistenceFailure as e:
            record_persistence_failure("write")
            logger.warning("history write failed, keeping in-memory list: %s", e.message)
        return list(updated)

    def append(self, entry: HistoryEntry) -> List[HistoryEntry]:
        """Insert entry at the front, evict beyond capacity, persist."""
        with self._lock:
            return self._prepend(entry)

    def record(self, text: str, link: str, now_ms: Optional[int] = None) -> HistoryEntry:
        """
        Build the entry for a freshly generated link and prepend it.

        The id is the clock reading, bumped past the current head when the
        clock has not advanced; the date always comes from the clock.
        """
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        created = datetime.fromtimestamp(now_ms / 1000)
        with self._lock:
            entry_id = now_ms
            if self._entries and entry_id <= self._entries[0].id:
                entry_id = self._entries[0].id + 1
            entry = HistoryEntry(
                id=entry_id,
                preview=make_preview(text),
                date=format_entry_date(created.date()),
                link=link,
            )
            self._prepend(entry)
        return entry
