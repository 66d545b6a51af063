from __future__ import annotations

from itertools import count
from threading import Lock
from typing import List

from lca_insight.models import LCIEntry, LCIEntryDraft


class InventoryStore:
    """Ordered in-memory collection of LCI entries."""

    def __init__(self) -> None:
        self._entries: List[LCIEntry] = []
        self._ids = count(1)
        self._lock = Lock()

    @property
    def entries(self) -> List[LCIEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def add(self, draft: LCIEntryDraft) -> LCIEntry:
        with self._lock:
            entry = LCIEntry(id=next(self._ids), **draft.model_dump())
            self._entries.append(entry)
            return entry

    def remove(self, entry_id: int) -> None:
        with self._lock:
            self._entries = [entry for entry in self._entries if entry.id != entry_id]

    def clear(self) -> None:
        with self._lock:
            self._entries = []
