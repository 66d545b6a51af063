"""Keeps the inventory and its analysis consistent across mutations."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import Lock
from typing import Any, Callable, Iterator, List, Optional

from lca_insight.analysis import AnalysisClient, AnalysisError, MalformedResponse
from lca_insight.models import (
    AnalysisSnapshot,
    AnalysisStatus,
    ImpactData,
    LCIEntry,
    LCIEntryDraft,
)
from lca_insight.utils.aggregate import by_material, by_stage, total
from lca_insight.utils.inventory import InventoryStore

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Failed to get analysis from AI. Please check your API key and try again."
)


class AnalysisInProgressError(RuntimeError):
    """Raised when a mutation arrives while an analysis is still in flight."""


class AnalysisOrchestrator:
    """Re-runs the full analysis on every inventory mutation.

    At most one mutation (and therefore one analysis request) runs at a time:
    ``_busy`` is held from the store mutation until the analysis outcome has
    been recorded, and competing callers get :class:`AnalysisInProgressError`
    instead of queueing.
    """

    def __init__(
        self,
        client: AnalysisClient,
        store: Optional[InventoryStore] = None,
    ) -> None:
        self._client = client
        self._store = store if store is not None else InventoryStore()
        self._busy = Lock()
        self._state_lock = Lock()
        self._status = AnalysisStatus.IDLE
        self._impacts: List[ImpactData] = []
        self._recommendations: List[str] = []
        self._error: Optional[str] = None

    @property
    def store(self) -> InventoryStore:
        return self._store

    @property
    def status(self) -> AnalysisStatus:
        with self._state_lock:
            return self._status

    def snapshot(self) -> AnalysisSnapshot:
        with self._state_lock:
            stage_rows = by_stage(self._impacts)
            return AnalysisSnapshot(
                status=self._status,
                entries=self._store.entries,
                impacts=list(self._impacts),
                recommendations=list(self._recommendations),
                error=self._error,
                by_stage=stage_rows,
                by_material=by_material(self._impacts),
                total_co2eq=total(stage_rows),
            )

    def add(self, draft: LCIEntryDraft) -> LCIEntry:
        return self._mutate(lambda: self._store.add(draft))

    def remove(self, entry_id: int) -> None:
        self._mutate(lambda: self._store.remove(entry_id))

    def clear(self) -> None:
        self._mutate(self._store.clear)

    def rerun(self) -> None:
        """Analyse the current inventory again without changing it."""

        self._mutate(None)

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if not self._busy.acquire(blocking=False):
            raise AnalysisInProgressError("an analysis is already in progress")
        try:
            yield
        finally:
            self._busy.release()

    def _mutate(self, mutation: Optional[Callable[[], Any]]) -> Any:
        """Apply ``mutation`` and re-analyse the resulting inventory.

        The store change and the move to LOADING (or IDLE, when the inventory
        ends up empty) happen under ``_state_lock`` together, so a snapshot
        never pairs the new inventory with results from the old one.
        """

        with self._exclusive():
            with self._state_lock:
                outcome = mutation() if mutation is not None else None
                entries = self._store.entries
                self._impacts = []
                self._recommendations = []
                self._error = None
                self._status = AnalysisStatus.LOADING if entries else AnalysisStatus.IDLE
            if entries:
                self._analyse(entries)
        return outcome

    def _analyse(self, entries: List[LCIEntry]) -> None:
        try:
            result = self._client.analyze(entries)
        except AnalysisError as exc:
            kind = "malformed response" if isinstance(exc, MalformedResponse) else "service error"
            logger.warning("Analysis of %d entries failed (%s): %s", len(entries), kind, exc)
            self._fail()
            return
        except Exception:
            self._fail()
            raise

        with self._state_lock:
            self._status = AnalysisStatus.READY
            self._impacts = list(result.impacts)
            self._recommendations = list(result.recommendations)
            self._error = None

    def _fail(self) -> None:
        with self._state_lock:
            self._status = AnalysisStatus.FAILED
            self._impacts = []
            self._recommendations = []
            self._error = ANALYSIS_FAILED_MESSAGE


__all__ = ["ANALYSIS_FAILED_MESSAGE", "AnalysisInProgressError", "AnalysisOrchestrator"]
