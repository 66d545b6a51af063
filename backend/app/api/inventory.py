from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from lca_insight.orchestrator import AnalysisInProgressError, AnalysisOrchestrator
from lca_insight.utils.form import (
    EntryValidationError,
    suggest_materials,
    validate_entry_form,
)

from ..dependencies import get_orchestrator
from ..models.inventory import EntrySubmission

router = APIRouter(prefix="/api", tags=["inventory"])

BUSY_DETAIL = "An analysis is already in progress; try again when it completes."


def _snapshot_payload(orchestrator: AnalysisOrchestrator) -> Dict[str, Any]:
    return orchestrator.snapshot().model_dump(mode="json")


@router.get("/inventory")
def get_inventory(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Return the current inventory with its latest analysis."""

    return _snapshot_payload(orchestrator)


@router.post("/inventory")
def add_entry(
    submission: EntrySubmission,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Validate and append an entry, then re-analyse the whole inventory."""

    try:
        draft = validate_entry_form(
            submission.material,
            submission.quantity,
            submission.unit,
            submission.stage,
        )
    except EntryValidationError as exc:
        raise HTTPException(status_code=422, detail={"errors": exc.errors}) from exc
    try:
        orchestrator.add(draft)
    except AnalysisInProgressError as exc:
        raise HTTPException(status_code=409, detail=BUSY_DETAIL) from exc
    return _snapshot_payload(orchestrator)


@router.delete("/inventory/{entry_id}")
def delete_entry(
    entry_id: int,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    try:
        orchestrator.remove(entry_id)
    except AnalysisInProgressError as exc:
        raise HTTPException(status_code=409, detail=BUSY_DETAIL) from exc
    return _snapshot_payload(orchestrator)


@router.delete("/inventory")
def clear_inventory(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    try:
        orchestrator.clear()
    except AnalysisInProgressError as exc:
        raise HTTPException(status_code=409, detail=BUSY_DETAIL) from exc
    return _snapshot_payload(orchestrator)


@router.post("/analysis/rerun")
def rerun_analysis(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Re-submit the unchanged inventory, e.g. after a failed analysis."""

    try:
        orchestrator.rerun()
    except AnalysisInProgressError as exc:
        raise HTTPException(status_code=409, detail=BUSY_DETAIL) from exc
    return _snapshot_payload(orchestrator)


@router.get("/materials/suggestions")
def material_suggestions(q: Optional[str] = Query(default=None)) -> Dict[str, List[str]]:
    return {"suggestions": suggest_materials(q)}
