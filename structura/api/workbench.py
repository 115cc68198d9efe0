"""
Workbench session REST API endpoints.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from structura.models.dialect import DialectInfo
from structura.models.session import (
    AssistTriggerRequest,
    DialectSwitchRequest,
    SourceEditRequest,
    WorkbenchView,
)
from structura.services.dialects import DialectCatalog, get_dialect_catalog
from structura.services.workbench import Workbench, get_workbench

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["session"])


@router.get("", response_model=WorkbenchView)
async def get_session(workbench: Workbench = Depends(get_workbench)) -> WorkbenchView:
    """Current editor text, markers, tree and assist state."""
    return workbench.view()


@router.get("/dialects", response_model=List[DialectInfo])
async def list_dialects(catalog: DialectCatalog = Depends(get_dialect_catalog)) -> List[DialectInfo]:
    """Selectable dialects with their display labels and examples."""
    return catalog.all()


@router.get("/metrics")
async def get_metrics(workbench: Workbench = Depends(get_workbench)) -> Dict[str, Any]:
    """Analysis, assist and engine call counters for this session."""
    return workbench.metrics.get_metrics_summary()

@router.put("/dialect", response_model=WorkbenchView)
async def switch_dialect(
    request: DialectSwitchRequest,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchView:
    """
    Select another dialect.

    The editor is reset to the dialect's example; tokens and tree are
    cleared until the next edit is analyzed.
    """
    logger.info(f"Switching dialect to {request.dialect.value}")
    workbench.switch_dialect(request.dialect)
    return workbench.view()


@router.put("/source", response_model=WorkbenchView)
async def edit_source(
    request: SourceEditRequest,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchView:
    """
    Replace the editor text and analyze it.

    Analysis failures leave the previous tree in place.
    """
    await workbench.edit_source(request.code)
    return workbench.view()


@router.post("/assist", response_model=WorkbenchView)
async def request_assist(
    request: AssistTriggerRequest,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchView:
    """
    Ask for a repair suggestion for one error.

    Raises:
        HTTPException: 409 if a suggestion is already loading
    """
    task = workbench.request_assist(request.error_message, request.error_line)
    if task is None:
        raise HTTPException(status_code=409, detail="A suggestion is already loading")

    await task
    return workbench.view()
