"""POST endpoints for user actions (manual retry from the error banner)."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from longshort.dashboard.routes.api import status_to_dict

log = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/retry")
async def retry_refresh(request: Request) -> JSONResponse:
    """Re-run acquisition immediately and return the resulting status.

    Joins the in-flight cycle when one is already running.
    """
    scheduler = request.app.state.scheduler
    log.info("manual_retry_requested")

    result = await scheduler.refresh_now()
    if result is None:
        # Cycle cancelled or failed; report whatever snapshot is current
        result = request.app.state.acquirer.latest

    return JSONResponse(
        content=status_to_dict(result, scheduler.is_running, scheduler.interval)
    )
