"""
PetClinic Backend — Health Check Route
========================================

What:  Health probe for load balancers and container orchestration.
How:   Asks the storage session for a `SELECT 1` round trip. A backend that
       cannot reach its store is reported unhealthy with HTTP 503.
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from petclinic import __version__
from petclinic.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request):
    store_status = "disconnected"
    session = getattr(request.app.state, "storage_session", None)
    if session is not None and await session.ping():
        store_status = "connected"
    else:
        logger.warning("Health check: store unreachable")

    body = HealthResponse(
        status="healthy" if store_status == "connected" else "unhealthy",
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    status_code = 200 if store_status == "connected" else 503
    return JSONResponse(status_code=status_code, content=body.model_dump())
