"""
RecordStore — Health Check Route
=================================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Reports whether the data file is present, plus version and uptime.

Status levels:
    - healthy:   data file exists
    - degraded:  data file missing (next load() sees an empty collection)
"""

import logging
import time

from fastapi import APIRouter, Request

from recordstore import __version__
from recordstore.schemas.envelope import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    store = request.app.state.record_service.store
    overall = "healthy"
    store_status = "available"

    if not await store.exists():
        store_status = "missing"
        overall = "degraded"
        logger.warning("Health check: data file missing: %s", store.data_file)

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
