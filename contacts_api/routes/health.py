"""
Contacts API — Health Check Route
===================================

What:  Liveness/readiness report for monitors and load balancers.
How:   Pings the database through the accessor. The endpoint always answers
       200; ``status`` says whether storage is reachable.
"""

import logging
import time

from fastapi import APIRouter, Depends

from contacts_api import __version__
from contacts_api.database import DatabaseAccessor, get_accessor
from contacts_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    accessor: DatabaseAccessor = Depends(get_accessor),
) -> HealthResponse:
    connected = await accessor.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
