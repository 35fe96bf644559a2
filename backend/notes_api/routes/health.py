"""
Notes API: Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 through a request-scoped session and reports the result.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   Database reachable (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api import __version__
from notes_api.database import get_db_session
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> HealthResponse:
    """
    Check that the database answers a trivial query.

    Returns:
        HealthResponse with database status and uptime.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        await db.rollback()
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
