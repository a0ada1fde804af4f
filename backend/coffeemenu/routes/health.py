"""
Coffee Menu Backend — Health Check Route
==========================================

What:  GET /health for monitoring and container probes.
How:   Counts categories through the store; a failure there means the
       database is unreachable and the service reports itself unhealthy.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database query failed (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from coffeemenu import __version__
from coffeemenu.database import async_session_factory
from coffeemenu.exceptions import StoreError
from coffeemenu.schemas.catalog import HealthResponse
from coffeemenu.services.catalog_store import catalog_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    uptime = round(time.time() - _start_time, 2)
    try:
        async with async_session_factory() as db:
            categories = await catalog_store.count_categories(db)
    except StoreError as e:
        logger.warning("Health check: database unreachable: %s", e.message)
        body = HealthResponse(
            status="unhealthy",
            version=__version__,
            database="disconnected",
            uptime_seconds=uptime,
        )
        return JSONResponse(status_code=503, content=body.model_dump())

    return HealthResponse(
        status="healthy",
        version=__version__,
        database="connected",
        categories=categories,
        uptime_seconds=uptime,
    )
