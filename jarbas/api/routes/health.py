"""Health Probes — liveness (process up) and readiness (database reachable)."""

import logging

from fastapi import APIRouter, Response, status

from jarbas import __version__
from jarbas.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness() -> dict:
    return {"status": "healthy", "service": "jarbas-api", "version": __version__}


@router.get("/ready")
async def readiness(response: Response) -> dict:
    """503 until the database answers a trivial query."""
    manager = database.db_manager
    if manager is not None and await manager.health_check():
        return {"status": "ready", "checks": {"database": "healthy"}}

    logger.warning("Readiness probe failed: database unavailable")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "not_ready", "reason": "database_unavailable"}
