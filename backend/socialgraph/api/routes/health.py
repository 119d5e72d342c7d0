"""Health Routes — process liveness and database readiness.

Invariants:
    - GET /api/v1/health/ answers 200 while the process serves requests
    - GET /api/v1/health/ready answers 503 until the database answers a query
    - Version reported is the running app's (request.app.version), never a literal

Design Decisions:
    - db_manager read through the module at call time, so a manager installed
      after import (lifespan, tests) is the one checked
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from socialgraph.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "socialgraph-api"


async def _database_reachable() -> bool:
    manager = database.db_manager
    if manager is None:
        return False
    return await manager.health_check()


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness():
    """503 with a reason while the database is unreachable."""
    if not await _database_reachable():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
