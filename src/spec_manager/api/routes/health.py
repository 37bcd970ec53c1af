"""Health check endpoints."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from spec_manager.api.middleware.rate_limit import limiter
from spec_manager.config import settings
from spec_manager.models.common import ok

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_STARTED_AT = time.monotonic()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check():
    """Return service liveness."""
    return ok({
        "status": "healthy",
        "service": "spec-manager-api",
        "timestamp": _now(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "environment": settings.environment,
    })


@router.get("/health/db")
async def database_health(request: Request):
    """Check database connectivity with a trivial query."""
    try:
        session_factory = request.app.state.db_session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Database health check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "data": {"status": "unhealthy", "database": "disconnected", "timestamp": _now()},
            },
        )
    return ok({"status": "healthy", "database": "connected", "timestamp": _now()})


# Exemption is looked up by endpoint name; the async callables stay registered as-is
limiter.exempt(health_check)
limiter.exempt(database_health)
