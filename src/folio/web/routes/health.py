"""Health check endpoint (API liveness plus database reachability)."""

import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from folio import __version__
from folio.db.database import ping
from folio.web.schemas import HealthDatabase, HealthEnvironment, HealthResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check(request: Request) -> JSONResponse:
    """Check API and database health (503 when the database is unreachable)."""
    config = request.app.state.config

    db_status = "connected"
    db_error = None
    response_time_ms = None

    started = time.perf_counter()
    try:
        ping()
        response_time_ms = round((time.perf_counter() - started) * 1000, 2)
    except SQLAlchemyError as e:
        db_status = "error"
        db_error = str(getattr(e, "orig", None) or e)
        logger.error("health.database_error", error=db_error)

    health = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=HealthEnvironment(
            environment=config.environment,
            has_database_url=not config.database.is_default,
            has_supabase_url=bool(config.auth.supabase_url),
            has_supabase_key=bool(config.auth.supabase_anon_key),
        ),
        database=HealthDatabase(
            status=db_status,
            response_time_ms=response_time_ms,
            error=None if config.is_production else db_error,
        ),
    )

    return JSONResponse(
        health.model_dump(),
        status_code=200 if db_status == "connected" else 503,
    )
