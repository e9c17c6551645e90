"""
Health check endpoints.
"""

import time

import aiosqlite
from fastapi import APIRouter

from billwise.application.dto.responses import ComponentHealthResponse, HealthResponse
from billwise.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service status and uptime."""
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Pings the pool and reports the schema version. A database with
    pending migrations is reported as degraded: sales may fail on
    missing tables or columns.
    """
    from billwise.infrastructure.storage.sqlite import get_pool
    from billwise.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
    )

    try:
        pool = await get_pool()
        latency = await pool.ping()
        migrations = await get_migration_status(pool.db_path)
        db_status = ComponentHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=latency,
            schema_version=migrations.current_version,
            pending_migrations=migrations.pending,
        )
    except (aiosqlite.Error, OSError) as e:
        db_status = ComponentHealthResponse(
            name="sqlite",
            available=False,
            error=str(e),
        )

    if not db_status.available:
        status = "unhealthy"
    elif db_status.pending_migrations:
        status = "degraded"
    else:
        status = "healthy"

    return HealthResponse(
        status=status,
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
