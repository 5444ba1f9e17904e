"""
Service info and health check endpoints.

Used by:
- Docker health checks
- Load balancers
- Agents' handhelds discovering the API
"""

import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from parkmeter.core.db import get_db

SERVICE_NAME = "ParkMeter API"
SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["health"])

# Global app start time (set in lifespan)
_app_start_time: datetime | None = None


def set_app_start_time(start_time: datetime) -> None:
    """Called by lifespan to track when app started."""
    global _app_start_time
    _app_start_time = start_time


def get_uptime_seconds() -> int:
    """Calculate seconds since app start."""
    if _app_start_time is None:
        return 0
    return int((datetime.now() - _app_start_time).total_seconds())


async def check_database(db: AsyncSession) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns: {"status": "ok"|"down", "response_time_ms": N, "error": str (if down)}
    """
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
        return {
            "status": "ok",
            "response_time_ms": int((time.time() - start) * 1000),
        }
    except Exception as e:
        return {
            "status": "down",
            "response_time_ms": int((time.time() - start) * 1000),
            "error": type(e).__name__,
        }


@router.get("/", summary="Service information")
async def service_info() -> dict[str, Any]:
    """Name, version and the main endpoints of the service."""
    return {
        "success": True,
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "endpoints": {
            "verify": "GET /api/parking/verify/{plate}",
            "pay": "POST /api/parking/pay",
            "extend": "POST /api/parking/extend",
            "history": "GET /api/parking/history/{plate}",
            "active": "GET /api/parking/active",
            "expired": "GET /api/parking/expired",
            "mark_fined": "PATCH /api/parking/{id}/mark-fined",
            "zones": "GET /api/parking/zones",
            "statistics": "GET /api/parking/statistics",
        },
    }


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns 200 with status 'degraded' when the database is unreachable.",
)
async def health_check(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Example response (healthy):
        {
            "status": "ok",
            "uptime_seconds": 3600,
            "checks": {"database": {"status": "ok", "response_time_ms": 5}}
        }
    """
    db_check = await check_database(db)
    overall_status = "ok" if db_check["status"] == "ok" else "degraded"

    return JSONResponse(
        content={
            "status": overall_status,
            "uptime_seconds": get_uptime_seconds(),
            "checks": {"database": db_check},
        },
        status_code=status.HTTP_200_OK,
    )
