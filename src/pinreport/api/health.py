"""
Health check endpoint for monitoring and orchestration.

Used by:
- Docker health checks
- Kubernetes liveness/readiness probes
- Load balancers
"""

from datetime import datetime

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pinreport.utils.datetime import APP_TIMEZONE

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


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns API health status, uptime and the configured business timezone.",
)
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Example response:
        {
            "status": "ok",
            "uptime_seconds": 3600,
            "timezone": "Asia/Ho_Chi_Minh"
        }
    """
    return JSONResponse(
        content={
            "status": "ok",
            "uptime_seconds": get_uptime_seconds(),
            "timezone": str(APP_TIMEZONE),
        },
        status_code=status.HTTP_200_OK,
    )
