"""Health check endpoints for monitoring and orchestration."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from meetsync.config import settings

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    timestamp: datetime
    version: str
    environment: str


class LivenessResponse(BaseModel):
    """Response model for liveness probe."""

    status: str


class ReadinessResponse(BaseModel):
    """Response model for readiness probe."""

    status: str
    checks: dict[str, str]


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe - app is running."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Readiness probe - app can serve traffic.

    Checks:
    - Room store and session router are wired
    - Minutes scheduler is running (when enabled)
    """
    state = request.app.state
    checks: dict[str, str] = {"api": "ok"}
    checks["room_store"] = "ok" if getattr(state, "room_store", None) else "failed"
    checks["session_router"] = (
        "ok" if getattr(state, "session_router", None) else "failed"
    )

    scheduler = getattr(state, "mom_scheduler", None)
    if scheduler is None:
        checks["mom_scheduler"] = "disabled"
    else:
        checks["mom_scheduler"] = "ok" if scheduler.running else "failed"

    ok = all(v in ("ok", "disabled") for v in checks.values())
    return ReadinessResponse(status="ready" if ok else "not_ready", checks=checks)
