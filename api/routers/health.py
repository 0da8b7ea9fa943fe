"""Health and service information endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel

from api.deps import SettingsDep

API_VERSION = "0.1.0"

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    """Liveness report. The analyzer has no backing services to check."""

    status: str
    timestamp: str
    version: str
    uptime_seconds: int


class ServiceInfoResponse(BaseModel):
    name: str
    version: str
    env: str
    relay_count: int
    docs: str | None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=API_VERSION,
        uptime_seconds=int(time.monotonic() - _started_at),
    )


@router.get("/", response_model=ServiceInfoResponse)
async def service_info(settings: SettingsDep) -> ServiceInfoResponse:
    """Describe this deployment: version, environment and configured relays."""
    return ServiceInfoResponse(
        name="Website Benchmark API",
        version=API_VERSION,
        env=settings.env,
        relay_count=len(settings.relay_urls),
        docs="/docs" if settings.debug or not settings.is_production else None,
    )
