"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from pae_inventory.api.dependencies import get_app_settings, get_gateway
from pae_inventory.application.dto.responses import HealthResponse, ProviderHealthResponse
from pae_inventory.config import Settings
from pae_inventory.core.interfaces import IInventoryMovementGateway

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/purchases", response_model=HealthResponse)
async def purchases_health(
    settings: Settings = Depends(get_app_settings),
    gateway: IInventoryMovementGateway = Depends(get_gateway),
) -> HealthResponse:
    """
    Purchases backend health check.

    The service still answers when the backend is down, but stock reads
    come back empty, so the status is reported as degraded.
    """
    start = time.time()
    try:
        available = await gateway.check_health()
        purchases_status = ProviderHealthResponse(
            name="purchases_api",
            available=available,
            latency_ms=(time.time() - start) * 1000,
            error=None if available else "health check failed",
        )
    except Exception as e:
        purchases_status = ProviderHealthResponse(
            name="purchases_api",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if purchases_status.available else "degraded",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        purchases_api=purchases_status,
    )
