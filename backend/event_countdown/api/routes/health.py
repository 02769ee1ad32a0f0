"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the event record cannot be loaded (readiness)

Design Decisions:
    - Readiness loads AND validates the record: a present-but-corrupt file is not ready
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from event_countdown.api.dependencies import get_config_service
from event_countdown.config import get_settings
from event_countdown.core.errors import ConfigurationError
from event_countdown.services.config_service import ConfigService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    }


@router.get("/ready")
async def readiness_check(
    service: ConfigService = Depends(get_config_service),
):
    """Readiness probe: the event record loads and passes the schema."""
    try:
        await service.get_date_only()
    except ConfigurationError as e:
        logger.warning(
            f"Readiness check failed: {e.message}",
            extra={"error_code": e.code},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": e.code.lower()},
        )
    return {"status": "ready", "checks": {"event_config": "healthy"}}
