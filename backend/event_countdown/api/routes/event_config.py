"""Event Config Routes — read the record with its countdown, update date/timezone.

Invariants:
    - Handlers only translate HTTP ↔ ConfigService calls; no rules here
    - Domain failures propagate as CountdownError and are rendered by api/error_handlers.py
    - PATCH without a body is an empty update (rejected by the service, after the lock check)
"""

from fastapi import APIRouter, Body, Depends

from event_countdown.api.dependencies import get_config_service
from event_countdown.schemas.countdown import (
    DateUpdateRequest, DateUpdateResponse, DateView, FullConfigView,
)
from event_countdown.services.config_service import ConfigService

router = APIRouter(prefix="/api/v1/config", tags=["config"])

_READ_ERRORS = {500: {"description": "Event configuration missing or invalid"}}
_UPDATE_ERRORS = {
    400: {"description": "Missing date, no fields, or malformed body"},
    403: {"description": "Updates are disabled for this event"},
    422: {"description": "Date is not a valid ISO-8601 instant"},
    500: {"description": "Event configuration missing, invalid, or unwritable"},
}


@router.get(
    "", response_model=FullConfigView, responses=_READ_ERRORS,
    summary="Get event details and countdown",
)
async def get_full_config(
    service: ConfigService = Depends(get_config_service),
):
    """Complete event record plus the live countdown."""
    return await service.get_full_config()


@router.get(
    "/date", response_model=DateView, responses=_READ_ERRORS,
    summary="Get event date",
)
async def get_date(service: ConfigService = Depends(get_config_service)):
    """Target instant, timezone, and countdown only."""
    return await service.get_date_only()


@router.put(
    "/date", response_model=DateUpdateResponse, responses=_UPDATE_ERRORS,
    response_model_exclude_none=True, summary="Replace event date",
)
async def replace_date(
    body: DateUpdateRequest | None = Body(None),
    service: ConfigService = Depends(get_config_service),
):
    """Set the target instant (required) and optionally the timezone."""
    body = body or DateUpdateRequest()
    return await service.update_full(body.date, body.timezone)


@router.patch(
    "/date", response_model=DateUpdateResponse, responses=_UPDATE_ERRORS,
    summary="Partially update event date",
)
async def patch_date(
    body: DateUpdateRequest | None = Body(None),
    service: ConfigService = Depends(get_config_service),
):
    """Update the target instant, the timezone, or both."""
    body = body or DateUpdateRequest()
    return await service.update_partial(body.date, body.timezone)
