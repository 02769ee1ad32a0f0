"""Config Service — read, full update, and partial update of the single event record.

Invariants:
    - Store passed in explicitly; the service keeps no record between calls
    - The clock is sampled once per read (countdown) and once per commit (lastUpdated)
    - Update order: load → lock check → validate ALL fields → build new record → save
    - The loaded record is never mutated; a new record is built only after validation
    - Updates are serialized by an asyncio.Lock (reads do not take it)

Design Decisions:
    - Pure rules in core/enforce_update.py, IO here (ADR: impureim sandwich)
    - Errors propagate as typed CountdownErrors; api/error_handlers.py renders them
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from event_countdown.core.countdown import compute_countdown
from event_countdown.core.enforce_update import (
    DateUpdate, check_updates_allowed, next_last_updated,
    plan_full_update, plan_partial_update,
)
from event_countdown.core.instants import format_instant, utc_now
from event_countdown.core.repository_protocols import ConfigRepository
from event_countdown.schemas.countdown import (
    DateUpdateResponse, DateView, FullConfigView,
)
from event_countdown.schemas.event_config import EventConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class ConfigService:
    """Orchestrates the event record: load, derive countdown, validate, persist."""

    def __init__(self, store: ConfigRepository, clock: Clock = utc_now):
        self._store = store
        self._clock = clock
        self._write_lock = asyncio.Lock()

    # ─── reads ───────────────────────────────────────────────────

    async def get_full_config(self) -> FullConfigView:
        """Stored record plus a countdown computed against one clock sample."""
        config = await self._store.load()
        countdown = compute_countdown(
            config.event_details.target_instant, self._clock(),
        )
        return FullConfigView.compose(config, countdown)

    async def get_date_only(self) -> DateView:
        config = await self._store.load()
        countdown = compute_countdown(
            config.event_details.target_instant, self._clock(),
        )
        return DateView.compose(config, countdown)

    # ─── updates ─────────────────────────────────────────────────

    async def update_full(
        self, date: str | None, timezone: str | None = None,
    ) -> DateUpdateResponse:
        """Replace the target instant (required) and optionally the timezone."""
        async with self._write_lock:
            previous = await self._store.load()
            check_updates_allowed(previous.settings.updates_allowed)
            update = plan_full_update(date, timezone)
            current = await self._commit(previous, update)
        return _build_response(previous, current, update)

    async def update_partial(
        self, date: str | None = None, timezone: str | None = None,
    ) -> DateUpdateResponse:
        """Apply any non-empty subset of {date, timezone}, all or nothing."""
        async with self._write_lock:
            previous = await self._store.load()
            check_updates_allowed(previous.settings.updates_allowed)
            update = plan_partial_update(date, timezone)
            current = await self._commit(previous, update)
        response = _build_response(previous, current, update)
        response.changed_fields = update.changed_fields
        return response

    async def _commit(self, previous: EventConfig, update: DateUpdate) -> EventConfig:
        details_changes: dict = {}
        if update.target is not None:
            details_changes["target_instant"] = update.target
        if update.timezone is not None:
            details_changes["timezone"] = update.timezone

        stamp = next_last_updated(previous.settings.last_updated, self._clock())
        candidate = previous.model_copy(update={
            "event_details": previous.event_details.model_copy(update=details_changes),
            "settings": previous.settings.model_copy(update={"last_updated": stamp}),
        })
        saved = await self._store.save(candidate)
        logger.info(
            f"Event config updated: {', '.join(update.changed_fields)}",
            extra={
                "changed_fields": update.changed_fields,
                "target_instant": format_instant(saved.event_details.target_instant),
            },
        )
        return saved


def _build_response(
    previous: EventConfig, current: EventConfig, update: DateUpdate,
) -> DateUpdateResponse:
    return DateUpdateResponse(
        message=_describe(update),
        previous=previous.event_details.target_instant,
        new=current.event_details.target_instant,
        previous_timezone=previous.event_details.timezone,
        timezone=current.event_details.timezone,
    )


def _describe(update: DateUpdate) -> str:
    parts = []
    if update.target is not None:
        parts.append("date")
    if update.timezone is not None:
        parts.append("timezone")
    return f"Event {' and '.join(parts)} updated successfully"
