"""Countdown Schemas — request/response contracts for the config endpoints.

Invariants:
    - Every response carries a single `now`; remainingMs and isComplete derive from it
    - previous/new in update responses are canonical instant strings
    - DateUpdateRequest fields are both optional: which ones are required depends
      on PUT vs PATCH, and that is checked after the update lock

Design Decisions:
    - Views built from DerivedCountdown via classmethods: routes never compute
    - Same CamelModel base as the stored record so aliases match on the wire
"""

from typing import Literal

from pydantic import Field

from event_countdown.core.countdown import CountdownBreakdown, DerivedCountdown
from event_countdown.core.instants import to_epoch_ms
from event_countdown.schemas.event_config import (
    CamelModel, DisplaySettings, EventConfig, EventDetails, Instant, UpdateSettings,
)


class BreakdownView(CamelModel):
    days: int = Field(ge=0)
    hours: int = Field(ge=0, le=23)
    minutes: int = Field(ge=0, le=59)
    seconds: int = Field(ge=0, le=59)

    @classmethod
    def from_breakdown(cls, breakdown: CountdownBreakdown) -> "BreakdownView":
        return cls(
            days=breakdown.days, hours=breakdown.hours,
            minutes=breakdown.minutes, seconds=breakdown.seconds,
        )


class CountdownView(CamelModel):
    """Derived countdown, computed per request, never persisted."""
    now: Instant
    now_timestamp_ms: int
    target_timestamp_ms: int
    remaining_ms: int = Field(ge=0)
    is_complete: bool
    breakdown: BreakdownView

    @classmethod
    def from_countdown(cls, countdown: DerivedCountdown) -> "CountdownView":
        return cls(
            now=countdown.now,
            now_timestamp_ms=to_epoch_ms(countdown.now),
            target_timestamp_ms=to_epoch_ms(countdown.target),
            remaining_ms=countdown.remaining_ms,
            is_complete=countdown.is_complete,
            breakdown=BreakdownView.from_breakdown(countdown.breakdown),
        )


class FullConfigView(CamelModel):
    """GET /config: the stored record plus its live countdown."""
    event_details: EventDetails
    display: DisplaySettings
    settings: UpdateSettings
    countdown: CountdownView

    @classmethod
    def compose(
        cls, config: EventConfig, countdown: DerivedCountdown,
    ) -> "FullConfigView":
        return cls(
            event_details=config.event_details,
            display=config.display,
            settings=config.settings,
            countdown=CountdownView.from_countdown(countdown),
        )


class DateView(CamelModel):
    """GET /config/date: minimal projection for countdown widgets."""
    target_instant: Instant
    target_timestamp_ms: int
    timezone: str
    now: Instant
    remaining_ms: int = Field(ge=0)
    is_complete: bool

    @classmethod
    def compose(
        cls, config: EventConfig, countdown: DerivedCountdown,
    ) -> "DateView":
        return cls(
            target_instant=config.event_details.target_instant,
            target_timestamp_ms=to_epoch_ms(countdown.target),
            timezone=config.event_details.timezone,
            now=countdown.now,
            remaining_ms=countdown.remaining_ms,
            is_complete=countdown.is_complete,
        )


# ─── Updates ─────────────────────────────────────────────────────

class DateUpdateRequest(CamelModel):
    """PUT/PATCH body. Emptiness and format are checked by the service."""
    date: str | None = Field(
        None, description="ISO-8601 date/time for the event",
    )
    timezone: str | None = Field(
        None, description="Timezone identifier (optional)",
    )


class DateUpdateResponse(CamelModel):
    success: Literal[True] = True
    message: str
    previous: Instant
    new: Instant
    previous_timezone: str
    timezone: str
    changed_fields: list[str] | None = None
