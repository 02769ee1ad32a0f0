"""Update Enforcement — pure validation of date/timezone updates before any mutation.

Invariants:
    - The lock check runs first: a locked record rejects every payload, valid or not
    - plan_* functions validate ALL supplied fields before returning anything,
      so the caller never applies one field of a two-field update
    - Empty strings and None both mean "not supplied"
    - next_last_updated is strictly greater than the previous stamp

Design Decisions:
    - Raises typed CountdownErrors instead of returning status dicts: the service
      boundary maps them straight to HTTP (ADR: uniform error shape)
    - Timezone checked by shape only (IANA-style identifier); zone database
      lookups depend on host tzdata and are left to clients
"""

import re
from dataclasses import dataclass
from datetime import datetime

from event_countdown.core.errors import (
    ForbiddenError, InvalidDateError, ValidationError,
)
from event_countdown.core.instants import MILLISECOND, parse_instant, truncate_to_ms

MAX_TIMEZONE_LENGTH: int = 64
_TIMEZONE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_+\-]*(/[A-Za-z0-9_+\-]+)*$")


@dataclass(frozen=True)
class DateUpdate:
    """Validated update. None means the field is left as stored."""
    target: datetime | None = None
    timezone: str | None = None

    @property
    def changed_fields(self) -> list[str]:
        fields = []
        if self.target is not None:
            fields.append("targetInstant")
        if self.timezone is not None:
            fields.append("timezone")
        return fields


def is_supplied(value: str | None) -> bool:
    return value is not None and value != ""


def check_updates_allowed(updates_allowed: bool) -> None:
    """Rule 1: the one-way lock. Raises ForbiddenError when disabled."""
    if not updates_allowed:
        raise ForbiddenError()


def validate_date(value: str) -> datetime:
    """Parse a supplied date or raise InvalidDateError (422)."""
    try:
        return parse_instant(value)
    except ValueError as e:
        raise InvalidDateError(value) from e


def validate_timezone(value: str) -> str:
    """Check a supplied timezone identifier or raise ValidationError (400)."""
    candidate = value.strip()
    if (
        not candidate
        or len(candidate) > MAX_TIMEZONE_LENGTH
        or not _TIMEZONE_PATTERN.match(candidate)
    ):
        raise ValidationError(
            f"Invalid timezone identifier: {value!r}",
            "INVALID_TIMEZONE", field="timezone",
        )
    return candidate


def plan_full_update(date: str | None, timezone: str | None) -> DateUpdate:
    """Full replace: date required, timezone optional."""
    if not is_supplied(date):
        raise ValidationError(
            "Date is required", "DATE_REQUIRED", field="date",
        )
    target = validate_date(date)
    tz = validate_timezone(timezone) if is_supplied(timezone) else None
    return DateUpdate(target=target, timezone=tz)


def plan_partial_update(date: str | None, timezone: str | None) -> DateUpdate:
    """Partial update: any non-empty subset of {date, timezone}."""
    if not is_supplied(date) and not is_supplied(timezone):
        raise ValidationError(
            "At least one field (date or timezone) must be provided",
            "NO_UPDATE_FIELDS",
        )
    target = validate_date(date) if is_supplied(date) else None
    tz = validate_timezone(timezone) if is_supplied(timezone) else None
    return DateUpdate(target=target, timezone=tz)


def next_last_updated(previous: datetime, now: datetime) -> datetime:
    """Stamp for a commit: `now`, bumped past `previous` if the clock lags."""
    now = truncate_to_ms(now)
    floor = truncate_to_ms(previous) + MILLISECOND
    return now if now >= floor else floor
