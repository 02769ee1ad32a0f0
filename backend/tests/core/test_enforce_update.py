"""Update Enforcement — tests for the pure update rules.

Tests cover:
    - the lock raises ForbiddenError
    - full update requires a date; partial update requires any field
    - invalid dates raise InvalidDateError (422), bad timezones ValidationError (400)
    - a two-field partial plan fails as a whole when either field is invalid
    - next_last_updated is strictly increasing
"""

from datetime import datetime, timedelta, timezone

import pytest

from event_countdown.core.enforce_update import (
    DateUpdate, check_updates_allowed, next_last_updated,
    plan_full_update, plan_partial_update, validate_timezone,
)
from event_countdown.core.errors import (
    ForbiddenError, InvalidDateError, ValidationError,
)

T = datetime(2026, 1, 1, tzinfo=timezone.utc)


# ─── lock ────────────────────────────────────────────────────────

def test_locked_record_is_forbidden():
    with pytest.raises(ForbiddenError) as exc:
        check_updates_allowed(False)
    assert exc.value.code == "UPDATES_DISABLED"
    assert exc.value.http_status == 403


def test_unlocked_record_passes():
    check_updates_allowed(True)


# ─── full ────────────────────────────────────────────────────────

@pytest.mark.parametrize("date", [None, ""])
def test_full_update_requires_date(date):
    with pytest.raises(ValidationError) as exc:
        plan_full_update(date, "UTC")
    assert exc.value.code == "DATE_REQUIRED"
    assert exc.value.http_status == 400


def test_full_update_rejects_invalid_date():
    with pytest.raises(InvalidDateError) as exc:
        plan_full_update("31/12/2026", None)
    assert exc.value.code == "INVALID_DATE_FORMAT"
    assert exc.value.http_status == 422


def test_full_update_without_timezone_keeps_it_unset():
    plan = plan_full_update("2026-01-01T00:00:00Z", None)
    assert plan == DateUpdate(target=T, timezone=None)
    assert plan.changed_fields == ["targetInstant"]


def test_full_update_with_timezone():
    plan = plan_full_update("2026-01-01T00:00:00Z", "America/New_York")
    assert plan.timezone == "America/New_York"
    assert plan.changed_fields == ["targetInstant", "timezone"]


# ─── partial ─────────────────────────────────────────────────────

@pytest.mark.parametrize("date,tz", [(None, None), ("", ""), (None, ""), ("", None)])
def test_partial_update_requires_some_field(date, tz):
    with pytest.raises(ValidationError) as exc:
        plan_partial_update(date, tz)
    assert exc.value.code == "NO_UPDATE_FIELDS"


def test_partial_update_timezone_only():
    plan = plan_partial_update(None, "Asia/Tokyo")
    assert plan.target is None
    assert plan.changed_fields == ["timezone"]


def test_partial_update_invalid_date_fails_even_with_valid_timezone():
    with pytest.raises(InvalidDateError):
        plan_partial_update("definitely not a date", "Asia/Tokyo")


def test_partial_update_invalid_timezone_fails_even_with_valid_date():
    with pytest.raises(ValidationError) as exc:
        plan_partial_update("2026-01-01T00:00:00Z", "Not a zone!")
    assert exc.value.code == "INVALID_TIMEZONE"
    assert exc.value.field == "timezone"


# ─── timezone shape ──────────────────────────────────────────────

@pytest.mark.parametrize("tz", [
    "UTC", "Europe/Oslo", "America/Argentina/Buenos_Aires", "Etc/GMT+5",
])
def test_valid_timezones(tz):
    assert validate_timezone(tz) == tz


def test_timezone_is_stripped():
    assert validate_timezone("  Europe/Oslo ") == "Europe/Oslo"


@pytest.mark.parametrize("tz", ["   ", "Europe/", "/Oslo", "Oslo Time", "x" * 65])
def test_invalid_timezones(tz):
    with pytest.raises(ValidationError):
        validate_timezone(tz)


# ─── lastUpdated ─────────────────────────────────────────────────

def test_next_last_updated_uses_now_when_ahead():
    previous = T
    now = T + timedelta(minutes=5)
    assert next_last_updated(previous, now) == now


def test_next_last_updated_bumps_past_previous_when_clock_lags():
    previous = T
    assert next_last_updated(previous, T) == T + timedelta(milliseconds=1)
    assert next_last_updated(previous, T - timedelta(hours=1)) == T + timedelta(milliseconds=1)
