"""Instants — parse and format ISO-8601 instants in one canonical form.

Invariants:
    - Every instant leaving this module is timezone-aware UTC
    - Precision is milliseconds (sub-millisecond digits truncated)
    - Canonical text form: YYYY-MM-DDTHH:MM:SS[.fff]Z, fraction omitted when zero

Design Decisions:
    - datetime.fromisoformat over a regex: accepts the full ISO-8601 profile
      Python supports (offsets, "Z", bare dates) without hand-rolled parsing
    - Millisecond precision: the JSON document and the API speak milliseconds,
      so a value survives save/load unchanged
"""

from datetime import datetime, timedelta, timezone

MILLISECOND = timedelta(milliseconds=1)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def truncate_to_ms(value: datetime) -> datetime:
    """Convert to UTC and drop sub-millisecond digits. Requires an aware datetime.

    Raises ValueError when the UTC equivalent falls outside datetime's range
    (e.g. year 9999 with a negative offset).
    """
    if value.tzinfo is None:
        raise TypeError("instant must be timezone-aware")
    try:
        value = value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError("instant out of range") from e
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def parse_instant(value: str) -> datetime:
    """Parse user input into a UTC instant.

    A value without an offset (including a bare date) is read as UTC.
    Raises ValueError when the text is not an ISO-8601 date/time.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty date string")
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return truncate_to_ms(parsed)


def format_instant(value: datetime) -> str:
    """Render an aware datetime in canonical form."""
    value = truncate_to_ms(value)
    base = value.strftime("%Y-%m-%dT%H:%M:%S")
    millis = value.microsecond // 1000
    if millis:
        return f"{base}.{millis:03d}Z"
    return f"{base}Z"


def to_epoch_ms(value: datetime) -> int:
    """Milliseconds since the Unix epoch."""
    return (truncate_to_ms(value) - EPOCH) // MILLISECOND


def utc_now() -> datetime:
    """Default clock: current instant, millisecond precision."""
    return truncate_to_ms(datetime.now(timezone.utc))
