"""Event Config Schema — the single persisted record, validated on every load and save.

Invariants:
    - camelCase on disk and on the wire, snake_case in Python
    - String and boolean fields are strict: no int→str or "true"→bool coercion
    - targetInstant and lastUpdated must be ISO-8601 text WITH an offset;
      unix numbers and naive datetimes are schema violations
    - Instants are held as UTC, millisecond precision, serialized canonically

Design Decisions:
    - Instant parsed by datetime.fromisoformat in a BeforeValidator: pydantic's lax
      datetime parsing would also accept epoch numbers and numeric strings
    - Serializer only in JSON mode: model_dump() keeps datetimes so the record
      can be re-validated in Python mode before a save
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator, AwareDatetime, BaseModel, BeforeValidator, ConfigDict,
    PlainSerializer, StrictBool, StrictStr,
)
from pydantic.alias_generators import to_camel

from event_countdown.core.instants import format_instant, truncate_to_ms


def _coerce_iso_text(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError("instant must be an ISO-8601 string")


Instant = Annotated[
    AwareDatetime,
    BeforeValidator(_coerce_iso_text),
    AfterValidator(truncate_to_ms),
    PlainSerializer(format_instant, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── eventDetails ────────────────────────────────────────────────

class Participants(CamelModel):
    primary: StrictStr
    secondary: StrictStr


class EventDetails(CamelModel):
    target_instant: Instant
    location: StrictStr
    timezone: StrictStr
    title: StrictStr
    participants: Participants


# ─── display ─────────────────────────────────────────────────────

class UnitLabels(CamelModel):
    days: StrictStr
    hours: StrictStr
    minutes: StrictStr
    seconds: StrictStr


class DisplaySettings(CamelModel):
    completed_message: StrictStr
    unit_labels: UnitLabels


# ─── settings ────────────────────────────────────────────────────

class UpdateSettings(CamelModel):
    updates_allowed: StrictBool
    last_updated: Instant


class EventConfig(CamelModel):
    """The one event record. Exactly one exists; it has no identifier."""
    event_details: EventDetails
    display: DisplaySettings
    settings: UpdateSettings
