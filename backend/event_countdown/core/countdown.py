"""Countdown Calculator — pure (target, now) → remaining duration and completion.

Invariants:
    - remaining_ms = max(0, target - now), whole milliseconds
    - is_complete is True exactly when target <= now
    - Every field derives from the single `now` argument (clock never sampled here)
    - breakdown is all zeros once complete

Design Decisions:
    - Frozen dataclasses: derived values are never mutated or persisted
    - Clock injected by the caller: deterministic for tests, consistent per request
"""

from dataclasses import dataclass
from datetime import datetime

from event_countdown.core.instants import MILLISECOND, truncate_to_ms

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR


@dataclass(frozen=True)
class CountdownBreakdown:
    """Remaining time split into the units shown next to the display labels."""
    days: int
    hours: int
    minutes: int
    seconds: int


@dataclass(frozen=True)
class DerivedCountdown:
    target: datetime
    now: datetime
    remaining_ms: int
    is_complete: bool
    breakdown: CountdownBreakdown


def split_duration(remaining_ms: int) -> CountdownBreakdown:
    """Decompose milliseconds into whole days/hours/minutes/seconds."""
    days, rest = divmod(max(0, remaining_ms), _MS_PER_DAY)
    hours, rest = divmod(rest, _MS_PER_HOUR)
    minutes, rest = divmod(rest, _MS_PER_MINUTE)
    return CountdownBreakdown(
        days=days, hours=hours, minutes=minutes,
        seconds=rest // _MS_PER_SECOND,
    )


def compute_countdown(target: datetime, now: datetime) -> DerivedCountdown:
    """Compute the countdown for `target` as seen at `now`. Both must be aware."""
    target = truncate_to_ms(target)
    now = truncate_to_ms(now)
    remaining_ms = max(0, (target - now) // MILLISECOND)
    return DerivedCountdown(
        target=target,
        now=now,
        remaining_ms=remaining_ms,
        is_complete=target <= now,
        breakdown=split_duration(remaining_ms),
    )
