"""
Duration Resolver — turn a session's raw fields into a minute count.

Pure functions, no DB access.
"""
from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from goaltrack.core.errors import InvalidDurationError

# Only the time-of-day difference matters, so both times are placed on
# one arbitrary shared date.
_REFERENCE_DATE = date(2000, 1, 1)

# One session per calendar date, so it can never exceed a full day.
MAX_SESSION_MINUTES = 24 * 60


def resolve_minutes(
    explicit_minutes: Optional[int] = None,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
) -> Optional[int]:
    """
    Return the session length in minutes, or None when there is no data.

    A positive explicit value wins outright. Otherwise start/end are
    subtracted on the reference date and rounded half-up; an end earlier
    than the start gives a negative result that the caller must reject.
    UTC offsets on the times are ignored: 09:00+02:00 to 11:00Z is two hours.
    """
    if explicit_minutes is not None and explicit_minutes > 0:
        return explicit_minutes

    if start_time is not None and end_time is not None:
        start = datetime.combine(_REFERENCE_DATE, start_time.replace(tzinfo=None))
        end = datetime.combine(_REFERENCE_DATE, end_time.replace(tzinfo=None))
        seconds = Decimal(str((end - start).total_seconds()))
        return int((seconds / Decimal(60)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return None


def require_positive_minutes(minutes: Optional[int]) -> int:
    """Reject missing, non-positive and longer-than-a-day durations before anything is written."""
    if minutes is None or minutes <= 0 or minutes > MAX_SESSION_MINUTES:
        raise InvalidDurationError(minutes)
    return minutes
