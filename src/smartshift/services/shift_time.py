"""Normalise shift times into absolute intervals and classify them as day or night."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

from smartshift.services.domain import Commitment, Shift, ShiftInterval, ShiftType

logger = logging.getLogger(__name__)

DEFAULT_SHIFT_HOURS = 12.0

NIGHT_START_BEFORE_HOUR = 6
NIGHT_START_FROM_HOUR = 20
DAY_END_LATEST_HOUR = 22


def parse_time_of_day(value: str | time | None) -> time | None:
    """Parse ``HH:MM`` (optionally ``HH:MM:SS``) into a :class:`time`, or ``None``."""

    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return time(hour, minute)


def normalize(
    day: date,
    start_time: str | time | None,
    end_time: str | time | None,
    *,
    default_hours: float = DEFAULT_SHIFT_HOURS,
) -> ShiftInterval:
    """
    Convert a calendar date plus start/end times of day into a half-open interval.

    An end time at or before the start time means the shift runs past midnight and
    finishes on the following calendar day. Missing or unparseable times fall back to
    ``default_hours`` starting at the given start time (or midnight if that is
    missing too); the result is then flagged as estimated.
    """

    start_tod = parse_time_of_day(start_time)
    end_tod = parse_time_of_day(end_time)

    start = datetime.combine(day, start_tod or time(0, 0))
    if start_tod is None or end_tod is None:
        return ShiftInterval(start=start, end=start + timedelta(hours=default_hours), is_estimated=True)

    end = datetime.combine(day, end_tod)
    if end_tod <= start_tod:
        end += timedelta(days=1)
    return ShiftInterval(start=start, end=end)


def shift_interval(
    shift: Shift | Commitment, *, default_hours: float = DEFAULT_SHIFT_HOURS
) -> ShiftInterval | None:
    """Interval for a shift or commitment; ``None`` when it carries no date."""

    day = shift.date if isinstance(shift, Shift) else shift.shift_date
    if day is None:
        return None
    interval = normalize(day, shift.start_time, shift.end_time, default_hours=default_hours)
    if interval.is_estimated:
        logger.debug(
            "Times %r-%r on %s incomplete; assuming %.1fh",
            shift.start_time,
            shift.end_time,
            day,
            default_hours,
        )
    return interval


def duration_hours(interval: ShiftInterval | None) -> float:
    if interval is None or interval.end <= interval.start:
        return 0.0
    return (interval.end - interval.start).total_seconds() / 3600


def classify(interval: ShiftInterval | None) -> ShiftType:
    """
    Label an interval as day or night.

    Crossing midnight always means night. Otherwise a start before 06:00 or from
    20:00 onwards is night, and a start from 06:00 with an end no later than 22:00
    is day. Anything else is unknown.
    """

    if interval is None:
        return ShiftType.UNKNOWN
    if interval.crosses_midnight:
        return ShiftType.NIGHT

    start_hour = interval.start.hour
    if start_hour < NIGHT_START_BEFORE_HOUR or start_hour >= NIGHT_START_FROM_HOUR:
        return ShiftType.NIGHT
    if start_hour < DAY_END_LATEST_HOUR and interval.end.hour <= DAY_END_LATEST_HOUR:
        return ShiftType.DAY
    return ShiftType.UNKNOWN


def overlaps(first: ShiftInterval, second: ShiftInterval) -> bool:
    """True when two half-open intervals share any instant. Empty intervals never do."""

    if first.end <= first.start or second.end <= second.start:
        return False
    return first.start < second.end and second.start < first.end


__all__ = [
    "DEFAULT_SHIFT_HOURS",
    "classify",
    "duration_hours",
    "normalize",
    "overlaps",
    "parse_time_of_day",
    "shift_interval",
]
