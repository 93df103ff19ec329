"""Calendar arithmetic for recurring schedules.

Timestamps are epoch milliseconds. Day and month boundaries are taken in the
given time zone, or in the system local time zone when ``tz`` is None.
"""

import calendar
from datetime import datetime, timedelta, tzinfo

from ledger_engine.domain.models.recurring import RecurringFrequency


def to_datetime(timestamp_ms: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to a calendar datetime.

    Args:
        timestamp_ms: Epoch milliseconds.
        tz: Calendar time zone; None means system local time.

    Returns:
        datetime: Aware datetime when ``tz`` is given, naive local otherwise.
    """
    seconds, millis = divmod(timestamp_ms, 1000)
    return datetime.fromtimestamp(seconds, tz).replace(
        microsecond=millis * 1000
    )


def to_epoch_millis(value: datetime) -> int:
    """Convert a datetime back to epoch milliseconds."""
    return round(value.timestamp() * 1000)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def _clamped(value: datetime, year: int, month: int, day: int) -> datetime:
    return value.replace(
        year=year,
        month=month,
        day=max(1, min(day, days_in_month(year, month))),
    )


def _next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def advance(
    timestamp_ms: int,
    frequency: RecurringFrequency,
    day_of_period: int,
    month: int = 1,
    tz: tzinfo | None = None,
) -> int:
    """Return the same time of day exactly one period later.

    Monthly and yearly schedules land on ``day_of_period`` clamped to the
    target month's length, so a 31st schedule goes Jan 31, Feb 28/29,
    Mar 31 rather than sticking to the 28th after the first clamp.

    Args:
        timestamp_ms: Current occurrence, epoch milliseconds.
        frequency: Schedule period.
        day_of_period: Day of month for monthly and yearly schedules.
        month: Target month for yearly schedules.
        tz: Calendar time zone; None means system local time.

    Returns:
        int: Next occurrence, epoch milliseconds.
    """
    current = to_datetime(timestamp_ms, tz)
    if frequency is RecurringFrequency.DAILY:
        following = current + timedelta(days=1)
    elif frequency is RecurringFrequency.WEEKLY:
        following = current + timedelta(days=7)
    elif frequency is RecurringFrequency.MONTHLY:
        year, target_month = _next_month(current.year, current.month)
        following = _clamped(current, year, target_month, day_of_period)
    elif frequency is RecurringFrequency.YEARLY:
        following = _clamped(current, current.year + 1, month, day_of_period)
    else:
        raise ValueError(f"Unsupported frequency: {frequency!r}")
    return to_epoch_millis(following)


def first_execution_date(
    now_ms: int,
    frequency: RecurringFrequency,
    day_of_period: int,
    month: int = 1,
    tz: tzinfo | None = None,
) -> int:
    """Return the first occurrence of a new schedule after ``now_ms``.

    Occurrences fall at midnight. Weekly schedules use ISO weekdays
    (1=Monday..7=Sunday) in ``day_of_period``.

    Args:
        now_ms: Creation time, epoch milliseconds.
        frequency: Schedule period.
        day_of_period: Day of month, or ISO weekday for weekly schedules.
        month: Month for yearly schedules.
        tz: Calendar time zone; None means system local time.

    Returns:
        int: First occurrence, epoch milliseconds, strictly after now.
    """
    now = to_datetime(now_ms, tz)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if frequency is RecurringFrequency.DAILY:
        candidate = midnight + timedelta(days=1)
    elif frequency is RecurringFrequency.WEEKLY:
        offset = (day_of_period - midnight.isoweekday()) % 7
        candidate = midnight + timedelta(days=offset)
        if candidate <= now:
            candidate += timedelta(days=7)
    elif frequency is RecurringFrequency.MONTHLY:
        candidate = _clamped(
            midnight, midnight.year, midnight.month, day_of_period
        )
        if candidate <= now:
            year, target_month = _next_month(midnight.year, midnight.month)
            candidate = _clamped(midnight, year, target_month, day_of_period)
    elif frequency is RecurringFrequency.YEARLY:
        candidate = _clamped(midnight, midnight.year, month, day_of_period)
        if candidate <= now:
            candidate = _clamped(
                midnight, midnight.year + 1, month, day_of_period
            )
    else:
        raise ValueError(f"Unsupported frequency: {frequency!r}")
    return to_epoch_millis(candidate)


def shift_days(
    timestamp_ms: int,
    days: int,
    tz: tzinfo | None = None,
) -> int:
    """Return the same wall-clock time a number of calendar days later."""
    shifted = to_datetime(timestamp_ms, tz) + timedelta(days=days)
    return to_epoch_millis(shifted)


def month_bounds(
    timestamp_ms: int,
    tz: tzinfo | None = None,
) -> tuple[int, int, int, int]:
    """Return the calendar month containing a timestamp.

    Args:
        timestamp_ms: Any instant in the month, epoch milliseconds.
        tz: Calendar time zone; None means system local time.

    Returns:
        tuple[int, int, int, int]: ``(year, month, start_ms, end_ms)`` where
        ``[start_ms, end_ms)`` covers the whole month.
    """
    current = to_datetime(timestamp_ms, tz)
    start = current.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    year, month = _next_month(start.year, start.month)
    end = start.replace(year=year, month=month)
    return (
        start.year,
        start.month,
        to_epoch_millis(start),
        to_epoch_millis(end),
    )


__all__ = [
    "to_datetime",
    "to_epoch_millis",
    "days_in_month",
    "advance",
    "shift_days",
    "first_execution_date",
    "month_bounds",
]
