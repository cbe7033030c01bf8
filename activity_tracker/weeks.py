"""Monday-anchored week arithmetic shared by the planner and analytics."""

import calendar
from datetime import UTC, date, datetime, time, timedelta

from .exceptions import ValidationException

DAYS_IN_WEEK = 7


def _add_days(value: date, days: int) -> date:
    try:
        return value + timedelta(days=days)
    except OverflowError as exc:
        raise ValidationException(f"Date {value.isoformat()} is out of the supported range") from exc


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC; aware inputs are converted first."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def get_week_start(value: date | datetime) -> date:
    """Monday of the week containing ``value`` (time of day is ignored)."""
    if isinstance(value, datetime):
        value = value.date()
    return value - timedelta(days=value.weekday())


def get_week_end(week_start: date) -> date:
    """Sunday closing the week that starts on ``week_start`` (inclusive)."""
    return _add_days(week_start, DAYS_IN_WEEK - 1)


def is_week_start(value: date) -> bool:
    return value.weekday() == 0


def date_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Half-open datetime range [start 00:00, end+1 00:00) covering whole days."""
    return datetime.combine(start, time.min), datetime.combine(_add_days(end, 1), time.min)


def week_bounds(week_start: date) -> tuple[datetime, datetime]:
    return date_bounds(week_start, get_week_end(week_start))


def month_range(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
