from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

from src.core.errors import BadRequestError
from src.shared.base import ValueSchema
from src.shared.rounding import round_half_up

MINUTES_PER_HOUR = 60


class Duration(ValueSchema):
    hours: int
    minutes: int


def to_calendar_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def to_instant(value: date) -> datetime:
    # Plain dates count as midnight so they compare with datetimes.
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def calculate_work_days(start: date, end: date) -> int:
    current = to_calendar_date(start)
    last = to_calendar_date(end)
    work_days = 0
    while current <= last:
        if current.weekday() < 5:
            work_days += 1
        current += timedelta(days=1)
    return work_days


def get_days_remaining(target: date, today: Optional[date] = None) -> int:
    # Whole calendar dates, so the ceil of the day fraction is exact.
    reference = to_calendar_date(today) if today is not None else date.today()
    return (to_calendar_date(target) - reference).days


def format_date_for_input(value: date) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


def hours_minutes_to_minutes(hours: int, minutes: int) -> int:
    return hours * MINUTES_PER_HOUR + minutes


def minutes_to_hours_minutes(total_minutes: int) -> Duration:
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return Duration(hours=hours, minutes=minutes)


def format_duration(total_minutes: int) -> str:
    duration = minutes_to_hours_minutes(total_minutes)
    if duration.hours == 0:
        return f"{duration.minutes}m"
    if duration.minutes == 0:
        return f"{duration.hours}h"
    return f"{duration.hours}h {duration.minutes}m"


def minutes_to_decimal_hours(total_minutes: float) -> float:
    return round_half_up(total_minutes / MINUTES_PER_HOUR, 1)


def resolve_period_window(
    period: str,
    today: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Tuple[date, date]:
    # Named periods end on today; weeks start on Monday.
    reference = today or date.today()
    if period == "custom":
        if not start_date or not end_date:
            raise BadRequestError("Custom period requires start_date and end_date")
        if end_date < start_date:
            raise BadRequestError("end_date must not be before start_date")
        return start_date, end_date
    if period == "daily":
        return reference, reference
    if period == "weekly":
        return reference - timedelta(days=reference.weekday()), reference
    if period == "monthly":
        return reference.replace(day=1), reference
    if period == "quarterly":
        quarter_month = (reference.month - 1) // 3 * 3 + 1
        return date(reference.year, quarter_month, 1), reference
    if period == "yearly":
        return date(reference.year, 1, 1), reference
    raise BadRequestError("Unsupported reporting period")


def months_spanned(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month) + 1
