from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.core.errors import BadRequestError
from src.shared.time import (
    Duration,
    calculate_work_days,
    format_date_for_input,
    format_duration,
    get_days_remaining,
    hours_minutes_to_minutes,
    minutes_to_decimal_hours,
    minutes_to_hours_minutes,
    months_spanned,
    resolve_period_window,
)

MONDAY = date(2026, 10, 19)
FRIDAY = date(2026, 10, 23)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)
NEXT_MONDAY = date(2026, 10, 26)


@pytest.mark.parametrize("day,expected", [(MONDAY, 1), (FRIDAY, 1), (SATURDAY, 0), (SUNDAY, 0)])
def test_work_days_single_day(day, expected):
    assert calculate_work_days(day, day) == expected


def test_work_days_full_week_and_weekend_span():
    assert calculate_work_days(MONDAY, FRIDAY) == 5
    assert calculate_work_days(FRIDAY, NEXT_MONDAY) == 2
    assert calculate_work_days(MONDAY, NEXT_MONDAY + timedelta(days=4)) == 10


def test_work_days_reversed_range_is_zero():
    assert calculate_work_days(FRIDAY, MONDAY) == 0


def test_work_days_ignores_time_of_day():
    start = datetime(2026, 10, 19, 17, 45)
    end = datetime(2026, 10, 23, 8, 0)
    assert calculate_work_days(start, end) == 5


def test_days_remaining_uses_injected_today():
    assert get_days_remaining(FRIDAY, today=MONDAY) == 4
    assert get_days_remaining(MONDAY, today=MONDAY) == 0
    assert get_days_remaining(MONDAY, today=FRIDAY) == -4


def test_days_remaining_normalizes_datetimes_to_midnight():
    target = datetime(2026, 10, 20, 0, 30)
    today = datetime(2026, 10, 19, 23, 59)
    assert get_days_remaining(target, today=today) == 1


def test_days_remaining_defaults_to_wall_clock():
    assert get_days_remaining(date.today() + timedelta(days=3)) == 3


def test_format_date_for_input():
    assert format_date_for_input(MONDAY) == "2026-10-19"
    assert format_date_for_input(datetime(2026, 10, 19, 23, 0)) == "2026-10-19"
    late_evening_plus_two = datetime(2026, 10, 20, 1, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_date_for_input(late_evening_plus_two) == "2026-10-19"


@pytest.mark.parametrize("hours,minutes", [(0, 0), (0, 59), (5, 30), (12, 1)])
def test_hours_minutes_round_trip(hours, minutes):
    assert minutes_to_hours_minutes(hours_minutes_to_minutes(hours, minutes)) == Duration(
        hours=hours, minutes=minutes
    )


def test_format_duration():
    assert format_duration(45) == "45m"
    assert format_duration(120) == "2h"
    assert format_duration(330) == "5h 30m"


def test_minutes_to_decimal_hours():
    assert minutes_to_decimal_hours(330) == 5.5
    assert minutes_to_decimal_hours(100) == 1.7


def test_resolve_period_window_named_periods():
    today = date(2026, 8, 13)  # Thursday
    assert resolve_period_window("daily", today) == (today, today)
    assert resolve_period_window("weekly", today) == (date(2026, 8, 10), today)
    assert resolve_period_window("monthly", today) == (date(2026, 8, 1), today)
    assert resolve_period_window("quarterly", today) == (date(2026, 7, 1), today)
    assert resolve_period_window("yearly", today) == (date(2026, 1, 1), today)


def test_resolve_period_window_custom():
    window = resolve_period_window("custom", MONDAY, date(2026, 1, 1), date(2026, 3, 31))
    assert window == (date(2026, 1, 1), date(2026, 3, 31))
    with pytest.raises(BadRequestError):
        resolve_period_window("custom", MONDAY, date(2026, 1, 1), None)
    with pytest.raises(BadRequestError):
        resolve_period_window("custom", MONDAY, date(2026, 3, 1), date(2026, 1, 1))


def test_months_spanned_counts_both_ends():
    assert months_spanned(date(2026, 1, 31), date(2026, 1, 31)) == 1
    assert months_spanned(date(2025, 11, 15), date(2026, 2, 1)) == 4
