import calendar
from datetime import date

import pytest

from src.attendance_log.attendance_log.attendance.calendar_policy import CalendarPolicy


def brute_force_count(year: int, month: int, weekdays=(1, 3, 5)) -> int:
    days = calendar.monthrange(year, month)[1]
    return sum(1 for d in range(1, days + 1) if date(year, month, d).weekday() in weekdays)


def test_january_2026_matches_enumeration():
    # Jan 2026 starts on a Thursday: 4 Tuesdays, 5 Thursdays, 5 Saturdays
    assert CalendarPolicy().eligible_day_count("2026-01") == brute_force_count(2026, 1) == 14


@pytest.mark.parametrize("month_key", ["2024-02", "2025-02", "2026-02", "2026-07", "2026-12"])
def test_counts_match_enumeration(month_key):
    year, month = int(month_key[:4]), int(month_key[5:])
    assert CalendarPolicy().eligible_day_count(month_key) == brute_force_count(year, month)


@pytest.mark.parametrize("month_key", ["2026-00", "2026-13", "2026/01", "", "abcd-ef"])
def test_invalid_month_keys_count_zero(month_key):
    assert CalendarPolicy().eligible_day_count(month_key) == 0


def test_custom_meeting_weekdays():
    policy = CalendarPolicy(meeting_weekdays=frozenset({6}))
    assert policy.eligible_day_count("2026-01") == brute_force_count(2026, 1, weekdays=(6,))
