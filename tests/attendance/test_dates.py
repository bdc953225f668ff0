from datetime import date, datetime, timezone

import pytest

from src.attendance_log.attendance_log.attendance.dates import (
    date_key_to_month_key,
    format_date_key_for_sheet,
    is_calendar_date_key,
    is_valid_date_key,
    is_valid_month_key,
    normalize_date_key,
)

from conftest import kst


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2026/01/06", "2026/01/06"),
        ("  2026/01/06 ", "2026/01/06"),
        ("2026. 1. 6", "2026/01/06"),
        ("2026.1.6", "2026/01/06"),
        ("2026. 12. 31", "2026/12/31"),
        (date(2026, 1, 6), "2026/01/06"),
        (kst(2026, 1, 6, 23, 59), "2026/01/06"),
        (datetime(2026, 1, 6, 12, 0), "2026/01/06"),
    ],
)
def test_normalize_accepts_every_known_shape(value, expected):
    assert normalize_date_key(value, "Asia/Seoul") == expected


def test_normalize_converts_aware_datetime_into_club_timezone():
    # 16:00 UTC on the 5th is already the 6th in Seoul
    value = datetime(2026, 1, 5, 16, 0, tzinfo=timezone.utc)
    assert normalize_date_key(value, "Asia/Seoul") == "2026/01/06"


@pytest.mark.parametrize(
    "value",
    [None, "", "N/A", "2026-01-06", "2026/1/6", "2026. 2. 30", "06/01/2026", 20260106, 3.5, object()],
)
def test_normalize_excludes_unparseable_values(value):
    assert normalize_date_key(value, "Asia/Seoul") is None


def test_key_regexes_are_exact():
    assert is_valid_date_key("2026/01/06")
    assert not is_valid_date_key("2026/1/06")
    assert not is_valid_date_key(None)
    assert is_valid_month_key("2026-01")
    assert not is_valid_month_key("2026/01")
    assert not is_valid_month_key("2026-1")


def test_calendar_validity_is_checked_on_top_of_format():
    assert is_valid_date_key("2026/02/30")
    assert not is_calendar_date_key("2026/02/30")
    assert is_calendar_date_key("2028/02/29")


def test_month_key_and_sheet_format():
    assert date_key_to_month_key("2026/01/06") == "2026-01"
    assert date_key_to_month_key("bad") == ""
    assert format_date_key_for_sheet("2026/01/10") == "2026. 1. 10"
