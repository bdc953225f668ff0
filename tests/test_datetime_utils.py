from datetime import datetime, timezone

from src.attendance_log.attendance_log.common.datetime_utils import (
    current_month_key,
    format_korean_ampm,
    format_timestamp_for_sheet,
    from_millis,
    parse_sheet_timestamp,
    to_millis,
    today_date_key,
)

from conftest import kst


def test_korean_ampm_rendering():
    assert format_korean_ampm(kst(2026, 1, 11, 19, 10, 35)) == "2026. 1. 11. 오후 7:10:35"
    assert format_korean_ampm(kst(2026, 1, 11, 0, 5, 0)) == "2026. 1. 11. 오전 12:05:00"
    assert format_korean_ampm(kst(2026, 1, 11, 12, 0, 0)) == "2026. 1. 11. 오후 12:00:00"


def test_rendering_converts_into_club_timezone():
    utc = datetime(2026, 1, 11, 10, 10, 35, tzinfo=timezone.utc)

    assert format_korean_ampm(utc, "Asia/Seoul") == "2026. 1. 11. 오후 7:10:35"


def test_sheet_timestamp_round_trip():
    dt = kst(2026, 1, 11, 19, 10, 35)
    text = format_timestamp_for_sheet(dt)

    assert text == "2026. 1. 11 오후 7:10:35"
    assert parse_sheet_timestamp(text) == dt
    assert parse_sheet_timestamp("2026. 1. 11. 오전 12:00:01") == kst(2026, 1, 11, 0, 0, 1)


def test_sheet_timestamp_rejects_free_text():
    assert parse_sheet_timestamp("") is None
    assert parse_sheet_timestamp("yesterday") is None
    assert parse_sheet_timestamp("2026. 2. 30 오후 1:00:00") is None


def test_millis_and_keys_use_club_timezone():
    dt = kst(2026, 1, 31, 23, 30)

    assert from_millis(to_millis(dt)) == dt
    assert today_date_key(now=dt) == "2026/01/31"
    assert current_month_key(now=datetime(2026, 1, 31, 15, 0, tzinfo=timezone.utc)) == "2026-02"
