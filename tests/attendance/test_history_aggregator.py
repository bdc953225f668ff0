import calendar
from datetime import date

import pytest

from src.attendance_log.attendance_log.attendance.calendar_policy import CalendarPolicy
from src.attendance_log.attendance_log.attendance.history_aggregator import (
    HistoryAggregator,
    attendance_rate,
)
from src.attendance_log.attendance_log.common.datetime_utils import to_millis

from conftest import InMemoryFilteringStore, InMemoryScanStore, kst, raw


def ms(*args) -> int:
    return to_millis(kst(*args))


def january_2026_meeting_days() -> int:
    return sum(
        1
        for d in range(1, calendar.monthrange(2026, 1)[1] + 1)
        if date(2026, 1, d).weekday() in (1, 3, 5)
    )


def alice_rows():
    return [
        raw("alice", "2026/01/06", meeting_type_label="화요일", ts=ms(2026, 1, 6, 19, 0)),
        raw("Alice", "2026. 1. 8", meeting_type_label="목요일", ts=ms(2026, 1, 8, 19, 0)),
        raw("ALICE ", "2026/01/10", meeting_type_label="토요일", ts=ms(2026, 1, 10, 10, 0)),
        raw("alice", "2026/02/03", meeting_type_label="화요일", ts=ms(2026, 2, 3, 19, 0)),
        raw("alice", "N/A", meeting_type_label="화요일", ts=ms(2026, 1, 13, 19, 0)),
        raw("bob", "2026/01/06", meeting_type_label="화요일", ts=ms(2026, 1, 6, 19, 1)),
    ]


def test_scan_store_history_is_case_insensitive():
    view = HistoryAggregator(InMemoryScanStore(alice_rows())).compute_history("ALICE", "2026-01")

    total = january_2026_meeting_days()
    assert view.nickname == "ALICE"
    assert view.count == 3
    assert [i.meeting_date for i in view.items] == ["2026/01/10", "2026/01/08", "2026/01/06"]
    assert view.summary_by_type == {"화요일": 1, "목요일": 1, "토요일": 1}
    assert view.total_possible == total
    assert view.attendance_rate == min(100, int(3 * 100 / total + 0.5))


def test_filtering_store_history():
    store = InMemoryFilteringStore(
        [
            raw("alice", "2026/01/06", ts=ms(2026, 1, 6, 19, 0)),
            raw("Alice", "2026/01/08", meeting_type_label="목요일", ts=ms(2026, 1, 8, 19, 0)),
            raw("alice", "2026/02/03", ts=ms(2026, 2, 3, 19, 0)),
        ]
    )

    view = HistoryAggregator(store).compute_history("alice", "2026-01")

    assert store.scans == 0
    assert view.count == 2
    assert view.items[0].nickname == "Alice"


def test_missing_meeting_type_is_summarized_as_unspecified():
    store = InMemoryScanStore([raw("alice", "2026/01/06", meeting_type_label="")])

    view = HistoryAggregator(store).compute_history("alice", "2026-01")

    assert view.summary_by_type == {"미지정": 1}


def test_no_records_gives_zero_rate_with_total(scan_store):
    view = HistoryAggregator(scan_store).compute_history("nobody", "2026-01").to_dict()

    assert view["count"] == 0
    assert view["items"] == []
    assert view["summaryByType"] == {}
    assert view["totalPossible"] == january_2026_meeting_days()
    assert view["attendanceRate"] == 0


def test_rate_is_zero_when_policy_has_no_meeting_days():
    store = InMemoryScanStore([raw("alice", "2026/01/06")])
    policy = CalendarPolicy(meeting_weekdays=frozenset())

    view = HistoryAggregator(store, calendar_policy=policy).compute_history("alice", "2026-01")

    assert view.total_possible == 0
    assert view.attendance_rate == 0


@pytest.mark.parametrize(
    "count, total, expected",
    [(0, 13, 0), (3, 13, 23), (3, 14, 21), (1, 8, 13), (13, 13, 100), (20, 13, 100), (5, 0, 0)],
)
def test_attendance_rate(count, total, expected):
    assert attendance_rate(count, total) == expected
