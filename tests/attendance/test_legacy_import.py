from src.attendance_log.attendance_log.attendance.legacy_import import (
    import_records,
    parse_legacy_rows,
    read_csv_rows,
)
from src.attendance_log.attendance_log.attendance.status_aggregator import StatusAggregator

from conftest import InMemoryScanStore


def test_read_csv_rows_skips_header_and_blank_lines(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        "타임스탬프,닉네임,팀,모임 종류,모임 날짜\n\n2026. 1. 6 오후 7:10:35,민수,1팀,화요일,2026. 1. 6\n",
        encoding="utf-8-sig",
    )

    assert read_csv_rows(path) == [["2026. 1. 6 오후 7:10:35", "민수", "1팀", "화요일", "2026. 1. 6"]]


def test_labels_are_mapped_back_to_codes():
    result = parse_legacy_rows([["2026. 1. 6 오후 7:10:35", "민수", "S팀", "목요일", "2026. 1. 8"]])

    (rec,) = result.records
    assert rec.team == "S"
    assert rec.meeting_type == "THU"
    assert rec.meeting_date_key == "2026/01/08"
    assert rec.month_key == "2026-01"
    assert rec.nickname_key == "민수"
    assert rec.created_at.hour == 19


def test_missing_meeting_date_falls_back_to_timestamp_date():
    result = parse_legacy_rows([["2025. 12. 31. 오후 11:59:00", "민수", "1팀", "기타", ""]])

    assert result.records[0].meeting_date_key == "2025/12/31"


def test_missing_timestamp_uses_meeting_day_midnight():
    result = parse_legacy_rows([["", "민수", "1팀", "토요일", "2026. 1. 10"]])

    rec = result.records[0]
    assert (rec.created_at.hour, rec.created_at.minute) == (0, 0)
    assert rec.created_at.day == 10


def test_unknown_label_is_imported_without_code():
    result = parse_legacy_rows([["2026. 1. 6 오후 7:10:35", "민수", "6팀", "번개", "2026. 1. 6"]])

    assert result.errors == []
    (rec,) = result.records
    assert rec.team is None
    assert rec.team_label == "6팀"
    assert rec.meeting_type is None
    assert rec.meeting_type_label == "번개"


def test_unknown_label_flows_through_to_status():
    store = InMemoryScanStore()
    import_records(store, parse_legacy_rows([["", "민수", "6팀", "화요일", "2026. 1. 6"]]).records)

    (item,) = StatusAggregator(store).compute_status("2026/01/06").items
    assert item.team is None
    assert item.team_label == "6팀"
    assert item.meeting_type == "TUE"


def test_iso_meeting_dates_are_accepted():
    result = parse_legacy_rows(
        [
            ["", "민수", "1팀", "토요일", "2026-01-03"],
            ["", "지연", "1팀", "토요일", "2026-01-02T16:30:00+00:00"],
        ]
    )

    assert result.errors == []
    assert [r.meeting_date_key for r in result.records] == ["2026/01/03", "2026/01/03"]


def test_bad_rows_are_counted_not_raised():
    result = parse_legacy_rows(
        [
            ["", "", "1팀", "화요일", "2026. 1. 6"],
            ["", "민수", "1팀", "화요일", "N/A"],
            ["", "민수", "1팀", "화요일", "2026. 2. 30"],
            ["", "지연", "1팀", "화요일", "2026. 1. 6"],
        ]
    )

    assert result.skipped == 1
    assert len(result.errors) == 2
    assert [r.nickname for r in result.records] == ["지연"]


def test_import_appends_every_record():
    store = InMemoryScanStore()
    result = parse_legacy_rows([["", f"user{i}", "1팀", "화요일", "2026. 1. 6"] for i in range(3)])

    assert import_records(store, result.records) == 3
    assert [r.nickname for r in store.rows] == ["user0", "user1", "user2"]
