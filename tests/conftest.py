from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from src.attendance_log.attendance_log.attendance.model import AttendanceRecord, RawRecord

KST = ZoneInfo("Asia/Seoul")


def kst(*args) -> datetime:
    return datetime(*args, tzinfo=KST)


def raw(
    nickname: str,
    meeting_date,
    *,
    team_label: str = "1팀",
    meeting_type_label: str = "화요일",
    ts: Optional[int] = None,
) -> RawRecord:
    return RawRecord(
        nickname=nickname,
        team_label=team_label,
        meeting_type_label=meeting_type_label,
        meeting_date=meeting_date,
        ts=ts,
    )


class InMemoryScanStore:
    """Sheet-like store: no server-side filtering, rows kept raw."""

    def __init__(self, rows=None):
        self.rows: list[RawRecord] = list(rows or [])
        self.scans = 0

    def append_record(self, record: AttendanceRecord) -> str:
        self.rows.append(
            RawRecord(
                nickname=record.nickname,
                team_label=record.team_label,
                meeting_type_label=record.meeting_type_label,
                meeting_date=record.meeting_date_key,
                ts=record.client_ts,
            )
        )
        return str(len(self.rows))

    def has_records(self) -> bool:
        return bool(self.rows)

    def scan_all(self):
        self.scans += 1
        return [r for r in reversed(self.rows) if r.meeting_date]

    def recent_nicknames(self, limit: int):
        ordered = sorted(reversed(self.rows), key=lambda r: r.ts or 0, reverse=True)
        return [r.nickname for r in ordered[:limit]]

    def delete_by_nickname_prefix(self, prefix: str, *, dry_run: bool = False):
        matched = [r for r in self.rows if r.nickname.startswith(prefix)]
        if not dry_run:
            self.rows = [r for r in self.rows if not r.nickname.startswith(prefix)]
        return matched


class InMemoryFilteringStore(InMemoryScanStore):
    """Document-store-like: filters on the normalized fields itself."""

    def __init__(self, rows=None):
        super().__init__(rows)
        self.date_queries: list[str] = []

    def query_by_date(self, date_key: str):
        self.date_queries.append(date_key)
        hits = [r for r in reversed(self.rows) if r.meeting_date == date_key]
        return sorted(hits, key=lambda r: r.ts or 0, reverse=True)

    def query_by_nickname_key_and_month(self, nickname_key: str, month_key: str):
        hits = [
            r
            for r in reversed(self.rows)
            if r.nickname.lower() == nickname_key and str(r.meeting_date)[:7].replace("/", "-") == month_key
        ]
        return sorted(hits, key=lambda r: r.ts or 0, reverse=True)


class FakeClock:
    """Monotonic seconds for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_now() -> datetime:
    # Tuesday evening, Seoul time
    return kst(2026, 1, 6, 19, 10, 35)


@pytest.fixture
def scan_store() -> InMemoryScanStore:
    return InMemoryScanStore()


@pytest.fixture
def filtering_store() -> InMemoryFilteringStore:
    return InMemoryFilteringStore()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
