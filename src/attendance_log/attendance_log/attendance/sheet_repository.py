"""Spreadsheet-backed store (CSV export of the attendance sheet).

The sheet predates the normalized schema: it only has labels, and its date
column holds whatever the sheet rendered (`2026. 1. 3`, `2026/01/03`, ...).
It is therefore scan-only; filtering happens in the aggregators.
"""
from __future__ import annotations

import csv
import logging
import threading
from pathlib import Path
from typing import Sequence

from ..common.datetime_utils import format_timestamp_for_sheet, parse_sheet_timestamp, to_millis
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import StoreUnavailable
from .dates import format_date_key_for_sheet
from .model import AttendanceRecord, RawRecord
from .repository import AttendanceRecordStore

logger = logging.getLogger(__name__)

SHEET_COLUMNS = ["timestamp", "nickname", "teamLabel", "meetingTypeLabel", "meetingDate"]
_HEADER_MARKERS = ("timestamp", "타임스탬프", "시간")


def is_header_row(cells: Sequence[str]) -> bool:
    first = (cells[0] if cells else "").strip().lower()
    return any(marker in first for marker in _HEADER_MARKERS)


def record_to_sheet_row(record: AttendanceRecord, tz_name: str = DEFAULT_TIMEZONE) -> list[str]:
    return [
        format_timestamp_for_sheet(record.created_at, tz_name),
        record.nickname,
        record.team_label,
        record.meeting_type_label,
        format_date_key_for_sheet(record.meeting_date_key),
    ]


class CsvSheetAttendanceRepository(AttendanceRecordStore):
    def __init__(self, path: str | Path, *, tz_name: str = DEFAULT_TIMEZONE):
        self._path = Path(path)
        self._tz_name = tz_name
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_rows(self) -> list[list[str]]:
        if not self._path.exists():
            return []
        try:
            with self._path.open(newline="", encoding="utf-8-sig") as f:
                rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        except (OSError, csv.Error) as e:
            raise StoreUnavailable(f"sheet read failed: {e}") from e

        if rows and is_header_row(rows[0]):
            rows = rows[1:]
        return rows

    def _to_raw(self, row: list[str]) -> RawRecord:
        cells = (row + [""] * len(SHEET_COLUMNS))[: len(SHEET_COLUMNS)]
        timestamp, nickname, team_label, meeting_type_label, meeting_date = (c.strip() for c in cells)
        ts = parse_sheet_timestamp(timestamp, self._tz_name)
        return RawRecord(
            nickname=nickname,
            team_label=team_label,
            meeting_type_label=meeting_type_label,
            meeting_date=meeting_date,
            ts=to_millis(ts) if ts else None,
        )

    def append_record(self, record: AttendanceRecord) -> str:
        row = record_to_sheet_row(record, self._tz_name)
        with self._lock:
            try:
                is_new = not self._path.exists()
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", newline="", encoding="utf-8") as f:
                    writer = csv.writer(f)
                    if is_new:
                        writer.writerow(SHEET_COLUMNS)
                    writer.writerow(row)
            except OSError as e:
                raise StoreUnavailable(f"sheet append failed: {e}") from e
            return str(len(self._read_rows()))

    def has_records(self) -> bool:
        return bool(self._read_rows())

    def scan_all(self) -> Sequence[RawRecord]:
        # Newest row first; equal timestamps keep this order downstream.
        rows = reversed(self._read_rows())
        return [raw for raw in map(self._to_raw, rows) if raw.meeting_date]

    def recent_nicknames(self, limit: int) -> Sequence[str]:
        # Newer rows are appended last, so reverse before the stable sort.
        raws = list(reversed([self._to_raw(r) for r in self._read_rows()]))
        raws.sort(key=lambda r: r.ts or 0, reverse=True)
        return [r.nickname for r in raws[:limit]]

    def delete_by_nickname_prefix(self, prefix: str, *, dry_run: bool = False) -> Sequence[RawRecord]:
        with self._lock:
            rows = self._read_rows()
            keep: list[list[str]] = []
            matched: list[RawRecord] = []
            for row in rows:
                raw = self._to_raw(row)
                if raw.nickname.startswith(prefix):
                    matched.append(raw)
                else:
                    keep.append(row)

            if matched and not dry_run:
                try:
                    with self._path.open("w", newline="", encoding="utf-8") as f:
                        writer = csv.writer(f)
                        writer.writerow(SHEET_COLUMNS)
                        writer.writerows(keep)
                except OSError as e:
                    raise StoreUnavailable(f"sheet rewrite failed: {e}") from e
            return matched


class SheetBackup:
    """Secondary copy of every check-in; never fails the primary write."""

    def __init__(self, sheet: AttendanceRecordStore):
        self._sheet = sheet

    def append(self, record: AttendanceRecord) -> None:
        try:
            self._sheet.append_record(record)
            logger.info("[Sheets] Appended: %s", record.nickname)
        except Exception as e:
            logger.error("[Sheets Error] %s", e)
