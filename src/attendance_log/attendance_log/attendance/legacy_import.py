"""Import of the legacy attendance sheet (CSV export) into a record store.

Sheet columns: timestamp, nickname, teamLabel, meetingTypeLabel, meetingDate.
The meeting date may be missing on very old rows; the submission timestamp's
date is used instead. Labels are imported as written, so rows whose team or
meeting type no longer has a code keep the label with an empty code.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import get_zone, parse_sheet_timestamp
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError
from .dates import normalize_date_key, parse_date_key
from .model import AttendanceRecord
from .repository import AttendanceRecordStore
from .sheet_repository import SHEET_COLUMNS, is_header_row

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    records: list[AttendanceRecord] = field(default_factory=list)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


def read_csv_rows(path: str | Path) -> list[list[str]]:
    with Path(path).open(newline="", encoding="utf-8-sig") as f:
        rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
    if rows and is_header_row(rows[0]):
        rows = rows[1:]
    return rows


def parse_meeting_date(value: str, tz_name: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """Date key for a sheet date cell: `YYYY. M. D`, `YYYY/MM/DD` or ISO 8601."""
    key = normalize_date_key(value, tz_name)
    if key or not value:
        return key
    try:
        return normalize_date_key(datetime.fromisoformat(value.strip()), tz_name)
    except ValueError:
        return None


def parse_legacy_rows(rows: Iterable[Sequence[str]], tz_name: str = DEFAULT_TIMEZONE) -> ImportResult:
    result = ImportResult()
    zone = get_zone(tz_name)

    for line_no, row in enumerate(rows, start=1):
        cells = (list(row) + [""] * len(SHEET_COLUMNS))[: len(SHEET_COLUMNS)]
        timestamp_s, nickname, team_label, meeting_type_label, meeting_date_s = (c.strip() for c in cells)

        if not nickname:
            result.skipped += 1
            continue

        timestamp = parse_sheet_timestamp(timestamp_s, tz_name)
        date_key = parse_meeting_date(meeting_date_s, tz_name) or (
            normalize_date_key(timestamp, tz_name) if timestamp else None
        )
        if not date_key:
            result.errors.append(f"row {line_no}: unparseable date {meeting_date_s!r}")
            continue

        meeting_day = parse_date_key(date_key)
        if meeting_day is None:
            result.errors.append(f"row {line_no}: invalid date {date_key!r}")
            continue
        written_at = timestamp or datetime(meeting_day.year, meeting_day.month, meeting_day.day, tzinfo=zone)

        try:
            record = AttendanceRecord.from_legacy(
                nickname=nickname,
                team_label=team_label,
                meeting_type_label=meeting_type_label,
                meeting_date_key=date_key,
                now=written_at,
            )
        except ValidationError as e:
            result.errors.append(f"row {line_no}: {e}")
            continue

        result.records.append(record)

    return result


def import_records(store: AttendanceRecordStore, records: Iterable[AttendanceRecord]) -> int:
    count = 0
    for record in records:
        store.append_record(record)
        count += 1
        if count % 500 == 0:
            logger.info("%d records imported...", count)
    return count
