"""Delete check-ins whose nickname starts with TEST_ (smoke-test submissions).

Usage:
    python scripts/cleanup_test_data.py [--dry-run] [--mysql-only | --sheet-only]
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_log.attendance_log.attendance.sheet_repository import CsvSheetAttendanceRepository
from src.attendance_log.attendance_log.container import build_store
from src.attendance_log.attendance_log.core.constants import TEST_NICKNAME_PREFIX


def _cleanup(name: str, store, *, dry_run: bool) -> int:
    matched = store.delete_by_nickname_prefix(TEST_NICKNAME_PREFIX, dry_run=dry_run)
    for raw in matched:
        print(f"   - {raw.nickname} ({raw.meeting_date})")
    verb = "would delete" if dry_run else "deleted"
    print(f"OK: {name}: {verb} {len(matched)}")
    return len(matched)


def main() -> None:
    parser = argparse.ArgumentParser(description="Remove TEST_ attendance records")
    parser.add_argument("--dry-run", action="store_true", help="list matches without deleting")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--mysql-only", action="store_true")
    group.add_argument("--sheet-only", action="store_true")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())

    if not args.sheet_only:
        store = build_store(store_backend="mysql", db_config=settings.DB_CONFIG, tz_name=settings.TIMEZONE)
        _cleanup("mysql", store, dry_run=args.dry_run)

    if not args.mysql_only:
        for path in filter(None, {settings.SHEET_CSV_PATH, settings.SHEET_BACKUP_PATH}):
            _cleanup(f"sheet {path}", CsvSheetAttendanceRepository(path, tz_name=settings.TIMEZONE), dry_run=args.dry_run)


if __name__ == "__main__":
    main()
