"""Import a legacy attendance sheet export (CSV) into the configured store.

Usage:
    python scripts/import_legacy_csv.py data.csv [--dry-run]
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

from src.attendance_log.attendance_log.attendance.legacy_import import (
    import_records,
    parse_legacy_rows,
    read_csv_rows,
)
from src.attendance_log.attendance_log.container import build_store


def main() -> None:
    parser = argparse.ArgumentParser(description="Import legacy attendance sheet CSV")
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--dry-run", action="store_true", help="parse and report only")
    args = parser.parse_args()

    if not args.csv_path.exists():
        raise SystemExit(f"CSV file not found: {args.csv_path}")

    settings = importlib.import_module(get_settings_module())
    result = parse_legacy_rows(read_csv_rows(args.csv_path), settings.TIMEZONE)
    for error in result.errors:
        print(f"WARN: {error}")

    imported = 0
    if not args.dry_run:
        store = build_store(
            store_backend=settings.STORE_BACKEND,
            db_config=getattr(settings, "DB_CONFIG", None),
            sheet_csv_path=getattr(settings, "SHEET_CSV_PATH", None),
            tz_name=settings.TIMEZONE,
        )
        imported = import_records(store, result.records)

    print("=" * 40)
    print(f"OK: parsed={len(result.records)} imported={imported} skipped={result.skipped} errors={len(result.errors)}")
    print("=" * 40)


if __name__ == "__main__":
    main()
