"""Example: use the service layer directly (no Flask).

Prints today's status and the current month's history for a nickname.
"""

import importlib
import json
import sys

from config import get_settings_module

from src.attendance_log.attendance_log.container import build_container, build_store


def main():
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        store_backend=settings.STORE_BACKEND,
        db_config=settings.DB_CONFIG,
        sheet_csv_path=settings.SHEET_CSV_PATH,
        tz_name=settings.TIMEZONE,
    )
    service = build_container(store=store, tz_name=settings.TIMEZONE).attendance_service

    print(json.dumps(service.get_status(), ensure_ascii=False, indent=2))
    if len(sys.argv) > 1:
        print(json.dumps(service.get_history(sys.argv[1]), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
