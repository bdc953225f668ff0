from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.cache import CacheBackend, InMemoryCacheBackend, ViewCache
from .attendance.calendar_policy import CalendarPolicy
from .attendance.history_aggregator import HistoryAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRecordStore
from .attendance.service import AttendanceService
from .attendance.sheet_repository import CsvSheetAttendanceRepository, SheetBackup
from .attendance.status_aggregator import StatusAggregator
from .core.constants import DEFAULT_TIMEZONE, DEFAULT_VIEW_CACHE_TTL_SECONDS
from .core.enums import StoreBackend
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    store: AttendanceRecordStore
    cache: ViewCache

    status_aggregator: StatusAggregator
    history_aggregator: HistoryAggregator
    attendance_service: AttendanceService


def build_store(
    *,
    store_backend: str,
    db_config: Optional[dict] = None,
    sheet_csv_path: Optional[str] = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> AttendanceRecordStore:
    backend = StoreBackend(store_backend)
    if backend == StoreBackend.SHEET:
        if not sheet_csv_path:
            raise RuntimeError("SHEET_CSV_PATH must be configured for the sheet store")
        return CsvSheetAttendanceRepository(sheet_csv_path, tz_name=tz_name)

    if not db_config:
        raise RuntimeError("DB_CONFIG must be configured for the mysql store")
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return MySQLAttendanceRepository(conn)


def build_container(
    *,
    store: AttendanceRecordStore,
    tz_name: str = DEFAULT_TIMEZONE,
    cache_ttl_seconds: float = DEFAULT_VIEW_CACHE_TTL_SECONDS,
    cache_backend: Optional[CacheBackend] = None,
    sheet_backup_path: Optional[str] = None,
    calendar_policy: Optional[CalendarPolicy] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    if cache_backend is None:
        cache_backend = InMemoryCacheBackend()
    cache = ViewCache(cache_backend, ttl_seconds=cache_ttl_seconds)

    status_aggregator = StatusAggregator(store, tz_name=tz_name)
    history_aggregator = HistoryAggregator(store, calendar_policy=calendar_policy, tz_name=tz_name)

    backup = None
    if sheet_backup_path:
        backup = SheetBackup(CsvSheetAttendanceRepository(sheet_backup_path, tz_name=tz_name))

    attendance_service = AttendanceService(
        store,
        status_aggregator,
        history_aggregator,
        cache,
        backup=backup,
        tz_name=tz_name,
        clock=clock,
    )

    return Container(
        store=store,
        cache=cache,
        status_aggregator=status_aggregator,
        history_aggregator=history_aggregator,
        attendance_service=attendance_service,
    )
