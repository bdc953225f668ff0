from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, RawRecord
from .repository import AttendanceRecordStore, FilteringAttendanceStore

_SELECT_RAW = """
    SELECT nickname, team_label, meeting_type_label, meeting_date_key, ts
    FROM attendance_records
"""


def _to_raw(r: dict) -> RawRecord:
    return RawRecord(
        nickname=r["nickname"],
        team_label=r.get("team_label") or "",
        meeting_type_label=r.get("meeting_type_label") or "",
        meeting_date=r["meeting_date_key"],
        ts=int(r["ts"]) if r.get("ts") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRecordStore, FilteringAttendanceStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append_record(self, record: AttendanceRecord) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    nickname, nickname_key, team, team_label, meeting_type, meeting_type_label,
                    meeting_date_key, month_key, ts
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.nickname,
                    record.nickname_key,
                    record.team,
                    record.team_label,
                    record.meeting_type,
                    record.meeting_type_label,
                    record.meeting_date_key,
                    record.month_key,
                    record.client_ts,
                ),
            )
            return str(cur.lastrowid)

    def has_records(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS present FROM attendance_records LIMIT 1")
            return fetchone(cur) is not None

    def scan_all(self) -> Sequence[RawRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RAW + " WHERE meeting_date_key <> '' ORDER BY record_id DESC")
            return [_to_raw(r) for r in fetchall(cur)]

    def query_by_date(self, date_key: str) -> Sequence[RawRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_RAW + " WHERE meeting_date_key=%s ORDER BY ts DESC, record_id DESC",
                (date_key,),
            )
            return [_to_raw(r) for r in fetchall(cur)]

    def query_by_nickname_key_and_month(self, nickname_key: str, month_key: str) -> Sequence[RawRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_RAW + " WHERE nickname_key=%s AND month_key=%s ORDER BY ts DESC, record_id DESC",
                (nickname_key, month_key),
            )
            return [_to_raw(r) for r in fetchall(cur)]

    def recent_nicknames(self, limit: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT nickname FROM attendance_records ORDER BY ts DESC, record_id DESC LIMIT %s",
                (int(limit),),
            )
            return [r["nickname"] for r in fetchall(cur)]

    def delete_by_nickname_prefix(self, prefix: str, *, dry_run: bool = False) -> Sequence[RawRecord]:
        like = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RAW + " WHERE nickname LIKE %s COLLATE utf8mb4_bin", (like,))
            matched = [_to_raw(r) for r in fetchall(cur)]
            if matched and not dry_run:
                cur.execute("DELETE FROM attendance_records WHERE nickname LIKE %s COLLATE utf8mb4_bin", (like,))
            return matched
