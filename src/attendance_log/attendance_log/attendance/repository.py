from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .model import AttendanceRecord, RawRecord


class AttendanceRecordStore(Protocol):
    """Append-only attendance store.

    Aggregators depend on this interface, never on a concrete
    backend. Backend failures surface as `StoreUnavailable`.
    """

    def append_record(self, record: AttendanceRecord) -> str:
        """Persist a new record and return its backend id."""

        raise NotImplementedError

    def has_records(self) -> bool:
        raise NotImplementedError

    def scan_all(self) -> Sequence[RawRecord]:
        """Every row with a present date cell, date cells left unnormalized.

        Rows come newest write first, which orders equal timestamps.
        """

        raise NotImplementedError

    def recent_nicknames(self, limit: int) -> Sequence[str]:
        """Nicknames of the `limit` most recent records, newest first."""

        raise NotImplementedError

    def delete_by_nickname_prefix(self, prefix: str, *, dry_run: bool = False) -> Sequence[RawRecord]:
        """Maintenance only (test data cleanup); returns the matched rows."""

        raise NotImplementedError


@runtime_checkable
class FilteringAttendanceStore(Protocol):
    """Backends that can filter and sort on the normalized columns themselves."""

    def query_by_date(self, date_key: str) -> Sequence[RawRecord]:
        raise NotImplementedError

    def query_by_nickname_key_and_month(self, nickname_key: str, month_key: str) -> Sequence[RawRecord]:
        raise NotImplementedError
