from __future__ import annotations

import logging

from ..core.constants import DEFAULT_TIMEZONE, UNSPECIFIED_MEETING_TYPE_LABEL
from .calendar_policy import CalendarPolicy
from .dates import date_key_to_month_key, normalize_date_key
from .model import HistoryView
from .projection import newest_first, project
from .repository import AttendanceRecordStore, FilteringAttendanceStore

logger = logging.getLogger(__name__)


def attendance_rate(count: int, total_possible: int) -> int:
    if total_possible <= 0:
        return 0
    # half rounds up
    return min(100, int(count * 100 / total_possible + 0.5))


class HistoryAggregator:
    """Builds the per-nickname monthly view with type summary and rate."""

    def __init__(
        self,
        store: AttendanceRecordStore,
        *,
        calendar_policy: CalendarPolicy | None = None,
        tz_name: str = DEFAULT_TIMEZONE,
    ):
        self._store = store
        self._calendar = calendar_policy or CalendarPolicy()
        self._tz_name = tz_name

    def compute_history(self, nickname: str, month_key: str) -> HistoryView:
        nickname_key = nickname.strip().lower()

        if isinstance(self._store, FilteringAttendanceStore):
            rows = self._store.query_by_nickname_key_and_month(nickname_key, month_key)
            scanned = False
        else:
            rows = self._store.scan_all() if self._store.has_records() else []
            scanned = True

        projected = []
        summary_by_type: dict[str, int] = {}
        for raw in rows:
            if scanned and (raw.nickname or "").strip().lower() != nickname_key:
                continue

            key = normalize_date_key(raw.meeting_date, self._tz_name)
            if key is None or date_key_to_month_key(key) != month_key:
                continue

            p = project(raw, key, self._tz_name)
            projected.append(p)

            type_label = p.item.meeting_type_label or UNSPECIFIED_MEETING_TYPE_LABEL
            summary_by_type[type_label] = summary_by_type.get(type_label, 0) + 1

        items = newest_first(projected)
        total_possible = self._calendar.eligible_day_count(month_key)

        return HistoryView(
            nickname=nickname,
            month=month_key,
            count=len(items),
            items=items,
            summary_by_type=summary_by_type,
            total_possible=total_possible,
            attendance_rate=attendance_rate(len(items), total_possible),
        )
