from __future__ import annotations

import logging

from ..core.constants import DEFAULT_TIMEZONE
from .dates import normalize_date_key
from .model import StatusView
from .projection import newest_first, project
from .repository import AttendanceRecordStore, FilteringAttendanceStore

logger = logging.getLogger(__name__)


class StatusAggregator:
    """Builds the per-date view: who checked in for a meeting date."""

    def __init__(self, store: AttendanceRecordStore, *, tz_name: str = DEFAULT_TIMEZONE):
        self._store = store
        self._tz_name = tz_name

    def compute_status(self, date_key: str) -> StatusView:
        if isinstance(self._store, FilteringAttendanceStore):
            rows = self._store.query_by_date(date_key)
        else:
            if not self._store.has_records():
                return StatusView.empty(date_key)
            rows = self._store.scan_all()

        projected = []
        skipped = 0
        for raw in rows:
            key = normalize_date_key(raw.meeting_date, self._tz_name)
            if key is None:
                skipped += 1
                continue
            if key != date_key:
                continue
            projected.append(project(raw, key, self._tz_name))

        if skipped:
            logger.debug("status %s: skipped %d rows with unparseable dates", date_key, skipped)

        items = newest_first(projected)
        return StatusView(date=date_key, count=len(items), items=items)
