from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import (
    current_month_key,
    format_korean_ampm,
    get_zone,
    now_local,
    today_date_key,
)
from ..common.validators import clean_str, require_non_empty
from ..core.constants import (
    DEFAULT_NICKNAMES_LIMIT,
    DEFAULT_TIMEZONE,
    NICKNAMES_SCAN_FACTOR,
    TEST_NICKNAME,
    TEST_NICKNAME_PREFIX,
)
from ..core.exceptions import ValidationError
from .cache import ViewCache, history_cache_key, status_cache_key
from .dates import is_valid_date_key, is_valid_month_key
from .history_aggregator import HistoryAggregator
from .model import AttendanceRecord, StoredRecordSummary
from .repository import AttendanceRecordStore
from .sheet_repository import SheetBackup
from .status_aggregator import StatusAggregator

logger = logging.getLogger(__name__)


def make_test_nickname(now: datetime) -> str:
    return f"{TEST_NICKNAME_PREFIX}{now.strftime('%Y%m%d_%H%M%S')}"


class AttendanceService:
    """Query surface used by the HTTP layer: status, history, check-in, nicknames."""

    def __init__(
        self,
        store: AttendanceRecordStore,
        status_aggregator: StatusAggregator,
        history_aggregator: HistoryAggregator,
        cache: ViewCache,
        *,
        backup: Optional[SheetBackup] = None,
        tz_name: str = DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self._status = status_aggregator
        self._history = history_aggregator
        self._cache = cache
        self._backup = backup
        self._tz_name = tz_name
        self._clock = clock or (lambda: now_local(tz_name))

    def _now(self) -> datetime:
        """Clock reading in the club timezone; naive values are taken as local."""
        now = self._clock()
        zone = get_zone(self._tz_name)
        if now.tzinfo is None:
            return now.replace(tzinfo=zone)
        return now.astimezone(zone)

    def get_status(self, date_key: Optional[str] = None) -> dict:
        date_key = clean_str(date_key) or today_date_key(self._tz_name, now=self._now())
        if not is_valid_date_key(date_key):
            raise ValidationError(f"invalid date (YYYY/MM/DD): {date_key}", field="date")

        key = status_cache_key(date_key)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        view = self._status.compute_status(date_key).to_dict()
        self._cache.put(key, view)
        return view

    def get_history(self, nickname: Optional[str], month_key: Optional[str] = None) -> dict:
        nickname = require_non_empty(nickname, "nickname")
        month_key = clean_str(month_key) or current_month_key(self._tz_name, now=self._now())
        if not is_valid_month_key(month_key):
            raise ValidationError(f"invalid month (YYYY-MM): {month_key}", field="month")

        key = history_cache_key(nickname, month_key)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        view = self._history.compute_history(nickname, month_key).to_dict()
        self._cache.put(key, view)
        return view

    def record_attendance(
        self,
        nickname: Optional[str],
        team_code: Optional[str],
        meeting_type_code: Optional[str],
        meeting_date_key: Optional[str],
    ) -> tuple[StoredRecordSummary, dict]:
        nickname = require_non_empty(nickname, "nickname")
        team_code = require_non_empty(team_code, "team").upper()
        meeting_type_code = require_non_empty(meeting_type_code, "meetingType").upper()
        meeting_date_key = require_non_empty(meeting_date_key, "meetingDate")

        now = self._now()
        if nickname.upper() == TEST_NICKNAME:
            nickname = make_test_nickname(now)

        record = AttendanceRecord.create(
            nickname=nickname,
            team_code=team_code,
            meeting_type_code=meeting_type_code,
            meeting_date_key=meeting_date_key,
            now=now,
        )
        self._store.append_record(record)

        if self._backup is not None:
            self._backup.append(record)

        # Refresh eagerly so the status returned with this write includes it.
        status = self._status.compute_status(record.meeting_date_key).to_dict()
        self._cache.put(status_cache_key(record.meeting_date_key), status)

        summary = StoredRecordSummary(
            nickname_stored=record.nickname,
            team=record.team,
            team_label=record.team_label,
            meeting_type=record.meeting_type,
            meeting_type_label=record.meeting_type_label,
            meeting_date=record.meeting_date_key,
            time_text=format_korean_ampm(now, self._tz_name),
        )
        return summary, status

    def list_nicknames(self, limit: int = DEFAULT_NICKNAMES_LIMIT) -> dict:
        """Autocomplete source: recent distinct nicknames, test entries excluded."""
        seen: set[str] = set()
        for nickname in self._store.recent_nicknames(limit * NICKNAMES_SCAN_FACTOR):
            if nickname and not nickname.upper().startswith(TEST_NICKNAME):
                seen.add(nickname)

        nicknames = sorted(seen)[:limit]
        return {"nicknames": nicknames, "count": len(nicknames)}
