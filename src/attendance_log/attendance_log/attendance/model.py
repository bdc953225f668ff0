from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_millis
from ..core.enums import EnumSet
from ..core.exceptions import ValidationError
from .codec import LabeledCode
from .dates import date_key_to_month_key, is_calendar_date_key


@dataclass(frozen=True)
class AttendanceRecord:
    """One check-in, immutable once written.

    Build it through `create` (or `from_legacy` for imported sheet rows) so the derived fields
    (nickname_key, labels, month_key) are computed in exactly one place.
    """

    nickname: str
    nickname_key: str
    team: Optional[str]
    team_label: str
    meeting_type: Optional[str]
    meeting_type_label: str
    meeting_date_key: str
    month_key: str
    client_ts: int
    created_at: datetime

    @classmethod
    def create(
        cls,
        *,
        nickname: str,
        team_code: str,
        meeting_type_code: str,
        meeting_date_key: str,
        now: datetime,
    ) -> "AttendanceRecord":
        if not is_calendar_date_key(meeting_date_key):
            raise ValidationError(
                f"invalid meetingDate (YYYY/MM/DD): {meeting_date_key}", field="meetingDate"
            )

        team = LabeledCode.from_code(EnumSet.TEAM, team_code)
        if team is None:
            raise ValidationError(f"invalid team enum: {team_code}", field="team")

        meeting_type = LabeledCode.from_code(EnumSet.MEETING_TYPE, meeting_type_code)
        if meeting_type is None:
            raise ValidationError(f"invalid meetingType enum: {meeting_type_code}", field="meetingType")

        return cls(
            nickname=nickname,
            nickname_key=nickname.lower(),
            team=team_code,
            team_label=team.label,
            meeting_type=meeting_type_code,
            meeting_type_label=meeting_type.label,
            meeting_date_key=meeting_date_key,
            month_key=date_key_to_month_key(meeting_date_key),
            client_ts=to_millis(now),
            created_at=now,
        )

    @classmethod
    def from_legacy(
        cls,
        *,
        nickname: str,
        team_label: str,
        meeting_type_label: str,
        meeting_date_key: str,
        now: datetime,
    ) -> "AttendanceRecord":
        """Import path for old sheet rows: labels are kept as written.

        A label no current code maps to is stored with a None code.
        """
        if not is_calendar_date_key(meeting_date_key):
            raise ValidationError(
                f"invalid meetingDate (YYYY/MM/DD): {meeting_date_key}", field="meetingDate"
            )

        team = LabeledCode.from_label(EnumSet.TEAM, team_label)
        meeting_type = LabeledCode.from_label(EnumSet.MEETING_TYPE, meeting_type_label)
        return cls(
            nickname=nickname,
            nickname_key=nickname.lower(),
            team=team.code,
            team_label=team.label,
            meeting_type=meeting_type.code,
            meeting_type_label=meeting_type.label,
            meeting_date_key=meeting_date_key,
            month_key=date_key_to_month_key(meeting_date_key),
            client_ts=to_millis(now),
            created_at=now,
        )


@dataclass(frozen=True)
class RawRecord:
    """A stored row as read back, before normalization.

    `meeting_date` is whatever the backend holds: a date, a canonical key or a
    legacy `YYYY. M. D` string. Labels are the durable enum representation.
    """

    nickname: str
    team_label: str
    meeting_type_label: str
    meeting_date: Any
    ts: Optional[int] = None


@dataclass(frozen=True)
class ViewItem:
    nickname: str
    team: Optional[str]
    team_label: str
    meeting_type: Optional[str]
    meeting_type_label: str
    meeting_date: str
    time_text: str

    def to_dict(self) -> dict:
        return {
            "nickname": self.nickname,
            "team": self.team,
            "teamLabel": self.team_label,
            "meetingType": self.meeting_type,
            "meetingTypeLabel": self.meeting_type_label,
            "meetingDate": self.meeting_date,
            "timeText": self.time_text,
        }


@dataclass(frozen=True)
class StatusView:
    date: str
    count: int
    items: list[ViewItem] = field(default_factory=list)

    @classmethod
    def empty(cls, date_key: str) -> "StatusView":
        return cls(date=date_key, count=0, items=[])

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "count": self.count,
            "items": [i.to_dict() for i in self.items],
        }


@dataclass(frozen=True)
class HistoryView:
    nickname: str
    month: str
    count: int
    items: list[ViewItem]
    summary_by_type: dict[str, int]
    total_possible: int
    attendance_rate: int

    def to_dict(self) -> dict:
        return {
            "nickname": self.nickname,
            "month": self.month,
            "count": self.count,
            "items": [i.to_dict() for i in self.items],
            "summaryByType": dict(self.summary_by_type),
            "totalPossible": self.total_possible,
            "attendanceRate": self.attendance_rate,
        }


@dataclass(frozen=True)
class StoredRecordSummary:
    """What the write path echoes back for the record it just stored."""

    nickname_stored: str
    team: str
    team_label: str
    meeting_type: str
    meeting_type_label: str
    meeting_date: str
    time_text: str

    def to_dict(self) -> dict:
        return {
            "nicknameStored": self.nickname_stored,
            "team": self.team,
            "teamLabel": self.team_label,
            "meetingType": self.meeting_type,
            "meetingTypeLabel": self.meeting_type_label,
            "meetingDate": self.meeting_date,
            "timeText": self.time_text,
        }
