from __future__ import annotations

from enum import Enum


class EnumSet(str, Enum):
    """Closed code sets carried on every attendance record."""

    TEAM = "team"
    MEETING_TYPE = "meetingType"


class Team(str, Enum):
    """Club teams."""

    T1 = "T1"
    T2 = "T2"
    T3 = "T3"
    T4 = "T4"
    T5 = "T5"
    S = "S"


class MeetingType(str, Enum):
    """Meeting kinds; ETC covers anything outside the weekly schedule."""

    ETC = "ETC"
    TUE = "TUE"
    THU = "THU"
    SAT = "SAT"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    SHEET = "sheet"
