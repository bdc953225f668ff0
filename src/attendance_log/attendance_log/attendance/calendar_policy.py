from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date

from .dates import is_valid_month_key

# date.weekday(): Monday == 0
TUESDAY = 1
THURSDAY = 3
SATURDAY = 5

DEFAULT_MEETING_WEEKDAYS = frozenset({TUESDAY, THURSDAY, SATURDAY})


@dataclass(frozen=True)
class CalendarPolicy:
    """Which calendar days count as meeting days for the attendance rate."""

    meeting_weekdays: frozenset[int] = field(default=DEFAULT_MEETING_WEEKDAYS)

    def eligible_day_count(self, month_key: str) -> int:
        if not is_valid_month_key(month_key):
            return 0

        year, month = int(month_key[:4]), int(month_key[5:7])
        if year < 1 or not 1 <= month <= 12:
            return 0

        _, days_in_month = calendar.monthrange(year, month)
        return sum(
            1
            for day in range(1, days_in_month + 1)
            if date(year, month, day).weekday() in self.meeting_weekdays
        )
