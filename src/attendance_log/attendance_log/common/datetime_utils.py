from __future__ import annotations

import re
from datetime import datetime
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE

_SHEET_TIMESTAMP_RE = re.compile(
    r"^(\d{4})\.\s*(\d{1,2})\.\s*(\d{1,2})\.?\s+(오전|오후)\s+(\d{1,2}):(\d{2}):(\d{2})$"
)


@lru_cache(maxsize=None)
def get_zone(tz_name: str = DEFAULT_TIMEZONE) -> ZoneInfo:
    return ZoneInfo(tz_name)


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current time in the club timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(get_zone(tz_name))


def to_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def from_millis(ms: int, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=get_zone(tz_name))


def today_date_key(tz_name: str = DEFAULT_TIMEZONE, *, now: Optional[datetime] = None) -> str:
    now = now or now_local(tz_name)
    return now.astimezone(get_zone(tz_name)).strftime("%Y/%m/%d")


def current_month_key(tz_name: str = DEFAULT_TIMEZONE, *, now: Optional[datetime] = None) -> str:
    now = now or now_local(tz_name)
    return now.astimezone(get_zone(tz_name)).strftime("%Y-%m")


def format_korean_ampm(dt: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Render like the ko-KR locale does: '2026. 1. 11. 오후 7:10:35'."""
    local = dt.astimezone(get_zone(tz_name))
    meridiem = "오전" if local.hour < 12 else "오후"
    hour = local.hour % 12 or 12
    return (
        f"{local.year}. {local.month}. {local.day}. "
        f"{meridiem} {hour}:{local.minute:02d}:{local.second:02d}"
    )


def format_timestamp_for_sheet(dt: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Sheet timestamps drop the dot after the day: '2026. 1. 11 오후 7:10:35'."""
    return re.sub(r"\. (오전|오후)", r" \1", format_korean_ampm(dt, tz_name), count=1)


def parse_sheet_timestamp(value: str, tz_name: str = DEFAULT_TIMEZONE) -> Optional[datetime]:
    """Parse a sheet timestamp (with or without the dot after the day).

    Returns None for anything else; sheet cells are free text.
    """
    m = _SHEET_TIMESTAMP_RE.match((value or "").strip())
    if not m:
        return None

    year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
    hour = int(m.group(5)) % 12
    if m.group(4) == "오후":
        hour += 12
    try:
        return datetime(
            year, month, day, hour, int(m.group(6)), int(m.group(7)), tzinfo=get_zone(tz_name)
        )
    except ValueError:
        return None
