"""Canonical date keys.

The store has held meeting dates as native date values, as `YYYY/MM/DD`
strings and as the legacy sheet export format `YYYY. M. D`. Historical rows
are never rewritten, so every read path goes through `normalize_date_key`.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import get_zone
from ..core.constants import DEFAULT_TIMEZONE

DATE_KEY_RE = re.compile(r"^\d{4}/\d{2}/\d{2}$")
MONTH_KEY_RE = re.compile(r"^\d{4}-\d{2}$")
LEGACY_DATE_RE = re.compile(r"^(\d{4})\.\s*(\d{1,2})\.\s*(\d{1,2})$")


def is_valid_date_key(value: Any) -> bool:
    return isinstance(value, str) and DATE_KEY_RE.match(value) is not None


def is_valid_month_key(value: Any) -> bool:
    return isinstance(value, str) and MONTH_KEY_RE.match(value) is not None


def parse_date_key(value: Any) -> Optional[date]:
    if not is_valid_date_key(value):
        return None
    try:
        return datetime.strptime(value, "%Y/%m/%d").date()
    except ValueError:
        return None


def is_calendar_date_key(value: Any) -> bool:
    """Format check plus calendar validity ('2026/02/30' fails)."""
    return parse_date_key(value) is not None


def format_date_key(value: date) -> str:
    return f"{value.year:04d}/{value.month:02d}/{value.day:02d}"


def date_key_to_month_key(date_key: str) -> str:
    if not is_valid_date_key(date_key):
        return ""
    return date_key[:7].replace("/", "-")


def format_date_key_for_sheet(date_key: str) -> str:
    """'2026/01/10' -> '2026. 1. 10' (legacy sheet format, no zero padding)."""
    d = parse_date_key(date_key)
    if d is None:
        return date_key
    return f"{d.year}. {d.month}. {d.day}"


def normalize_date_key(value: Any, tz_name: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """Canonical `YYYY/MM/DD` for a raw date cell, or None to exclude the row.

    Never raises: unparseable cells are expected data noise.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(get_zone(tz_name))
        return format_date_key(value.date())

    if isinstance(value, date):
        return format_date_key(value)

    if not isinstance(value, str):
        return None

    value = value.strip()
    if DATE_KEY_RE.match(value):
        return value

    m = LEGACY_DATE_RE.match(value)
    if not m:
        return None
    try:
        return format_date_key(date(int(m.group(1)), int(m.group(2)), int(m.group(3))))
    except ValueError:
        return None
