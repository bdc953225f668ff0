from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..common.datetime_utils import format_korean_ampm, from_millis
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import EnumSet
from .codec import LabeledCode
from .model import RawRecord, ViewItem


@dataclass(frozen=True)
class _Projected:
    ts: int
    item: ViewItem


def project(raw: RawRecord, date_key: str, tz_name: str = DEFAULT_TIMEZONE) -> _Projected:
    """Item shape shared by status and history views.

    Codes are recovered from the stored labels; unknown labels give None.
    """
    team = LabeledCode.from_label(EnumSet.TEAM, raw.team_label)
    meeting_type = LabeledCode.from_label(EnumSet.MEETING_TYPE, raw.meeting_type_label)
    ts = int(raw.ts) if raw.ts else 0

    item = ViewItem(
        nickname=raw.nickname,
        team=team.code,
        team_label=team.label,
        meeting_type=meeting_type.code,
        meeting_type_label=meeting_type.label,
        meeting_date=date_key,
        time_text=format_korean_ampm(from_millis(ts, tz_name), tz_name) if ts else "",
    )
    return _Projected(ts=ts, item=item)


def newest_first(projected: Iterable[_Projected]) -> list[ViewItem]:
    """Sort by timestamp descending (missing == 0) and drop the sort key.

    Stable: equal timestamps keep the store's newest-first order.
    """
    return [p.item for p in sorted(projected, key=lambda p: p.ts, reverse=True)]
