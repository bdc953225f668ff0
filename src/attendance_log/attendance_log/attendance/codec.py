"""Code <-> label mapping for the team and meeting-type enums.

Records carry both a stable code and the human label. The label is what old
rows were written with, so reads go label -> code and tolerate misses.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.enums import EnumSet, MeetingType, Team

TEAM_LABEL: Mapping[str, str] = {
    Team.T1.value: "1팀",
    Team.T2.value: "2팀",
    Team.T3.value: "3팀",
    Team.T4.value: "4팀",
    Team.T5.value: "5팀",
    Team.S.value: "S팀",
}

MEETING_TYPE_LABEL: Mapping[str, str] = {
    MeetingType.ETC.value: "기타",
    MeetingType.TUE.value: "화요일",
    MeetingType.THU.value: "목요일",
    MeetingType.SAT.value: "토요일",
}

_LABELS: Mapping[EnumSet, Mapping[str, str]] = {
    EnumSet.TEAM: TEAM_LABEL,
    EnumSet.MEETING_TYPE: MEETING_TYPE_LABEL,
}


def label_of(enum_set: EnumSet, code: Optional[str]) -> Optional[str]:
    """Label for `code`, or None when the code is not a member of the set."""
    if not code:
        return None
    return _LABELS[enum_set].get(code)


def code_of(enum_set: EnumSet, label: Optional[str]) -> Optional[str]:
    """Reverse lookup; None for labels no current code maps to."""
    if not label:
        return None
    for code, candidate in _LABELS[enum_set].items():
        if candidate == label:
            return code
    return None


def codes(enum_set: EnumSet) -> list[str]:
    return list(_LABELS[enum_set])


@dataclass(frozen=True)
class LabeledCode:
    """An enum field as stored: the label is durable, the code best-effort."""

    code: Optional[str]
    label: str

    @classmethod
    def from_code(cls, enum_set: EnumSet, code: str) -> Optional["LabeledCode"]:
        label = label_of(enum_set, code)
        if label is None:
            return None
        return cls(code=code, label=label)

    @classmethod
    def from_label(cls, enum_set: EnumSet, label: Optional[str]) -> "LabeledCode":
        label = label or ""
        return cls(code=code_of(enum_set, label), label=label)
