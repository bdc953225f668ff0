"""Club attendance log.

Feature modules follow the same layering as the rest of the codebase: pure
domain helpers (codec, dates, calendar policy), repositories behind a
Protocol, aggregators and a service layer, and a thin Flask controller.
"""
from __future__ import annotations

from .attendance.cache import InMemoryCacheBackend, ViewCache
from .attendance.calendar_policy import CalendarPolicy
from .attendance.history_aggregator import HistoryAggregator
from .attendance.service import AttendanceService
from .attendance.status_aggregator import StatusAggregator
from .container import Container, build_container, build_store

__all__ = [
    "AttendanceService",
    "CalendarPolicy",
    "Container",
    "HistoryAggregator",
    "InMemoryCacheBackend",
    "StatusAggregator",
    "ViewCache",
    "build_container",
    "build_store",
]
