"""Short-TTL cache for computed views.

Entries are whole serialized views, written wholesale and never mutated: the
last put for a key wins. Expired entries are dropped on read and on every put.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..core.constants import DEFAULT_VIEW_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def status_cache_key(date_key: str) -> str:
    return f"status:{date_key}"


def history_cache_key(nickname: str, month_key: str) -> str:
    # Nickname keeps the caller's casing: 'Alice' and 'alice' are separate entries.
    return f"history:{nickname}::{month_key}"


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def put(self, key: str, value: bytes, ttl_seconds: float) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class _Entry:
    value: bytes
    expires_at: float


class InMemoryCacheBackend(CacheBackend):
    """Process-local backend; one instance per service process."""

    def __init__(self, *, clock: Clock = time.monotonic):
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def put(self, key: str, value: bytes, ttl_seconds: float) -> None:
        with self._lock:
            now = self._clock()
            self._evict_expired(now)
            self._entries[key] = _Entry(value=value, expires_at=now + ttl_seconds)

    def _evict_expired(self, now: float) -> None:
        # Caller holds the lock.
        expired = [k for k, entry in self._entries.items() if now >= entry.expires_at]
        for k in expired:
            del self._entries[k]

    def __len__(self) -> int:
        return len(self._entries)


class ViewCache:
    """Best-effort view cache: any backend or payload failure is a miss."""

    def __init__(self, backend: CacheBackend, *, ttl_seconds: float = DEFAULT_VIEW_CACHE_TTL_SECONDS):
        self._backend = backend
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, key: str) -> Optional[dict]:
        try:
            payload = self._backend.get(key)
        except Exception as e:
            logger.warning("cache get failed for %s: %s", key, e)
            return None
        if payload is None:
            return None

        try:
            view = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning("discarding corrupt cache entry %s: %s", key, e)
            return None
        return view if isinstance(view, dict) else None

    def put(self, key: str, view: dict, ttl_seconds: Optional[float] = None) -> None:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        payload = json.dumps(view, ensure_ascii=False).encode("utf-8")
        try:
            self._backend.put(key, payload, ttl)
        except Exception as e:
            logger.warning("cache put failed for %s: %s", key, e)
