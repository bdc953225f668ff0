from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is missing, malformed or outside an enum.

    `field` names the offending request field so the HTTP layer can echo it.
    """

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StoreUnavailable(DomainError):
    """Raised when the attendance record store cannot be read or written."""


class CacheUnavailable(DomainError):
    """Raised by cache backends; callers treat it as a miss."""
