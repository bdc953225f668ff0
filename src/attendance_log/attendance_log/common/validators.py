from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def clean_str(value: Any) -> str:
    return "" if value is None else str(value).strip()


def require_non_empty(value: Any, field_name: str) -> str:
    value = clean_str(value)
    if not value:
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value
