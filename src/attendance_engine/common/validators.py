from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_unique(values: Iterable[str], field_name: str) -> list[str]:
    items = [str(v).strip() for v in values]
    if not items or any(not v for v in items):
        raise ValidationError(f"{field_name} must be a non-empty list")
    if len(set(items)) != len(items):
        raise ValidationError(f"{field_name} contains duplicates")
    return items
