from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_one_of(value: str, allowed: Iterable[str], field_name: str) -> str:
    value = require_non_empty(value, field_name)
    options = list(allowed)
    if value not in options:
        raise ValidationError(f"{field_name} must be one of: {', '.join(options)}")
    return value
