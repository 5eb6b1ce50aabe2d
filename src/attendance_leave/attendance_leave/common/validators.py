from __future__ import annotations

from typing import Optional, Type

from ..core.exceptions import DomainError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_length_between(
    value: Optional[str],
    field_name: str,
    *,
    min_len: int,
    max_len: int,
    too_short: Type[DomainError] = ValidationError,
    too_long: Type[DomainError] = ValidationError,
) -> str:
    """Strip ``value`` and check ``min_len <= len <= max_len``."""
    text = (value or "").strip()
    if len(text) < min_len:
        raise too_short(
            f"{field_name} must be at least {min_len} characters",
            length=len(text),
            min_length=min_len,
        )
    if len(text) > max_len:
        raise too_long(
            f"{field_name} must be at most {max_len} characters",
            length=len(text),
            max_length=max_len,
        )
    return text
