from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_choice(value, choices, field_name: str):
    try:
        return choices(value)
    except ValueError:
        raise ValidationError(f"{field_name} has an unsupported value: {value!r}") from None
