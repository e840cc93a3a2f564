from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_identifier(value: Any, field_name: str) -> Any:
    """Reject missing/blank identifiers (employeeId, date, ...)."""
    if value is None:
        raise ValidationError(f"{field_name} không hợp lệ")
    if isinstance(value, str):
        if not value.strip():
            raise ValidationError(f"{field_name} không hợp lệ")
        return value.strip()
    return value


def require_positive(value: int, field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} phải lớn hơn 0")
    return int(value)


def require_non_negative(value: int, field_name: str) -> int:
    if value is None or int(value) < 0:
        raise ValidationError(f"{field_name} không được âm")
    return int(value)
