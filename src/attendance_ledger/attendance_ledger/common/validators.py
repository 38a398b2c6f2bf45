from __future__ import annotations

from typing import Any

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def require_status(value: Any) -> AttendanceStatus:
    status = AttendanceStatus.parse(value)
    if status is None:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r} (expected one of: {allowed})")
    return status


def require_positive_id(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number
