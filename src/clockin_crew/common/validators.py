from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError("Start date must be on or before end date")
    return start, end
