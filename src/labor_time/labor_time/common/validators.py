from __future__ import annotations

from datetime import date

from ..core.exceptions import InvalidDateRangeError, ValidationError


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start is None or end is None:
        raise InvalidDateRangeError("Both start and end dates are required")
    if start > end:
        raise InvalidDateRangeError(f"Invalid date range: {start.isoformat()} is after {end.isoformat()}")
    return start, end


def require_positive_id(value: int, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid id") from None
    if parsed <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return parsed


def require_month(year: int, month: int) -> tuple[int, int]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1 <= int(year) <= 9999:
        raise ValidationError("year is out of range")
    return int(year), int(month)
