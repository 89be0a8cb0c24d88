from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

WEEKDAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date in the inclusive range [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def span_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (seconds truncated, never negative)."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)


def minutes_to_hours(minutes: int) -> float:
    return round(minutes / 60, 2)


def format_hhmm(minutes: int) -> str:
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)
