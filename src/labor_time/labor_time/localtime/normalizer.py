"""Conversion between stored UTC instants and the business calendar.

The whole system runs on one civil zone. The normalizer is built once at
process start and shared by every caller (ingestion, reports, dashboard) so
the named-zone/fixed-offset fallback can never differ between paths.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE, DEFAULT_TIMEZONE_FALLBACK_OFFSET
from ..core.logging_config import get_logger

logger = get_logger("localtime.normalizer")

_OFFSET_RE = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{1,2}):?(?P<minutes>\d{2})?$")


def parse_utc_offset(value: str) -> timezone:
    """Parse '+HH:MM' / '-HH' style offsets into a fixed timezone."""
    m = _OFFSET_RE.match((value or "").strip())
    if not m:
        raise ValueError(f"Invalid UTC offset: {value!r}")
    delta = timedelta(hours=int(m.group("hours")), minutes=int(m.group("minutes") or 0))
    if m.group("sign") == "-":
        delta = -delta
    return timezone(delta)


def _load_zone(zone_name: str, fallback_offset: str) -> tzinfo:
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "time zone not found, using fixed offset",
            extra={"zone": zone_name, "fallback_offset": fallback_offset},
        )
        return parse_utc_offset(fallback_offset)


def as_utc(instant: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


@dataclass(frozen=True)
class TimeZoneNormalizer:
    zone_name: str = DEFAULT_TIMEZONE
    fallback_offset: str = DEFAULT_TIMEZONE_FALLBACK_OFFSET
    zone: tzinfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "zone", _load_zone(self.zone_name, self.fallback_offset))

    def local_instant(self, work_date: date, time_of_day: time) -> datetime:
        """UTC instant of a wall-clock time on a local business date."""
        local = datetime.combine(work_date, time_of_day, tzinfo=self.zone)
        return local.astimezone(timezone.utc)

    def local_day_bounds(self, work_date: date) -> tuple[datetime, datetime]:
        """[utc_start, utc_end_exclusive) of a local business day."""
        start = self.local_instant(work_date, time.min)
        end = self.local_instant(work_date + timedelta(days=1), time.min)
        return start, end

    def to_local_datetime(self, instant: datetime) -> datetime:
        return as_utc(instant).astimezone(self.zone)

    def to_local(self, instant: datetime) -> tuple[date, time]:
        local = self.to_local_datetime(instant)
        return local.date(), local.time().replace(tzinfo=None)

    def local_date(self, instant: datetime) -> date:
        return self.to_local_datetime(instant).date()

    def wall_minutes(self, anchor_date: date, instant: datetime) -> int:
        """Wall-clock minutes since local midnight of anchor_date.

        Instants on the following local day give values >= 1440.
        """
        local = self.to_local_datetime(instant).replace(tzinfo=None)
        delta = local - datetime.combine(anchor_date, time.min)
        return int(delta.total_seconds() // 60)

    def today(self, now: Optional[datetime] = None) -> date:
        now = now or datetime.now(timezone.utc)
        return self.local_date(now)


def build_normalizer(settings: Any) -> TimeZoneNormalizer:
    """Create the process-wide normalizer from a settings module/object."""
    return TimeZoneNormalizer(
        zone_name=str(getattr(settings, "APP_TIMEZONE", DEFAULT_TIMEZONE)),
        fallback_offset=str(getattr(settings, "APP_TIMEZONE_FALLBACK_OFFSET", DEFAULT_TIMEZONE_FALLBACK_OFFSET)),
    )
