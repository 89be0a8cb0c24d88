from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import OVERNIGHT_SPILL_MINUTES
from ..localtime.normalizer import TimeZoneNormalizer
from ..schedules.model import ResolvedDay, ScheduleResolution


def expected_bounds(normalizer: TimeZoneNormalizer, day: ResolvedDay) -> tuple[datetime, datetime]:
    """UTC instants of the expected entry and exit (exit may be next day)."""
    entry_at = normalizer.local_instant(day.work_date, day.entry_time)
    exit_date = day.work_date + timedelta(days=1) if day.overnight else day.work_date
    exit_at = normalizer.local_instant(exit_date, day.exit_time)
    return entry_at, exit_at


def overnight_cutoff(
    normalizer: TimeZoneNormalizer,
    day: ResolvedDay,
    following: Optional[ScheduleResolution] = None,
) -> datetime:
    """End of an overnight day's punches: expected exit plus the spill margin.

    When the following day expects an entry inside that margin, the cutoff
    moves back to halfway between the two so the entry stays with its day.
    """
    _, exit_at = expected_bounds(normalizer, day)
    cutoff = exit_at + timedelta(minutes=OVERNIGHT_SPILL_MINUTES)
    if following is not None and following.resolved:
        next_entry_at, _ = expected_bounds(normalizer, following.day)
        if exit_at < next_entry_at < cutoff:
            cutoff = exit_at + (next_entry_at - exit_at) / 2
    return cutoff


def punch_window(
    normalizer: TimeZoneNormalizer,
    resolution: ScheduleResolution,
    previous: Optional[ScheduleResolution] = None,
    following: Optional[ScheduleResolution] = None,
) -> tuple[datetime, datetime]:
    """[utc_start, utc_end) of the punches that belong to a work date.

    A plain day is its local calendar day. An overnight shift keeps the
    following morning up to its cutoff, and the following day's window
    starts there.
    """
    start, end = normalizer.local_day_bounds(resolution.work_date)
    if previous is not None and previous.resolved and previous.day.overnight:
        start = max(start, overnight_cutoff(normalizer, previous.day, resolution))
    if resolution.resolved and resolution.day.overnight:
        end = max(end, overnight_cutoff(normalizer, resolution.day, following))
    if start > end:
        start = end
    return start, end
