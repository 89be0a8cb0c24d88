from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.constants import DEFAULT_COMPENSATION_ALLOWED
from ..core.enums import ResolutionStatus


@dataclass(frozen=True)
class Schedule:
    """Domain entity: a named work schedule with its compensation default."""

    schedule_id: int
    name: str
    compensation_allowed: bool = DEFAULT_COMPENSATION_ALLOWED


@dataclass(frozen=True)
class ScheduleAssignment:
    employee_id: int
    schedule_id: int
    valid_from: date
    valid_to: Optional[date] = None
    assignment_id: Optional[int] = None

    def covers(self, work_date: date) -> bool:
        return self.valid_from <= work_date and (self.valid_to is None or work_date <= self.valid_to)


@dataclass(frozen=True)
class ScheduleDayDetail:
    """Per-weekday configuration of a schedule (weekday: 1=Mon..7=Sun)."""

    schedule_id: int
    weekday: int
    laborable: bool = True
    entry_time: Optional[time] = None
    exit_time: Optional[time] = None
    tolerance_minutes: int = 0
    rounding_minutes: int = 0
    break_minutes: int = 0
    compensation_allowed: Optional[bool] = None


@dataclass(frozen=True)
class ResolvedDay:
    """Schedule expectation for one employee on one date."""

    work_date: date
    schedule_id: int
    entry_time: time
    exit_time: time
    tolerance_minutes: int
    rounding_minutes: int
    break_minutes: int
    compensation_allowed: bool

    @property
    def overnight(self) -> bool:
        """Exit at or before entry on the wall clock means it falls on the next day."""
        return self.exit_time <= self.entry_time


@dataclass(frozen=True)
class ScheduleResolution:
    work_date: date
    status: ResolutionStatus
    day: Optional[ResolvedDay] = None
    schedule_id: Optional[int] = None

    @property
    def resolved(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED and self.day is not None

    @property
    def data_warning(self) -> Optional[str]:
        if self.status == ResolutionStatus.MALFORMED_DETAIL:
            return f"Schedule {self.schedule_id} is laborable on {self.work_date.isoformat()} but lacks entry/exit time"
        return None
