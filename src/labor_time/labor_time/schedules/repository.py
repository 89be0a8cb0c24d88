from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Schedule, ScheduleAssignment, ScheduleDayDetail


class ScheduleRepository(Protocol):
    def list_assignments(self, *, employee_id: int, start: date, end: date) -> Sequence[ScheduleAssignment]:
        """Assignments of the employee whose validity overlaps [start, end]."""

        raise NotImplementedError

    def get_schedule(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def get_day_detail(self, *, schedule_id: int, weekday: int) -> Optional[ScheduleDayDetail]:
        raise NotImplementedError
