from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import iter_days
from ..common.validators import require_date_range
from ..core.constants import DEFAULT_COMPENSATION_ALLOWED
from ..core.enums import ResolutionStatus
from ..core.logging_config import get_logger
from .model import ResolvedDay, Schedule, ScheduleAssignment, ScheduleDayDetail, ScheduleResolution
from .repository import ScheduleRepository

logger = get_logger("schedules.resolver")


def pick_assignment(assignments: Sequence[ScheduleAssignment], work_date: date) -> Optional[ScheduleAssignment]:
    """Effective assignment on a date.

    At most one should match; when several do, the most recently started one
    wins (ties: highest assignment id).
    """
    matching = [a for a in assignments if a.covers(work_date)]
    if not matching:
        return None
    if len(matching) > 1:
        logger.warning(
            "overlapping schedule assignments",
            extra={
                "employee_id": matching[0].employee_id,
                "work_date": work_date,
                "schedule_ids": [a.schedule_id for a in matching],
            },
        )
    return max(matching, key=lambda a: (a.valid_from, a.assignment_id or 0))


class ScheduleResolver:
    """Resolves which day-detail applies to (employee, date)."""

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def resolve(self, *, employee_id: int, work_date: date) -> ScheduleResolution:
        assignments = self._schedules.list_assignments(employee_id=employee_id, start=work_date, end=work_date)
        return self._resolve_with(assignments, work_date, _DetailCache(self._schedules))

    def resolve_range(self, *, employee_id: int, start: date, end: date) -> dict[date, ScheduleResolution]:
        require_date_range(start, end)
        assignments = self._schedules.list_assignments(employee_id=employee_id, start=start, end=end)
        cache = _DetailCache(self._schedules)
        return {d: self._resolve_with(assignments, d, cache) for d in iter_days(start, end)}

    def _resolve_with(
        self,
        assignments: Sequence[ScheduleAssignment],
        work_date: date,
        cache: "_DetailCache",
    ) -> ScheduleResolution:
        assignment = pick_assignment(assignments, work_date)
        if assignment is None:
            return ScheduleResolution(work_date=work_date, status=ResolutionStatus.NO_ASSIGNMENT)

        schedule_id = assignment.schedule_id
        detail = cache.detail(schedule_id, work_date.isoweekday())
        if detail is None:
            return ScheduleResolution(work_date=work_date, status=ResolutionStatus.NO_DETAIL, schedule_id=schedule_id)
        if not detail.laborable:
            return ScheduleResolution(
                work_date=work_date, status=ResolutionStatus.NON_LABORABLE, schedule_id=schedule_id
            )
        if detail.entry_time is None or detail.exit_time is None:
            logger.warning(
                "laborable schedule day lacks entry/exit time",
                extra={"schedule_id": schedule_id, "weekday": detail.weekday, "work_date": work_date},
            )
            return ScheduleResolution(
                work_date=work_date, status=ResolutionStatus.MALFORMED_DETAIL, schedule_id=schedule_id
            )

        compensation = detail.compensation_allowed
        if compensation is None:
            schedule = cache.schedule(schedule_id)
            compensation = schedule.compensation_allowed if schedule else DEFAULT_COMPENSATION_ALLOWED

        day = ResolvedDay(
            work_date=work_date,
            schedule_id=schedule_id,
            entry_time=detail.entry_time,
            exit_time=detail.exit_time,
            tolerance_minutes=max(int(detail.tolerance_minutes or 0), 0),
            rounding_minutes=max(int(detail.rounding_minutes or 0), 0),
            break_minutes=max(int(detail.break_minutes or 0), 0),
            compensation_allowed=bool(compensation),
        )
        return ScheduleResolution(work_date=work_date, status=ResolutionStatus.RESOLVED, day=day, schedule_id=schedule_id)


class _DetailCache:
    """Per-call memo of detail/schedule lookups (never shared across calls)."""

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules
        self._details: dict[tuple[int, int], Optional[ScheduleDayDetail]] = {}
        self._schedule_rows: dict[int, Optional[Schedule]] = {}

    def detail(self, schedule_id: int, weekday: int) -> Optional[ScheduleDayDetail]:
        key = (schedule_id, weekday)
        if key not in self._details:
            self._details[key] = self._schedules.get_day_detail(schedule_id=schedule_id, weekday=weekday)
        return self._details[key]

    def schedule(self, schedule_id: int) -> Optional[Schedule]:
        if schedule_id not in self._schedule_rows:
            self._schedule_rows[schedule_id] = self._schedules.get_schedule(schedule_id)
        return self._schedule_rows[schedule_id]
