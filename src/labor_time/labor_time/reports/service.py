from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_hhmm, month_bounds
from ..common.validators import require_month, require_positive_id
from ..core.constants import DEFAULT_TOP_LATECOMERS
from ..core.enums import PunchType
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..localtime.normalizer import TimeZoneNormalizer
from ..payroll.service import PeriodSummary, PeriodSummaryService
from ..punches.repository import PunchRepository
from ..punches.sessions import order_punches


@dataclass(frozen=True)
class Latecomer:
    employee_id: int
    full_name: str
    first_entry: Optional[time]
    raw_late_minutes: int

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "full_name": self.full_name,
            "first_entry": self.first_entry.strftime("%H:%M:%S") if self.first_entry else None,
            "late_minutes": self.raw_late_minutes,
        }


@dataclass(frozen=True)
class DashboardMetrics:
    work_date: date
    site_id: Optional[int]
    active_employees: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    without_exit: int = 0
    punch_count: int = 0
    top_latecomers: tuple[Latecomer, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "site_id": self.site_id,
            "active_employees": self.active_employees,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "without_exit": self.without_exit,
            "punch_count": self.punch_count,
            "top_latecomers": [x.to_dict() for x in self.top_latecomers],
        }


@dataclass(frozen=True)
class MonthlySummary:
    employee: Employee
    year: int
    month: int
    summary: PeriodSummary

    @property
    def period_label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def total_absences(self) -> int:
        """Approved absence records overlapping the month plus inferred (unexcused) days."""
        return len(self.summary.approved_absences) + len(self.summary.inferred_absences)

    @property
    def overtime(self) -> str:
        return format_hhmm(self.summary.net_overtime_minutes)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee.employee_id,
            "full_name": self.employee.full_name,
            "period": self.period_label,
            "total_absences": self.total_absences,
            "inferred_absences": len(self.summary.inferred_absences),
            "tardiness_count": self.summary.late_days,
            "compensated_tardiness_count": self.summary.compensated_days,
            "uncompensated_late_minutes": self.summary.net_late_minutes,
            "early_departures": self.summary.early_departure_count,
            "overtime": self.overtime,
            "summary": self.summary.to_dict(include_days=False),
        }


class DashboardService:
    def __init__(
        self,
        employees: EmployeeRepository,
        punches: PunchRepository,
        attendance: AttendanceService,
        *,
        normalizer: TimeZoneNormalizer,
        top_latecomers: int = DEFAULT_TOP_LATECOMERS,
    ):
        self._employees = employees
        self._punches = punches
        self._attendance = attendance
        self._normalizer = normalizer
        self._top = max(int(top_latecomers), 0)

    def metrics(self, *, work_date: Optional[date] = None, site_id: Optional[int] = None) -> DashboardMetrics:
        work_date = work_date or self._normalizer.today()
        employees = list(self._employees.list_active(site_id=site_id))
        if not employees:
            return DashboardMetrics(work_date=work_date, site_id=site_id)

        utc_start, utc_end = self._normalizer.local_day_bounds(work_date)
        punches = order_punches(
            self._punches.list_punches_for_employees(
                employee_ids=[e.employee_id for e in employees],
                utc_start=utc_start,
                utc_end=utc_end,
            )
        )
        last_type: dict[int, PunchType] = {}
        with_entry: set[int] = set()
        for p in punches:
            last_type[p.employee_id] = p.punch_type
            if p.punch_type == PunchType.ENTRY:
                with_entry.add(p.employee_id)

        late: list[Latecomer] = []
        for employee in employees:
            if employee.employee_id not in with_entry:
                continue
            outcome = self._attendance.analyze_day(employee_id=employee.employee_id, work_date=work_date)
            if outcome.late_entry:
                late.append(
                    Latecomer(
                        employee_id=employee.employee_id,
                        full_name=employee.full_name,
                        first_entry=outcome.first_entry_local,
                        raw_late_minutes=outcome.raw_late_minutes,
                    )
                )
        late.sort(key=lambda x: (-x.raw_late_minutes, x.full_name))

        present = len([e for e in employees if e.employee_id in with_entry])
        return DashboardMetrics(
            work_date=work_date,
            site_id=site_id,
            active_employees=len(employees),
            present=present,
            absent=len(employees) - present,
            late=len(late),
            without_exit=sum(1 for t in last_type.values() if t == PunchType.ENTRY),
            punch_count=len(punches),
            top_latecomers=tuple(late[: self._top]),
        )


class MonthlySummaryService:
    def __init__(self, employees: EmployeeRepository, periods: PeriodSummaryService):
        self._employees = employees
        self._periods = periods

    def summarize(self, *, employee_id: int, year: int, month: int) -> MonthlySummary:
        employee_id = require_positive_id(employee_id, "employee_id")
        year, month = require_month(year, month)
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")

        start, end = month_bounds(year, month)
        summary = self._periods.summarize(employee_id=employee_id, start=start, end=end)
        return MonthlySummary(employee=employee, year=year, month=month, summary=summary)
