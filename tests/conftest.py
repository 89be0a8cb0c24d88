from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Iterable, Optional

import pytest

from src.labor_time.labor_time.absences.model import Absence, Holiday
from src.labor_time.labor_time.container import build_services
from src.labor_time.labor_time.core.enums import PunchType
from src.labor_time.labor_time.employees.model import Employee
from src.labor_time.labor_time.localtime.normalizer import TimeZoneNormalizer, as_utc
from src.labor_time.labor_time.punches.model import PunchEvent
from src.labor_time.labor_time.schedules.model import Schedule, ScheduleAssignment, ScheduleDayDetail


@dataclass
class InMemorySchedules:
    assignments: list[ScheduleAssignment] = field(default_factory=list)
    schedules: dict[int, Schedule] = field(default_factory=dict)
    details: dict[tuple[int, int], ScheduleDayDetail] = field(default_factory=dict)
    assignment_calls: int = 0

    def list_assignments(self, *, employee_id: int, start: date, end: date):
        self.assignment_calls += 1
        return [
            a
            for a in self.assignments
            if a.employee_id == employee_id and a.valid_from <= end and (a.valid_to is None or a.valid_to >= start)
        ]

    def get_schedule(self, schedule_id: int) -> Optional[Schedule]:
        return self.schedules.get(schedule_id)

    def get_day_detail(self, *, schedule_id: int, weekday: int) -> Optional[ScheduleDayDetail]:
        return self.details.get((schedule_id, weekday))


@dataclass
class InMemoryPunches:
    punches: list[PunchEvent] = field(default_factory=list)
    calls: int = 0

    def list_punches(self, *, employee_id: int, utc_start: datetime, utc_end: datetime):
        self.calls += 1
        return [
            p
            for p in self.punches
            if p.employee_id == employee_id and utc_start <= as_utc(p.utc_instant) < utc_end
        ]

    def list_punches_for_employees(self, *, employee_ids, utc_start: datetime, utc_end: datetime):
        ids = set(employee_ids)
        return [p for p in self.punches if p.employee_id in ids and utc_start <= as_utc(p.utc_instant) < utc_end]


@dataclass
class InMemoryAbsences:
    absences: list[Absence] = field(default_factory=list)

    def list_approved(self, *, employee_id: int, start: date, end: date):
        return [
            a
            for a in self.absences
            if a.employee_id == employee_id and a.approved and a.date_from <= end and a.date_to >= start
        ]


@dataclass
class InMemoryHolidays:
    holidays: list[Holiday] = field(default_factory=list)

    def list_range(self, *, start: date, end: date):
        return [h for h in self.holidays if start <= h.holiday_date <= end]


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee] = field(default_factory=dict)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def list_active(self, *, site_id: Optional[int] = None):
        return [
            e
            for e in self.employees.values()
            if e.is_active and (site_id is None or e.site_id == site_id)
        ]


class World:
    """Seeds the in-memory repositories with business-calendar values."""

    def __init__(self, normalizer: TimeZoneNormalizer):
        self.normalizer = normalizer
        self.schedules = InMemorySchedules()
        self.punches = InMemoryPunches()
        self.absences = InMemoryAbsences()
        self.holidays = InMemoryHolidays()
        self.employees = InMemoryEmployees()

    def add_employee(self, employee_id: int, full_name: str, *, site_id: Optional[int] = None) -> Employee:
        employee = Employee(employee_id=employee_id, full_name=full_name, site_id=site_id)
        self.employees.employees[employee_id] = employee
        return employee

    def add_schedule(
        self,
        schedule_id: int,
        *,
        entry: time,
        exit: time,
        tolerance: int = 0,
        break_minutes: int = 0,
        compensation: bool = True,
        weekdays: Iterable[int] = range(1, 8),
    ) -> Schedule:
        schedule = Schedule(schedule_id=schedule_id, name=f"S{schedule_id}", compensation_allowed=compensation)
        self.schedules.schedules[schedule_id] = schedule
        for weekday in weekdays:
            self.schedules.details[(schedule_id, weekday)] = ScheduleDayDetail(
                schedule_id=schedule_id,
                weekday=weekday,
                laborable=True,
                entry_time=entry,
                exit_time=exit,
                tolerance_minutes=tolerance,
                break_minutes=break_minutes,
            )
        return schedule

    def assign(self, employee_id: int, schedule_id: int, valid_from: date, valid_to: Optional[date] = None) -> None:
        self.schedules.assignments.append(
            ScheduleAssignment(
                employee_id=employee_id,
                schedule_id=schedule_id,
                valid_from=valid_from,
                valid_to=valid_to,
                assignment_id=len(self.schedules.assignments) + 1,
            )
        )

    def punch(self, employee_id: int, punch_type: PunchType, work_date: date, hh: int, mm: int, ss: int = 0) -> None:
        instant = self.normalizer.local_instant(work_date, time(hh, mm, ss))
        self.punches.punches.append(
            PunchEvent(
                employee_id=employee_id,
                punch_type=punch_type,
                utc_instant=instant,
                punch_id=len(self.punches.punches) + 1,
            )
        )

    def day(self, employee_id: int, work_date: date, entry: tuple[int, int], exit: tuple[int, int]) -> None:
        self.punch(employee_id, PunchType.ENTRY, work_date, *entry)
        self.punch(employee_id, PunchType.EXIT, work_date, *exit)

    def services(self, **kwargs):
        return build_services(
            schedules=self.schedules,
            punches=self.punches,
            absences=self.absences,
            holidays=self.holidays,
            employees=self.employees,
            normalizer=self.normalizer,
            **kwargs,
        )


@pytest.fixture
def normalizer() -> TimeZoneNormalizer:
    return TimeZoneNormalizer()


@pytest.fixture
def world(normalizer) -> World:
    return World(normalizer)
