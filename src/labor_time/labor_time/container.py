from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .absences.mysql_absence_repository import MySQLAbsenceRepository, MySQLHolidayRepository
from .attendance.classifier import DailyClassifier
from .attendance.factory import LatenessStrategyFactory
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOP_LATECOMERS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .localtime.normalizer import TimeZoneNormalizer, build_normalizer
from .payroll.calculator.night_calculator import NightBandOvertimeCalculator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PeriodSummaryService
from .punches.mysql_punch_repository import MySQLPunchRepository
from .reports.service import DashboardService, MonthlySummaryService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.resolver import ScheduleResolver


@dataclass(frozen=True)
class Container:
    normalizer: TimeZoneNormalizer

    attendance_service: AttendanceService
    period_summary_service: PeriodSummaryService
    dashboard_service: DashboardService
    monthly_summary_service: MonthlySummaryService


def build_services(
    *,
    schedules,
    punches,
    absences,
    holidays,
    employees,
    normalizer: TimeZoneNormalizer,
    top_latecomers: int = DEFAULT_TOP_LATECOMERS,
    infer_absence_on_laborable_holiday: bool = False,
) -> Container:
    """Wire services over any repository implementations."""
    classifier = DailyClassifier(
        normalizer,
        payroll_calculator=StandardPayrollCalculator(),
        overtime_calculator=NightBandOvertimeCalculator(),
        strategy_factory=LatenessStrategyFactory(),
    )
    attendance_service = AttendanceService(
        schedules,
        punches,
        absences,
        holidays,
        normalizer=normalizer,
        resolver=ScheduleResolver(schedules),
        classifier=classifier,
    )
    period_summary_service = PeriodSummaryService(
        attendance_service,
        infer_absence_on_laborable_holiday=infer_absence_on_laborable_holiday,
    )
    dashboard_service = DashboardService(
        employees,
        punches,
        attendance_service,
        normalizer=normalizer,
        top_latecomers=top_latecomers,
    )
    monthly_summary_service = MonthlySummaryService(employees, period_summary_service)

    return Container(
        normalizer=normalizer,
        attendance_service=attendance_service,
        period_summary_service=period_summary_service,
        dashboard_service=dashboard_service,
        monthly_summary_service=monthly_summary_service,
    )


def build_container(settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))

    return build_services(
        schedules=MySQLScheduleRepository(conn),
        punches=MySQLPunchRepository(conn),
        absences=MySQLAbsenceRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        normalizer=build_normalizer(settings),
        top_latecomers=int(getattr(settings, "TOP_LATECOMERS", DEFAULT_TOP_LATECOMERS)),
        infer_absence_on_laborable_holiday=bool(getattr(settings, "INFER_ABSENCE_ON_LABORABLE_HOLIDAY", False)),
    )
