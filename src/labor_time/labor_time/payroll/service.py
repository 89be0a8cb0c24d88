from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..absences.model import Absence
from ..attendance.model import DayOutcome, TardinessRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_hhmm, minutes_to_hours
from ..core.enums import DayClassification
from ..core.logging_config import get_logger

logger = get_logger("payroll.service")


@dataclass(frozen=True)
class DataWarning:
    work_date: date
    message: str

    def to_dict(self) -> dict:
        return {"date": self.work_date.isoformat(), "message": self.message}


@dataclass(frozen=True)
class PeriodSummary:
    employee_id: int
    start: date
    end: date
    days: tuple[DayOutcome, ...] = field(default_factory=tuple)
    tardiness: tuple[TardinessRecord, ...] = field(default_factory=tuple)
    approved_absences: tuple[Absence, ...] = field(default_factory=tuple)
    inferred_absences: tuple[date, ...] = field(default_factory=tuple)
    diurnal_overtime_minutes: int = 0
    nocturnal_overtime_minutes: int = 0
    ordinary_nocturnal_premium_minutes: int = 0
    net_overtime_minutes: int = 0
    net_late_minutes: int = 0
    early_departure_count: int = 0
    early_departure_minutes: int = 0
    net_worked_minutes: int = 0
    worked_days: int = 0
    punctual_days: int = 0
    late_days: int = 0
    compensated_days: int = 0
    partially_compensated_days: int = 0
    incomplete_days: int = 0
    irregular_punches: int = 0
    data_warnings: tuple[DataWarning, ...] = field(default_factory=tuple)

    @property
    def diurnal_overtime_hours(self) -> float:
        return minutes_to_hours(self.diurnal_overtime_minutes)

    @property
    def nocturnal_overtime_hours(self) -> float:
        return minutes_to_hours(self.nocturnal_overtime_minutes)

    @property
    def ordinary_nocturnal_premium_hours(self) -> float:
        return minutes_to_hours(self.ordinary_nocturnal_premium_minutes)

    @property
    def net_worked_hours(self) -> float:
        return minutes_to_hours(self.net_worked_minutes)

    def to_dict(self, *, include_days: bool = True) -> dict:
        data = {
            "employee_id": self.employee_id,
            "from": self.start.isoformat(),
            "to": self.end.isoformat(),
            "tardiness": [t.to_dict() for t in self.tardiness],
            "approved_absences": [a.to_dict() for a in self.approved_absences],
            "inferred_absences": [d.isoformat() for d in self.inferred_absences],
            "diurnal_overtime_hours": self.diurnal_overtime_hours,
            "nocturnal_overtime_hours": self.nocturnal_overtime_hours,
            "ordinary_nocturnal_premium_hours": self.ordinary_nocturnal_premium_hours,
            "net_overtime": format_hhmm(self.net_overtime_minutes),
            "net_overtime_minutes": self.net_overtime_minutes,
            "net_late_minutes": self.net_late_minutes,
            "early_departure_count": self.early_departure_count,
            "early_departure_minutes": self.early_departure_minutes,
            "net_worked_minutes": self.net_worked_minutes,
            "net_worked_hours": self.net_worked_hours,
            "worked_days": self.worked_days,
            "punctual_days": self.punctual_days,
            "late_days": self.late_days,
            "compensated_days": self.compensated_days,
            "partially_compensated_days": self.partially_compensated_days,
            "incomplete_days": self.incomplete_days,
            "irregular_punches": self.irregular_punches,
            "data_warnings": [w.to_dict() for w in self.data_warnings],
        }
        if include_days:
            data["days"] = [d.to_dict() for d in self.days]
        return data


def is_inferred_absence(outcome: DayOutcome, *, infer_on_laborable_holiday: bool = False) -> bool:
    """Expected to work, not excused, and not a single punch."""
    if outcome.classification != DayClassification.INCOMPLETE or outcome.punch_count:
        return False
    if outcome.laborable_holiday and not infer_on_laborable_holiday:
        return False
    return True


class PeriodSummaryService:
    """Aggregates classified days of one employee over an inclusive range."""

    def __init__(self, attendance: AttendanceService, *, infer_absence_on_laborable_holiday: bool = False):
        self._attendance = attendance
        self._infer_on_laborable_holiday = bool(infer_absence_on_laborable_holiday)

    def summarize(self, *, employee_id: int, start: date, end: date) -> PeriodSummary:
        inputs = self._attendance.load_period(employee_id=employee_id, start=start, end=end)
        days = tuple(self._attendance.classify_period(inputs))
        summary = self.aggregate(employee_id=employee_id, start=start, end=end, days=days, absences=inputs.absences)

        logger.info(
            "period summarized",
            extra={
                "employee_id": employee_id,
                "start": start,
                "end": end,
                "late_days": summary.late_days,
                "inferred_absences": len(summary.inferred_absences),
                "data_warnings": len(summary.data_warnings),
            },
        )
        return summary

    def aggregate(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        days: Iterable[DayOutcome],
        absences: Iterable[Absence] = (),
    ) -> PeriodSummary:
        days = tuple(sorted(days, key=lambda d: d.work_date))
        totals = dict.fromkeys(
            (
                "diurnal_overtime_minutes",
                "nocturnal_overtime_minutes",
                "ordinary_nocturnal_premium_minutes",
                "net_overtime_minutes",
                "net_late_minutes",
                "early_departure_count",
                "early_departure_minutes",
                "net_worked_minutes",
                "worked_days",
                "punctual_days",
                "late_days",
                "compensated_days",
                "partially_compensated_days",
                "incomplete_days",
                "irregular_punches",
            ),
            0,
        )
        tardiness: list[TardinessRecord] = []
        inferred: list[date] = []
        warnings: list[DataWarning] = []

        for day in days:
            if day.data_warning:
                warnings.append(DataWarning(work_date=day.work_date, message=day.data_warning))
            if not day.counts_for_totals:
                continue

            if is_inferred_absence(day, infer_on_laborable_holiday=self._infer_on_laborable_holiday):
                inferred.append(day.work_date)

            totals["diurnal_overtime_minutes"] += day.diurnal_overtime_minutes
            totals["nocturnal_overtime_minutes"] += day.nocturnal_overtime_minutes
            totals["ordinary_nocturnal_premium_minutes"] += day.ordinary_nocturnal_premium_minutes
            totals["net_overtime_minutes"] += day.net_overtime_minutes
            totals["net_late_minutes"] += day.net_late_minutes
            totals["net_worked_minutes"] += day.net_worked_minutes
            totals["irregular_punches"] += day.irregularities
            if day.early_departure_minutes > 0:
                totals["early_departure_count"] += 1
                totals["early_departure_minutes"] += day.early_departure_minutes
            if day.sessions:
                totals["worked_days"] += 1

            if day.classification == DayClassification.INCOMPLETE:
                totals["incomplete_days"] += 1
            elif day.classification == DayClassification.PUNCTUAL:
                totals["punctual_days"] += 1
            else:
                totals["late_days"] += 1
                tardiness.append(TardinessRecord.from_outcome(day))
                if day.classification == DayClassification.LATE_COMPENSATED:
                    totals["compensated_days"] += 1
                elif day.classification == DayClassification.LATE_PARTIALLY_COMPENSATED:
                    totals["partially_compensated_days"] += 1

        approved = tuple(
            sorted(
                (a for a in absences if a.approved and a.date_from <= end and a.date_to >= start),
                key=lambda a: (a.date_from, a.absence_id or 0),
            )
        )
        return PeriodSummary(
            employee_id=employee_id,
            start=start,
            end=end,
            days=days,
            tardiness=tuple(tardiness),
            approved_absences=approved,
            inferred_absences=tuple(inferred),
            data_warnings=tuple(warnings),
            **totals,
        )
