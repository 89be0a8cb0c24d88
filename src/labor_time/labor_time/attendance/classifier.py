"""Daily classification of one employee day.

The classifier is a pure function of its DayContext: every input (schedule
resolution, punches, holiday, absence) is fetched by the caller beforehand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..absences.model import Absence, Holiday
from ..common.datetime_utils import minutes_of_day, span_minutes
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import DayClassification
from ..localtime.normalizer import TimeZoneNormalizer
from ..payroll.calculator.base import OvertimeCalculator, PayrollCalculator
from ..payroll.calculator.night_calculator import NightBandOvertimeCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..punches.model import PunchEvent
from ..punches.sessions import SessionBuilder
from ..schedules.model import ScheduleResolution
from .factory import LatenessStrategyFactory
from .model import DayOutcome
from .strategies.base import LatenessFacts
from .window import expected_bounds


@dataclass(frozen=True)
class DayContext:
    work_date: date
    resolution: ScheduleResolution
    punches: tuple[PunchEvent, ...] = field(default_factory=tuple)
    holiday: Optional[Holiday] = None
    absence: Optional[Absence] = None


class DailyClassifier:
    def __init__(
        self,
        normalizer: TimeZoneNormalizer,
        *,
        session_builder: Optional[SessionBuilder] = None,
        payroll_calculator: Optional[PayrollCalculator] = None,
        overtime_calculator: Optional[OvertimeCalculator] = None,
        strategy_factory: Optional[LatenessStrategyFactory] = None,
    ):
        self._normalizer = normalizer
        self._sessions = session_builder or SessionBuilder()
        self._payroll = payroll_calculator or StandardPayrollCalculator()
        self._overtime = overtime_calculator or NightBandOvertimeCalculator()
        self._strategies = strategy_factory or LatenessStrategyFactory()

    def classify(self, ctx: DayContext) -> DayOutcome:
        work_date = ctx.work_date

        if ctx.absence is not None:
            label = ctx.absence.kind or "absence"
            return DayOutcome(
                work_date=work_date,
                classification=DayClassification.ABSENT,
                note=f"Approved {label}",
            )

        holiday_note = ""
        if ctx.holiday is not None:
            if not ctx.holiday.laborable:
                return DayOutcome(
                    work_date=work_date,
                    classification=DayClassification.HOLIDAY,
                    holiday_name=ctx.holiday.name,
                    note=f"Holiday: {ctx.holiday.name}",
                )
            holiday_note = f"Laborable holiday: {ctx.holiday.name}"

        resolution = ctx.resolution
        if not resolution.resolved:
            return DayOutcome(
                work_date=work_date,
                classification=DayClassification.NO_SCHEDULE,
                holiday_name=ctx.holiday.name if ctx.holiday else None,
                laborable_holiday=ctx.holiday is not None,
                note=_join("No schedule", holiday_note),
                data_warning=resolution.data_warning,
            )

        day = resolution.day
        summary = self._sessions.build(ctx.punches)
        expected_entry_at, expected_exit_at = expected_bounds(self._normalizer, day)

        raw_late = span_minutes(expected_entry_at, summary.first_entry) if summary.first_entry else 0
        early = span_minutes(summary.last_exit, expected_exit_at) if summary.last_exit else 0
        net_worked = self._payroll.worked_minutes(summary.sessions, day.break_minutes)
        late_threshold = expected_entry_at + timedelta(minutes=day.tolerance_minutes)
        is_late = summary.first_entry is not None and summary.first_entry > late_threshold

        base = dict(
            work_date=work_date,
            expected_entry=day.entry_time,
            expected_exit=day.exit_time,
            overnight=day.overnight,
            sessions=summary.sessions,
            first_entry=summary.first_entry,
            last_exit=summary.last_exit,
            first_entry_local=self._local_time(summary.first_entry),
            last_exit_local=self._local_time(summary.last_exit),
            punch_count=summary.punch_count,
            irregularities=summary.irregularities,
            raw_late_minutes=raw_late,
            late_entry=is_late,
            early_departure_minutes=early,
            net_worked_minutes=net_worked,
            compensation_allowed=day.compensation_allowed,
            holiday_name=ctx.holiday.name if ctx.holiday else None,
            laborable_holiday=ctx.holiday is not None,
        )

        if not summary.complete:
            note = "No punches" if summary.punch_count == 0 else "Missing entry or exit"
            return DayOutcome(
                classification=DayClassification.INCOMPLETE,
                net_late_minutes=0,
                note=_join(note, holiday_note),
                **base,
            )

        first_axis = self._normalizer.wall_minutes(work_date, summary.first_entry)
        last_axis = self._normalizer.wall_minutes(work_date, summary.last_exit)
        exit_axis = minutes_of_day(day.exit_time) + (MINUTES_PER_DAY if day.overnight else 0)
        split = self._overtime.split(
            expected_exit=exit_axis, first_entry=first_axis, last_exit=last_axis, overnight=day.overnight
        )

        facts = LatenessFacts(
            raw_late_minutes=raw_late,
            overtime_minutes=split.total_overtime_minutes,
            worked_minutes=span_minutes(summary.first_entry, summary.last_exit),
            expected_minutes=span_minutes(expected_entry_at, expected_exit_at),
        )
        strategy = self._strategies.for_day(is_late=is_late, compensation_allowed=day.compensation_allowed)
        decision = strategy.decide(facts)

        irregular_note = f"{summary.irregularities} irregular punch(es)" if summary.irregularities else ""
        return DayOutcome(
            classification=decision.classification,
            net_late_minutes=decision.net_late_minutes,
            overtime_minutes=split.total_overtime_minutes,
            net_overtime_minutes=decision.net_overtime_minutes,
            diurnal_overtime_minutes=split.diurnal_overtime_minutes,
            nocturnal_overtime_minutes=split.nocturnal_overtime_minutes,
            ordinary_nocturnal_premium_minutes=split.ordinary_nocturnal_premium_minutes,
            note=_join(decision.note, irregular_note, holiday_note),
            **base,
        )

    def _local_time(self, instant: Optional[datetime]) -> Optional[time]:
        if instant is None:
            return None
        return self._normalizer.to_local(instant)[1]


def _join(*parts: str) -> str:
    return "; ".join(p for p in parts if p)
