from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Sequence

from ..absences.model import Absence, Holiday, approved_absence_for
from ..absences.repository import AbsenceRepository, HolidayRepository
from ..common.validators import require_date_range
from ..core.logging_config import get_logger
from ..localtime.normalizer import TimeZoneNormalizer, as_utc
from ..punches.repository import PunchRepository
from ..punches.sessions import order_punches
from ..schedules.repository import ScheduleRepository
from ..schedules.resolver import ScheduleResolver
from .classifier import DailyClassifier, DayContext
from .model import DayOutcome
from .window import punch_window

logger = get_logger("attendance.service")


@dataclass(frozen=True)
class PeriodInputs:
    """Everything fetched up front for one employee and date range."""

    employee_id: int
    start: date
    end: date
    contexts: tuple[DayContext, ...]
    absences: tuple[Absence, ...]


class AttendanceService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        punches: PunchRepository,
        absences: AbsenceRepository,
        holidays: HolidayRepository,
        *,
        normalizer: TimeZoneNormalizer,
        resolver: Optional[ScheduleResolver] = None,
        classifier: Optional[DailyClassifier] = None,
    ):
        self._punches = punches
        self._absences = absences
        self._holidays = holidays
        self._normalizer = normalizer
        self._resolver = resolver or ScheduleResolver(schedules)
        self._classifier = classifier or DailyClassifier(normalizer)

    def load_period(self, *, employee_id: int, start: date, end: date) -> PeriodInputs:
        require_date_range(start, end)

        # The day before `start` decides whether an overnight shift eats the
        # morning of `start`; the day after `end` may cut the last one short.
        resolutions = self._resolver.resolve_range(
            employee_id=employee_id, start=start - timedelta(days=1), end=end + timedelta(days=1)
        )
        holidays = _holidays_by_date(self._holidays.list_range(start=start, end=end))
        absences = tuple(a for a in self._absences.list_approved(employee_id=employee_id, start=start, end=end) if a.approved)

        windows: list[tuple[date, datetime, datetime]] = []
        previous = resolutions[start - timedelta(days=1)]
        for work_date, resolution in resolutions.items():
            if work_date < start or work_date > end:
                continue
            following = resolutions[work_date + timedelta(days=1)]
            utc_start, utc_end = punch_window(self._normalizer, resolution, previous, following)
            windows.append((work_date, utc_start, utc_end))
            previous = resolution

        punches = order_punches(
            self._punches.list_punches(
                employee_id=employee_id,
                utc_start=windows[0][1],
                utc_end=windows[-1][2],
            )
        )
        instants = [as_utc(p.utc_instant) for p in punches]

        contexts = []
        for work_date, utc_start, utc_end in windows:
            lo = bisect_left(instants, utc_start)
            hi = bisect_left(instants, utc_end)
            contexts.append(
                DayContext(
                    work_date=work_date,
                    resolution=resolutions[work_date],
                    punches=tuple(punches[lo:hi]),
                    holiday=holidays.get(work_date),
                    absence=approved_absence_for(absences, work_date),
                )
            )

        logger.debug(
            "period inputs loaded",
            extra={
                "employee_id": employee_id,
                "start": start,
                "end": end,
                "punch_count": len(punches),
                "absence_count": len(absences),
            },
        )
        return PeriodInputs(
            employee_id=employee_id,
            start=start,
            end=end,
            contexts=tuple(contexts),
            absences=absences,
        )

    def classify_period(self, inputs: PeriodInputs) -> Iterator[DayOutcome]:
        for ctx in inputs.contexts:
            yield self._classifier.classify(ctx)

    def iter_day_outcomes(self, *, employee_id: int, start: date, end: date) -> Iterator[DayOutcome]:
        """Lazily classify each day of [start, end].

        Inputs are fetched eagerly (so range errors surface here); abandoning
        the returned iterator stops the remaining classification.
        """
        inputs = self.load_period(employee_id=employee_id, start=start, end=end)
        return self.classify_period(inputs)

    def analyze_day(self, *, employee_id: int, work_date: date) -> DayOutcome:
        return next(self.iter_day_outcomes(employee_id=employee_id, start=work_date, end=work_date))


def _holidays_by_date(holidays: Sequence[Holiday]) -> dict[date, Holiday]:
    out: dict[date, Holiday] = {}
    for holiday in holidays:
        # A non-laborable entry wins over a laborable one on the same date.
        current = out.get(holiday.holiday_date)
        if current is None or (current.laborable and not holiday.laborable):
            out[holiday.holiday_date] = holiday
    return out
