from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import WEEKDAY_NAMES, minutes_to_hours
from ..core.enums import DayClassification
from ..punches.model import WorkSession


def _iso(value: Optional[datetime | time]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class DayOutcome:
    """Derived (never persisted) classification of one employee day."""

    work_date: date
    classification: DayClassification
    expected_entry: Optional[time] = None
    expected_exit: Optional[time] = None
    overnight: bool = False
    sessions: tuple[WorkSession, ...] = field(default_factory=tuple)
    first_entry: Optional[datetime] = None
    last_exit: Optional[datetime] = None
    first_entry_local: Optional[time] = None
    last_exit_local: Optional[time] = None
    punch_count: int = 0
    irregularities: int = 0
    late_entry: bool = False
    raw_late_minutes: int = 0
    net_late_minutes: int = 0
    early_departure_minutes: int = 0
    overtime_minutes: int = 0
    net_overtime_minutes: int = 0
    diurnal_overtime_minutes: int = 0
    nocturnal_overtime_minutes: int = 0
    ordinary_nocturnal_premium_minutes: int = 0
    net_worked_minutes: int = 0
    compensation_allowed: bool = False
    holiday_name: Optional[str] = None
    laborable_holiday: bool = False
    note: str = ""
    data_warning: Optional[str] = None

    @property
    def counts_for_totals(self) -> bool:
        return self.classification.counts_for_totals

    @property
    def is_late(self) -> bool:
        return self.classification.is_late

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

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "weekday": WEEKDAY_NAMES[self.work_date.isoweekday()],
            "classification": self.classification.value,
            "expected_entry": _iso(self.expected_entry),
            "expected_exit": _iso(self.expected_exit),
            "overnight": self.overnight,
            "sessions": [{"entry": s.entry.isoformat(), "exit": s.exit.isoformat(), "minutes": s.minutes} for s in self.sessions],
            "first_entry": _iso(self.first_entry),
            "last_exit": _iso(self.last_exit),
            "first_entry_local": _iso(self.first_entry_local),
            "last_exit_local": _iso(self.last_exit_local),
            "punch_count": self.punch_count,
            "irregularities": self.irregularities,
            "late_entry": self.late_entry,
            "raw_late_minutes": self.raw_late_minutes,
            "net_late_minutes": self.net_late_minutes,
            "early_departure_minutes": self.early_departure_minutes,
            "overtime_minutes": self.overtime_minutes,
            "net_overtime_minutes": self.net_overtime_minutes,
            "diurnal_overtime_hours": self.diurnal_overtime_hours,
            "nocturnal_overtime_hours": self.nocturnal_overtime_hours,
            "ordinary_nocturnal_premium_hours": self.ordinary_nocturnal_premium_hours,
            "net_worked_hours": self.net_worked_hours,
            "compensation_allowed": self.compensation_allowed,
            "holiday": self.holiday_name,
            "note": self.note,
        }


@dataclass(frozen=True)
class TardinessRecord:
    """Read-model of one late day (expected vs actual entry)."""

    work_date: date
    expected_entry: time
    actual_entry: time
    raw_late_minutes: int
    net_late_minutes: int
    classification: DayClassification

    @property
    def compensated(self) -> bool:
        return self.classification == DayClassification.LATE_COMPENSATED

    @classmethod
    def from_outcome(cls, outcome: DayOutcome) -> "TardinessRecord":
        return cls(
            work_date=outcome.work_date,
            expected_entry=outcome.expected_entry,
            actual_entry=outcome.first_entry_local,
            raw_late_minutes=outcome.raw_late_minutes,
            net_late_minutes=outcome.net_late_minutes,
            classification=outcome.classification,
        )

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "weekday": WEEKDAY_NAMES[self.work_date.isoweekday()],
            "expected_entry": self.expected_entry.strftime("%H:%M"),
            "actual_entry": self.actual_entry.strftime("%H:%M:%S"),
            "raw_late_minutes": self.raw_late_minutes,
            "net_late_minutes": self.net_late_minutes,
            "classification": self.classification.value,
            "compensated": self.compensated,
        }
