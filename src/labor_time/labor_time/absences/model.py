from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import AbsenceStatus


@dataclass(frozen=True)
class Absence:
    """Domain entity: an absence request (vacation, sick leave, permit, ...)."""

    employee_id: int
    date_from: date
    date_to: date
    status: AbsenceStatus = AbsenceStatus.PENDING
    kind: str = ""
    note: Optional[str] = None
    absence_id: Optional[int] = None

    @property
    def approved(self) -> bool:
        return self.status == AbsenceStatus.APPROVED

    def covers(self, work_date: date) -> bool:
        return self.date_from <= work_date <= self.date_to

    def to_dict(self) -> dict:
        return {
            "absence_id": self.absence_id,
            "employee_id": self.employee_id,
            "kind": self.kind,
            "date_from": self.date_from.isoformat(),
            "date_to": self.date_to.isoformat(),
            "status": self.status.value,
            "note": self.note,
        }


@dataclass(frozen=True)
class Holiday:
    """Laborable holidays still require attendance; others suppress it."""

    holiday_date: date
    name: str
    laborable: bool = False


def approved_absence_for(absences: Iterable[Absence], work_date: date) -> Optional[Absence]:
    for absence in absences:
        if absence.approved and absence.covers(work_date):
            return absence
    return None
