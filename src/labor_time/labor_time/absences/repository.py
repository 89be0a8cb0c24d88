from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import Absence, Holiday


class AbsenceRepository(Protocol):
    def list_approved(self, *, employee_id: int, start: date, end: date) -> Sequence[Absence]:
        """Approved absences of the employee overlapping [start, end]."""

        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_range(self, *, start: date, end: date) -> Sequence[Holiday]:
        raise NotImplementedError
