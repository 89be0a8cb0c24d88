from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ...common.datetime_utils import minutes_to_hours
from ...punches.model import WorkSession


@dataclass(frozen=True)
class OvertimeSplit:
    """Overtime and premium minutes of one day."""

    total_overtime_minutes: int = 0
    diurnal_overtime_minutes: int = 0
    nocturnal_overtime_minutes: int = 0
    ordinary_nocturnal_premium_minutes: int = 0

    @property
    def diurnal_overtime_hours(self) -> float:
        return minutes_to_hours(self.diurnal_overtime_minutes)

    @property
    def nocturnal_overtime_hours(self) -> float:
        return minutes_to_hours(self.nocturnal_overtime_minutes)

    @property
    def ordinary_nocturnal_premium_hours(self) -> float:
        return minutes_to_hours(self.ordinary_nocturnal_premium_minutes)


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, sessions: Sequence[WorkSession], break_minutes: int) -> int:
        raise NotImplementedError


class OvertimeCalculator(ABC):
    """Splits overtime and premium time around the night band.

    Arguments are minutes on the work date's wall-clock axis (minutes since
    local midnight; >= 1440 means the next calendar day). `overnight` tells
    whether the scheduled exit itself falls on the next day.
    """

    @abstractmethod
    def split(self, *, expected_exit: int, first_entry: int, last_exit: int, overnight: bool = False) -> OvertimeSplit:
        raise NotImplementedError
