from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import DayClassification


@dataclass(frozen=True)
class LatenessFacts:
    """Measured figures of a complete day, in whole minutes."""

    raw_late_minutes: int
    overtime_minutes: int
    worked_minutes: int
    expected_minutes: int


@dataclass(frozen=True)
class LatenessDecision:
    classification: DayClassification
    net_late_minutes: int = 0
    net_overtime_minutes: int = 0
    note: str = ""


class LatenessStrategy(ABC):
    """Strategy Pattern: encapsulate how a complete day's lateness is settled."""

    @abstractmethod
    def decide(self, facts: LatenessFacts) -> LatenessDecision:
        raise NotImplementedError
