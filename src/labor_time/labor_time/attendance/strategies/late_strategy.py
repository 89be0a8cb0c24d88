from __future__ import annotations

from ...core.enums import DayClassification
from .base import LatenessDecision, LatenessFacts, LatenessStrategy


class LateStrategy(LatenessStrategy):
    """Late entry on a schedule that does not allow compensation."""

    def decide(self, facts: LatenessFacts) -> LatenessDecision:
        return LatenessDecision(
            classification=DayClassification.LATE_UNCOMPENSATED,
            net_late_minutes=facts.raw_late_minutes,
            net_overtime_minutes=facts.overtime_minutes,
            note=f"Late by {facts.raw_late_minutes} min",
        )
