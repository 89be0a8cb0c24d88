from __future__ import annotations

from ...core.enums import DayClassification
from .base import LatenessDecision, LatenessFacts, LatenessStrategy


class PunctualStrategy(LatenessStrategy):
    """Entry within tolerance."""

    def decide(self, facts: LatenessFacts) -> LatenessDecision:
        return LatenessDecision(
            classification=DayClassification.PUNCTUAL,
            net_late_minutes=0,
            net_overtime_minutes=facts.overtime_minutes,
            note="On time",
        )
