from __future__ import annotations

from ...core.enums import DayClassification
from .base import LatenessDecision, LatenessFacts, LatenessStrategy


class CompensationStrategy(LatenessStrategy):
    """Late entry that may be offset by staying past the expected exit.

    Compensation only applies when the full expected span was worked; the
    overtime is then netted against the lateness.
    """

    def decide(self, facts: LatenessFacts) -> LatenessDecision:
        late = facts.raw_late_minutes
        overtime = facts.overtime_minutes

        if facts.worked_minutes < facts.expected_minutes:
            return LatenessDecision(
                classification=DayClassification.LATE_UNCOMPENSATED,
                net_late_minutes=late,
                net_overtime_minutes=overtime,
                note=f"Late by {late} min, expected hours not completed",
            )
        if overtime <= 0:
            return LatenessDecision(
                classification=DayClassification.LATE_UNCOMPENSATED,
                net_late_minutes=late,
                net_overtime_minutes=0,
                note=f"Late by {late} min, no overtime to offset",
            )

        if overtime >= late:
            return LatenessDecision(
                classification=DayClassification.LATE_COMPENSATED,
                net_late_minutes=0,
                net_overtime_minutes=overtime - late,
                note=f"Late by {late} min, compensated",
            )

        return LatenessDecision(
            classification=DayClassification.LATE_PARTIALLY_COMPENSATED,
            net_late_minutes=late - overtime,
            net_overtime_minutes=0,
            note=f"Late by {late} min, {overtime} min compensated",
        )
