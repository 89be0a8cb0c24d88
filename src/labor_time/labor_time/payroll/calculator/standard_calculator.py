from __future__ import annotations

from typing import Sequence

from ...punches.model import WorkSession
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: sum(session spans) - break_minutes, not below 0.

    Days without a closed session count zero; the break is not charged.
    """

    def worked_minutes(self, sessions: Sequence[WorkSession], break_minutes: int) -> int:
        if not sessions:
            return 0
        minutes = sum(s.minutes for s in sessions)
        minutes -= int(break_minutes or 0)
        return max(minutes, 0)
