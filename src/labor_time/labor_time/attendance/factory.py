from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import LatenessStrategy
from .strategies.compensation_strategy import CompensationStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.punctual_strategy import PunctualStrategy


@dataclass
class LatenessStrategyFactory:
    """Factory Pattern: choose the lateness strategy for a complete day."""

    def for_day(self, *, is_late: bool, compensation_allowed: bool) -> LatenessStrategy:
        if not is_late:
            return PunctualStrategy()
        if compensation_allowed:
            return CompensationStrategy()
        return LateStrategy()
