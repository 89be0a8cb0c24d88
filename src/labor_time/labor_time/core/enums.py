from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Kind of clock event recorded by the punch terminal."""

    ENTRY = "entry"
    EXIT = "exit"


class AbsenceStatus(str, Enum):
    """Approval state of an absence request (only APPROVED affects accounting)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ResolutionStatus(str, Enum):
    """Outcome of resolving a schedule for (employee, date)."""

    RESOLVED = "RESOLVED"
    NO_ASSIGNMENT = "NO_ASSIGNMENT"
    NO_DETAIL = "NO_DETAIL"
    NON_LABORABLE = "NON_LABORABLE"
    MALFORMED_DETAIL = "MALFORMED_DETAIL"


class DayClassification(str, Enum):
    """Mutually exclusive per-day outcomes of the daily classifier."""

    HOLIDAY = "HOLIDAY"
    ABSENT = "ABSENT"
    NO_SCHEDULE = "NO_SCHEDULE"
    INCOMPLETE = "INCOMPLETE"
    PUNCTUAL = "PUNCTUAL"
    LATE_UNCOMPENSATED = "LATE_UNCOMPENSATED"
    LATE_COMPENSATED = "LATE_COMPENSATED"
    LATE_PARTIALLY_COMPENSATED = "LATE_PARTIALLY_COMPENSATED"

    @property
    def is_late(self) -> bool:
        return self in LATE_CLASSIFICATIONS

    @property
    def counts_for_totals(self) -> bool:
        return self not in EXCLUDED_CLASSIFICATIONS


LATE_CLASSIFICATIONS = frozenset(
    {
        DayClassification.LATE_UNCOMPENSATED,
        DayClassification.LATE_COMPENSATED,
        DayClassification.LATE_PARTIALLY_COMPENSATED,
    }
)

EXCLUDED_CLASSIFICATIONS = frozenset(
    {
        DayClassification.HOLIDAY,
        DayClassification.ABSENT,
        DayClassification.NO_SCHEDULE,
    }
)
