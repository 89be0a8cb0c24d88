from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import span_minutes
from ..core.enums import PunchType


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one clock event, stored as a UTC instant."""

    employee_id: int
    punch_type: PunchType
    utc_instant: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    punch_id: Optional[int] = None


@dataclass(frozen=True)
class WorkSession:
    entry: datetime
    exit: datetime

    @property
    def minutes(self) -> int:
        return span_minutes(self.entry, self.exit)


@dataclass(frozen=True)
class SessionSummary:
    """Pairing result for one local work day."""

    sessions: tuple[WorkSession, ...] = field(default_factory=tuple)
    first_entry: Optional[datetime] = None
    last_exit: Optional[datetime] = None
    irregularities: int = 0
    punch_count: int = 0

    @property
    def complete(self) -> bool:
        return self.first_entry is not None and self.last_exit is not None

    @property
    def worked_minutes(self) -> int:
        return sum(s.minutes for s in self.sessions)
