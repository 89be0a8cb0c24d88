from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import PunchEvent


class PunchRepository(Protocol):
    def list_punches(self, *, employee_id: int, utc_start: datetime, utc_end: datetime) -> Sequence[PunchEvent]:
        """Punches with utc_start <= instant < utc_end, ascending by instant."""

        raise NotImplementedError

    def list_punches_for_employees(
        self, *, employee_ids: Sequence[int], utc_start: datetime, utc_end: datetime
    ) -> Sequence[PunchEvent]:
        raise NotImplementedError
