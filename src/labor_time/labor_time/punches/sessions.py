from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..core.enums import PunchType
from ..core.logging_config import get_logger
from ..localtime.normalizer import as_utc
from .model import PunchEvent, SessionSummary, WorkSession

logger = get_logger("punches.sessions")


def order_punches(punches: Iterable[PunchEvent]) -> list[PunchEvent]:
    """Ascending by instant; equal instants keep their input order."""
    return sorted(punches, key=lambda p: as_utc(p.utc_instant))


class SessionBuilder:
    """Pairs the punches of one local day into (entry, exit) sessions.

    First entry and last exit are tracked apart from pairing so lateness and
    early departure stay computable on irregular days.
    """

    def build(self, punches: Iterable[PunchEvent]) -> SessionSummary:
        ordered = order_punches(punches)

        sessions: list[WorkSession] = []
        open_entry: Optional[datetime] = None
        first_entry: Optional[datetime] = None
        last_exit: Optional[datetime] = None
        irregularities = 0

        for punch in ordered:
            instant = as_utc(punch.utc_instant)
            if punch.punch_type == PunchType.ENTRY:
                if open_entry is not None:
                    # Superseded entry is dropped from pairing.
                    irregularities += 1
                open_entry = instant
                if first_entry is None:
                    first_entry = instant
                continue

            if open_entry is None:
                irregularities += 1
                continue

            sessions.append(WorkSession(entry=open_entry, exit=instant))
            last_exit = instant
            open_entry = None

        if open_entry is not None:
            irregularities += 1

        if irregularities:
            logger.debug(
                "irregular punches in day",
                extra={"irregularities": irregularities, "punch_count": len(ordered)},
            )

        return SessionSummary(
            sessions=tuple(sessions),
            first_entry=first_entry,
            last_exit=last_exit,
            irregularities=irregularities,
            punch_count=len(ordered),
        )
