from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime, to_mysql_datetime
from .model import PunchEvent
from .repository import PunchRepository

_COLUMNS = "punch_id, employee_id, punch_type, punched_at, latitude, longitude"


def _to_punch(r: dict) -> PunchEvent:
    return PunchEvent(
        punch_id=int(r["punch_id"]),
        employee_id=int(r["employee_id"]),
        punch_type=PunchType(str(r["punch_type"]).lower()),
        utc_instant=normalize_mysql_datetime(r["punched_at"]),
        latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
        longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
    )


class MySQLPunchRepository(PunchRepository):
    """Punches are stored with `punched_at` as UTC wall time."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_punches(self, *, employee_id: int, utc_start: datetime, utc_end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE employee_id=%s AND punched_at >= %s AND punched_at < %s
                ORDER BY punched_at, punch_id
                """,
                (int(employee_id), to_mysql_datetime(utc_start), to_mysql_datetime(utc_end)),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def list_punches_for_employees(
        self, *, employee_ids: Sequence[int], utc_start: datetime, utc_end: datetime
    ) -> Sequence[PunchEvent]:
        ids = [int(x) for x in employee_ids]
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE employee_id IN ({placeholders}) AND punched_at >= %s AND punched_at < %s
                ORDER BY punched_at, punch_id
                """,
                (*ids, to_mysql_datetime(utc_start), to_mysql_datetime(utc_end)),
            )
            return [_to_punch(r) for r in fetchall(cur)]
