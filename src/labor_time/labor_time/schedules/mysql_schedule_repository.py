from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import Schedule, ScheduleAssignment, ScheduleDayDetail
from .repository import ScheduleRepository


def _optional_bool(value: Any) -> Optional[bool]:
    return None if value is None else bool(value)


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_assignments(self, *, employee_id: int, start: date, end: date) -> Sequence[ScheduleAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, employee_id, schedule_id, valid_from, valid_to
                FROM schedule_assignments
                WHERE employee_id=%s
                  AND valid_from <= %s
                  AND (valid_to IS NULL OR valid_to >= %s)
                ORDER BY valid_from, assignment_id
                """,
                (int(employee_id), end, start),
            )
            rows = fetchall(cur)

        return [
            ScheduleAssignment(
                assignment_id=int(r["assignment_id"]),
                employee_id=int(r["employee_id"]),
                schedule_id=int(r["schedule_id"]),
                valid_from=normalize_mysql_date(r["valid_from"]),
                valid_to=normalize_mysql_date(r.get("valid_to")),
            )
            for r in rows
        ]

    def get_schedule(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT schedule_id, name, compensation_allowed FROM schedules WHERE schedule_id=%s",
                (int(schedule_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Schedule(
                schedule_id=int(r["schedule_id"]),
                name=r.get("name") or "",
                compensation_allowed=bool(r["compensation_allowed"]),
            )

    def get_day_detail(self, *, schedule_id: int, weekday: int) -> Optional[ScheduleDayDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, weekday, laborable, entry_time, exit_time,
                       tolerance_minutes, rounding_minutes, break_minutes, compensation_allowed
                FROM schedule_day_details
                WHERE schedule_id=%s AND weekday=%s
                """,
                (int(schedule_id), int(weekday)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ScheduleDayDetail(
                schedule_id=int(r["schedule_id"]),
                weekday=int(r["weekday"]),
                laborable=bool(r["laborable"]),
                entry_time=normalize_mysql_time(r.get("entry_time")),
                exit_time=normalize_mysql_time(r.get("exit_time")),
                tolerance_minutes=int(r.get("tolerance_minutes") or 0),
                rounding_minutes=int(r.get("rounding_minutes") or 0),
                break_minutes=int(r.get("break_minutes") or 0),
                compensation_allowed=_optional_bool(r.get("compensation_allowed")),
            )
