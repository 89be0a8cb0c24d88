from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AbsenceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import Absence, Holiday
from .repository import AbsenceRepository, HolidayRepository


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved(self, *, employee_id: int, start: date, end: date) -> Sequence[Absence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT absence_id, employee_id, kind, date_from, date_to, status, note
                FROM absences
                WHERE employee_id=%s AND status=%s AND date_from <= %s AND date_to >= %s
                ORDER BY date_from, absence_id
                """,
                (int(employee_id), AbsenceStatus.APPROVED.value, end, start),
            )
            rows = fetchall(cur)

        return [
            Absence(
                absence_id=int(r["absence_id"]),
                employee_id=int(r["employee_id"]),
                kind=r.get("kind") or "",
                date_from=normalize_mysql_date(r["date_from"]),
                date_to=normalize_mysql_date(r["date_to"]),
                status=AbsenceStatus(str(r["status"]).lower()),
                note=r.get("note"),
            )
            for r in rows
        ]


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_date, name, laborable
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date
                """,
                (start, end),
            )
            rows = fetchall(cur)

        return [
            Holiday(
                holiday_date=normalize_mysql_date(r["holiday_date"]),
                name=r.get("name") or "",
                laborable=bool(r["laborable"]),
            )
            for r in rows
        ]
