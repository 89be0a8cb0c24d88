from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r.get("full_name") or "",
        site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
        is_active=bool(r["is_active"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, full_name, site_id, is_active FROM employees WHERE employee_id=%s",
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self, *, site_id: Optional[int] = None) -> Sequence[Employee]:
        clauses = ["is_active=1"]
        params: list[object] = []
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT employee_id, full_name, site_id, is_active FROM employees WHERE {where} ORDER BY full_name",
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]
