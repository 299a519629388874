from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, read_money
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        hourly_rate=read_money(r["hourly_rate"], default=Decimal("0")),
        position=r.get("position"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, hourly_rate, position
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, hourly_rate, position
                FROM employees
                ORDER BY name
                """
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, *, name: str, hourly_rate: Decimal, position: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO employees (name, hourly_rate, position) VALUES (%s, %s, %s)",
                (name, hourly_rate, position),
            )
            return int(cur.lastrowid)

    def update_rate(self, *, employee_id: int, hourly_rate: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET hourly_rate=%s WHERE employee_id=%s",
                (hourly_rate, employee_id),
            )
            return cur.rowcount > 0
