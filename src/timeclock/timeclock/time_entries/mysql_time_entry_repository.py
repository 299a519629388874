from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, read_instant, read_money, write_instant
from .model import TimeEntry, TimeEntryRow
from .repository import TimeEntryRepository

_ENTRY_COLUMNS = """
    t.entry_id, t.employee_id, t.entry_date, t.clock_in, t.clock_out,
    t.lunch_out, t.lunch_in, t.is_paid, t.paid_amount, t.paid_at
"""


def _to_entry(r: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        entry_date=r["entry_date"],
        clock_in=read_instant(r.get("clock_in")),
        clock_out=read_instant(r.get("clock_out")),
        lunch_out=read_instant(r.get("lunch_out")),
        lunch_in=read_instant(r.get("lunch_in")),
        is_paid=bool(r.get("is_paid")),
        paid_amount=read_money(r.get("paid_amount")),
        paid_at=read_instant(r.get("paid_at")),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ENTRY_COLUMNS} FROM time_entries t WHERE t.entry_id=%s",
                (entry_id,),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, entry_date: date) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries t
                WHERE t.employee_id=%s AND t.entry_date=%s
                ORDER BY t.entry_id DESC
                LIMIT 1
                """,
                (employee_id, entry_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        entry_date: date,
        clock_in: Optional[datetime] = None,
        clock_out: Optional[datetime] = None,
        is_paid: bool = False,
        paid_amount: Optional[Decimal] = None,
        paid_at: Optional[datetime] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(employee_id, entry_date, clock_in, clock_out, is_paid, paid_amount, paid_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    entry_date,
                    write_instant(clock_in),
                    write_instant(clock_out),
                    int(is_paid),
                    paid_amount,
                    write_instant(paid_at),
                ),
            )
            return int(cur.lastrowid)

    def update_punches(
        self,
        *,
        entry_id: int,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        lunch_out: Optional[datetime],
        lunch_in: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_in=%s, clock_out=%s, lunch_out=%s, lunch_in=%s
                WHERE entry_id=%s
                """,
                (
                    write_instant(clock_in),
                    write_instant(clock_out),
                    write_instant(lunch_out),
                    write_instant(lunch_in),
                    entry_id,
                ),
            )
            return cur.rowcount > 0

    def close_open_entries(self, *, entry_ids: Iterable[int], clock_out: datetime) -> int:
        ids: List[int] = [int(i) for i in entry_ids]
        if not ids:
            return 0
        placeholders = in_clause(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE time_entries
                SET clock_out=%s
                WHERE entry_id IN ({placeholders})
                  AND clock_in IS NOT NULL
                  AND clock_out IS NULL
                """,
                (write_instant(clock_out), *ids),
            )
            return int(cur.rowcount)

    def update_paid(
        self,
        *,
        entry_id: int,
        is_paid: bool,
        paid_amount: Optional[Decimal],
        paid_at: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET is_paid=%s, paid_amount=%s, paid_at=%s
                WHERE entry_id=%s
                """,
                (int(is_paid), paid_amount, write_instant(paid_at), entry_id),
            )
            return cur.rowcount > 0

    def list_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[TimeEntryRow]:
        where = ["1=1"]
        params: list = []
        if start_date is not None:
            where.append("t.entry_date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("t.entry_date <= %s")
            params.append(end_date)
        if employee_id is not None:
            where.append("t.employee_id = %s")
            params.append(employee_id)
        clause = " AND ".join(where)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}, e.name AS employee_name, e.hourly_rate
                FROM time_entries t
                JOIN employees e ON e.employee_id = t.employee_id
                WHERE {clause}
                ORDER BY t.entry_date DESC, t.entry_id DESC
                """,
                tuple(params),
            )
            return [
                TimeEntryRow(
                    entry=_to_entry(r),
                    employee_name=r["employee_name"],
                    hourly_rate=read_money(r["hourly_rate"], default=Decimal("0")),
                )
                for r in fetchall(cur)
            ]
