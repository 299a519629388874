"""In-memory repositories shared by the service and controller tests."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from src.timeclock.timeclock.employees.model import Employee
from src.timeclock.timeclock.time_entries.model import TimeEntry, TimeEntryRow


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def create(self, *, name: str, hourly_rate: Decimal, position: Optional[str] = None) -> int:
        employee_id = max(self._by_id, default=0) + 1
        self._by_id[employee_id] = Employee(employee_id=employee_id, name=name, hourly_rate=hourly_rate, position=position)
        return employee_id

    def update_rate(self, *, employee_id: int, hourly_rate: Decimal) -> bool:
        if employee_id not in self._by_id:
            return False
        self._by_id[employee_id] = replace(self._by_id[employee_id], hourly_rate=hourly_rate)
        return True


class InMemoryTimeEntries:
    def __init__(self, employees: InMemoryEmployees, entries: Iterable[TimeEntry] = ()):
        self._employees = employees
        self._by_id: dict[int, TimeEntry] = {e.entry_id: e for e in entries}

    def add(self, entry: TimeEntry) -> TimeEntry:
        self._by_id[entry.entry_id] = entry
        return entry

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        return self._by_id.get(entry_id)

    def get_for_employee_and_date(self, employee_id: int, entry_date: date) -> Optional[TimeEntry]:
        matches = [e for e in self._by_id.values() if e.employee_id == employee_id and e.entry_date == entry_date]
        return max(matches, key=lambda e: e.entry_id) if matches else None

    def create(
        self, *, employee_id, entry_date, clock_in=None, clock_out=None, is_paid=False, paid_amount=None, paid_at=None
    ) -> int:
        entry_id = max(self._by_id, default=0) + 1
        self._by_id[entry_id] = TimeEntry(
            entry_id=entry_id,
            employee_id=employee_id,
            entry_date=entry_date,
            clock_in=clock_in,
            clock_out=clock_out,
            is_paid=is_paid,
            paid_amount=paid_amount,
            paid_at=paid_at,
        )
        return entry_id

    def update_punches(self, *, entry_id, clock_in, clock_out, lunch_out, lunch_in) -> bool:
        entry = self._by_id.get(entry_id)
        if not entry:
            return False
        self._by_id[entry_id] = replace(
            entry, clock_in=clock_in, clock_out=clock_out, lunch_out=lunch_out, lunch_in=lunch_in
        )
        return True

    def close_open_entries(self, *, entry_ids, clock_out) -> int:
        closed = 0
        for entry_id in entry_ids:
            entry = self._by_id.get(entry_id)
            if entry and entry.clock_in is not None and entry.clock_out is None:
                self._by_id[entry_id] = replace(entry, clock_out=clock_out)
                closed += 1
        return closed

    def update_paid(self, *, entry_id, is_paid, paid_amount, paid_at) -> bool:
        entry = self._by_id.get(entry_id)
        if not entry:
            return False
        self._by_id[entry_id] = replace(entry, is_paid=is_paid, paid_amount=paid_amount, paid_at=paid_at)
        return True

    def list_rows(self, *, start_date=None, end_date=None, employee_id=None):
        rows = []
        for e in sorted(self._by_id.values(), key=lambda e: (e.entry_date, e.entry_id), reverse=True):
            if start_date is not None and e.entry_date < start_date:
                continue
            if end_date is not None and e.entry_date > end_date:
                continue
            if employee_id is not None and e.employee_id != employee_id:
                continue
            employee = self._employees.get_by_id(e.employee_id)
            rows.append(TimeEntryRow(entry=e, employee_name=employee.name, hourly_rate=employee.hourly_rate))
        return rows
