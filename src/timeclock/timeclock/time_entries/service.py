from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..common.datetime_utils import (
    InstantLike,
    at_local_time,
    business_date,
    format_local,
    parse_instant,
    parse_wall_time,
)
from ..common.validators import optional_money, require_positive_int
from ..core.constants import DEFAULT_BUSINESS_TIMEZONE, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.enums import ClockAction, WorkStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.engine import LIVE_POLICY, displayed_paid_amount, round_hours, round_money
from .model import TimeEntry, TimeEntryRow
from .repository import TimeEntryRepository
from .status import is_live, paid_badge, status_badge, status_label, work_status

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class TimeEntryService:
    """Use case: punches for today (clock in/out, lunch) plus admin edits."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        employees: EmployeeRepository,
        *,
        business_timezone: str = DEFAULT_BUSINESS_TIMEZONE,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._entries = entries
        self._employees = employees
        self._tz = business_timezone
        self._calculator = calculator or StandardPayrollCalculator()

    # ----- employee punches -----

    def clock_in(self, employee_id: int, *, now: datetime) -> int:
        now = parse_instant(now)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        today = business_date(now, self._tz)
        existing = self._entries.get_for_employee_and_date(employee.employee_id, today)
        if existing and existing.clock_in is not None:
            raise ValidationError(f"{employee.name} already clocked in today")

        if existing:
            # Punch-less entry created by a manual payment for today.
            self._write_punches(replace(existing, clock_in=now))
            entry_id = existing.entry_id
        else:
            entry_id = self._entries.create(employee_id=employee.employee_id, entry_date=today, clock_in=now)

        logger.info("Employee %s clocked in (entry %s)", employee.employee_id, entry_id)
        return entry_id

    def start_lunch(self, employee_id: int, *, now: datetime) -> TimeEntry:
        now = parse_instant(now)
        entry = self._open_entry(employee_id, now)
        if entry.lunch_out is not None:
            raise ValidationError("Lunch already taken today" if entry.lunch_in else "Already on lunch")

        updated = self._write_punches(replace(entry, lunch_out=now))
        logger.info("Employee %s started lunch (entry %s)", employee_id, entry.entry_id)
        return updated

    def end_lunch(self, employee_id: int, *, now: datetime) -> TimeEntry:
        now = parse_instant(now)
        entry = self._open_entry(employee_id, now)
        if entry.lunch_out is None:
            raise ValidationError("Lunch has not started")
        if entry.lunch_in is not None:
            raise ValidationError("Lunch already ended")

        updated = self._write_punches(replace(entry, lunch_in=now))
        logger.info("Employee %s back from lunch (entry %s)", employee_id, entry.entry_id)
        return updated

    def clock_out(self, employee_id: int, *, now: datetime) -> TimeEntry:
        now = parse_instant(now)
        entry = self._open_entry(employee_id, now)
        if work_status(entry) == WorkStatus.ON_LUNCH:
            entry = replace(entry, lunch_in=now)

        updated = self._write_punches(replace(entry, clock_out=now))
        logger.info("Employee %s clocked out (entry %s)", employee_id, entry.entry_id)
        return updated

    def perform(self, action: ClockAction, employee_id: int, *, now: datetime):
        handlers = {
            ClockAction.CLOCK_IN: self.clock_in,
            ClockAction.LUNCH_OUT: self.start_lunch,
            ClockAction.LUNCH_IN: self.end_lunch,
            ClockAction.CLOCK_OUT: self.clock_out,
        }
        return handlers[action](employee_id, now=now)

    # ----- admin -----

    def bulk_clock_out(self, entry_ids: Iterable[Any], *, now: datetime) -> int:
        ids = [require_positive_int(i, "Entry id") for i in entry_ids or []]
        if not ids:
            raise ValidationError("Select at least one employee to clock out")

        closed = self._entries.close_open_entries(entry_ids=ids, clock_out=parse_instant(now))
        logger.info("Bulk clock-out closed %s of %s entries", closed, len(ids))
        return closed

    def admin_create(
        self,
        employee_id: int,
        *,
        entry_date: date,
        clock_in: str = DEFAULT_SHIFT_START,
        clock_out: str = DEFAULT_SHIFT_END,
    ) -> int:
        """Quick entry of a finished shift; times are wall-clock at the business location."""
        employee = self._employees.get_by_id(require_positive_int(employee_id, "Employee id"))
        if not employee:
            raise NotFoundError("Employee not found")

        start = at_local_time(entry_date, parse_wall_time(clock_in), self._tz)
        end = at_local_time(entry_date, parse_wall_time(clock_out), self._tz)
        if start >= end:
            raise ValidationError("Clock out time must be after clock in time")

        existing = self._entries.get_for_employee_and_date(employee.employee_id, entry_date)
        if existing and existing.clock_in is not None:
            raise ValidationError(f"{employee.name} already has a shift on {entry_date.isoformat()}")

        if existing:
            self._write_punches(replace(existing, clock_in=start, clock_out=end))
            entry_id = existing.entry_id
        else:
            entry_id = self._entries.create(
                employee_id=employee.employee_id, entry_date=entry_date, clock_in=start, clock_out=end
            )

        logger.info("Admin added shift for employee %s on %s (entry %s)", employee.employee_id, entry_date, entry_id)
        return entry_id

    def admin_update(
        self,
        entry_id: int,
        *,
        now: datetime,
        clock_in: InstantLike = _UNSET,
        clock_out: InstantLike = _UNSET,
        lunch_out: InstantLike = _UNSET,
        lunch_in: InstantLike = _UNSET,
        is_paid: Optional[bool] = None,
        paid_amount: Any = _UNSET,
    ) -> TimeEntry:
        """Admin edit. Omitted fields keep their value, blank/None clears a punch.

        Chronology is not validated here: malformed punches degrade to 0 hours.
        """

        entry = self.get(entry_id)

        punches = {}
        for name, value in (
            ("clock_in", clock_in),
            ("clock_out", clock_out),
            ("lunch_out", lunch_out),
            ("lunch_in", lunch_in),
        ):
            if value is not _UNSET:
                punches[name] = parse_instant(value)
        updated = replace(entry, **punches)
        if punches:
            self._write_punches(updated)

        if is_paid is not None or paid_amount is not _UNSET:
            amount = entry.paid_amount if paid_amount is _UNSET else optional_money(paid_amount, "Paid amount")
            paid = entry.is_paid if is_paid is None else bool(is_paid)
            paid_at = (entry.paid_at or parse_instant(now)) if paid else None
            self._entries.update_paid(entry_id=entry.entry_id, is_paid=paid, paid_amount=amount, paid_at=paid_at)
            updated = replace(updated, is_paid=paid, paid_amount=amount, paid_at=paid_at)

        logger.info("Admin updated entry %s", entry.entry_id)
        return updated

    def get(self, entry_id: int) -> TimeEntry:
        entry = self._entries.get_by_id(require_positive_int(entry_id, "Entry id"))
        if not entry:
            raise NotFoundError("Time entry not found")
        return entry

    # ----- live board -----

    def today_board(self, *, now: datetime) -> list[dict]:
        now = parse_instant(now)
        today = business_date(now, self._tz)
        rows = self._entries.list_rows(start_date=today, end_date=today)
        return [self._to_ui(r, now) for r in rows]

    def _to_ui(self, row: TimeEntryRow, now: datetime) -> dict:
        entry = row.entry
        status = work_status(entry)
        hours = self._calculator.worked_hours(entry, now, treat_open_as_ongoing=LIVE_POLICY)
        pay = hours * float(row.hourly_rate)

        def _t(value: Optional[datetime]) -> str:
            return format_local(value, self._tz, fmt="%I:%M %p") if value else "-"

        return {
            "entry_id": entry.entry_id,
            "employee_id": entry.employee_id,
            "employee_name": row.employee_name,
            "hourly_rate": str(round_money(row.hourly_rate)),
            "date": entry.entry_date.strftime("%Y-%m-%d"),
            "clock_in": _t(entry.clock_in),
            "clock_out": _t(entry.clock_out),
            "lunch_out": _t(entry.lunch_out),
            "lunch_in": _t(entry.lunch_in),
            "status": status_label(status),
            "badge": status_badge(status),
            "live": is_live(status),
            "hours": str(round_hours(hours)),
            "pay": str(round_money(pay)),
            "is_paid": entry.is_paid,
            "paid_badge": paid_badge(entry.is_paid),
            "paid_amount": str(round_money(displayed_paid_amount(entry, pay))) if entry.is_paid else None,
            "can_mark_paid": (not entry.is_paid) and entry.clock_out is not None,
        }

    # ----- helpers -----

    def _open_entry(self, employee_id: int, now: datetime) -> TimeEntry:
        today = business_date(now, self._tz)
        entry = self._entries.get_for_employee_and_date(int(employee_id), today)
        if not entry or entry.clock_in is None:
            raise ValidationError("Not clocked in today")
        if entry.clock_out is not None:
            raise ValidationError("Already clocked out today")
        return entry

    def _write_punches(self, entry: TimeEntry) -> TimeEntry:
        ok = self._entries.update_punches(
            entry_id=entry.entry_id,
            clock_in=entry.clock_in,
            clock_out=entry.clock_out,
            lunch_out=entry.lunch_out,
            lunch_in=entry.lunch_in,
        )
        if not ok:
            raise ValidationError("Saving time entry failed")
        return entry
