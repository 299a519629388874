from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import at_local_time, business_date, format_local, parse_instant
from ..common.validators import require_money, require_positive_int
from ..core.constants import DEFAULT_BUSINESS_TIMEZONE, DEFAULT_CURRENCY_SYMBOL, PAYMENT_STAMP_HOUR
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..time_entries.repository import TimeEntryRepository
from ..time_entries.status import paid_badge, status_label, work_status
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .engine import COMPLETED_POLICY, displayed_paid_amount, format_money, round_hours, round_money
from .timesheet import build_timesheet_rows, timesheet_filename, write_timesheet_csv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeePayroll:
    employee_id: int
    name: str
    hours: float
    pay: float


@dataclass(frozen=True)
class PayrollSummary:
    start: date
    end: date
    total_hours: float
    total_pay: float
    breakdown: list[EmployeePayroll] = field(default_factory=list)

    def to_dict(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total_hours": str(round_hours(self.total_hours)),
            "total_pay": str(round_money(self.total_pay)),
            "total_pay_display": format_money(self.total_pay, currency_symbol),
            "breakdown": [
                {
                    "employee_id": b.employee_id,
                    "name": b.name,
                    "hours": str(round_hours(b.hours)),
                    "pay": str(round_money(b.pay)),
                    "pay_display": format_money(b.pay, currency_symbol),
                }
                for b in self.breakdown
            ],
        }


@dataclass(frozen=True)
class TimesheetFile:
    filename: str
    content: bytes


class PayrollService:
    """Admin payroll use cases: entries table, calculator, payments, timesheet."""

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

    def entries_table(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> list[dict]:
        """Admin table: completed shifts only, open ones show 0.00h."""
        self._check_range(start, end)
        rows = self._entries.list_rows(start_date=start, end_date=end, employee_id=employee_id)

        def _t(value: Optional[datetime]) -> str:
            return format_local(value, self._tz) if value else "-"

        out: list[dict] = []
        for r in rows:
            entry = r.entry
            hours = self._calculator.worked_hours(entry, treat_open_as_ongoing=COMPLETED_POLICY)
            pay = hours * float(r.hourly_rate)

            out.append(
                {
                    "entry_id": entry.entry_id,
                    "employee_id": entry.employee_id,
                    "employee_name": r.employee_name,
                    "date": entry.entry_date.strftime("%Y-%m-%d"),
                    "clock_in": _t(entry.clock_in),
                    "clock_out": _t(entry.clock_out),
                    "lunch_out": _t(entry.lunch_out),
                    "lunch_in": _t(entry.lunch_in),
                    "status": status_label(work_status(entry)),
                    "hours": str(round_hours(hours)),
                    "pay": str(round_money(pay)),
                    "is_paid": entry.is_paid,
                    "paid_badge": paid_badge(entry.is_paid),
                    "paid_amount": (
                        str(round_money(displayed_paid_amount(entry, pay)))
                        if entry.is_paid or entry.paid_amount is not None
                        else "-"
                    ),
                }
            )
        return out

    def calculate(self, *, start: date, end: Optional[date] = None) -> PayrollSummary:
        """Hours & pay for a date range (end defaults to start), grouped per employee."""
        end = end or start
        self._check_range(start, end)
        rows = self._entries.list_rows(start_date=start, end_date=end)

        total_hours = 0.0
        total_pay = 0.0
        per_employee: dict[int, dict] = {}

        for r in rows:
            entry = r.entry
            hours = self._calculator.worked_hours(entry, treat_open_as_ongoing=COMPLETED_POLICY)
            pay = hours * float(r.hourly_rate)
            total_hours += hours
            total_pay += pay

            s = per_employee.get(entry.employee_id)
            if not s:
                s = {"name": r.employee_name, "hours": 0.0, "pay": 0.0}
                per_employee[entry.employee_id] = s
            s["hours"] += hours
            s["pay"] += pay

        breakdown = [
            EmployeePayroll(employee_id=employee_id, name=s["name"], hours=s["hours"], pay=s["pay"])
            for employee_id, s in per_employee.items()
        ]
        logger.info("Payroll %s..%s: %.2fh, %.2f", start, end, total_hours, total_pay)
        return PayrollSummary(start=start, end=end, total_hours=total_hours, total_pay=total_pay, breakdown=breakdown)

    def mark_paid(self, entry_id: int, *, now: datetime) -> Decimal:
        """Snapshot today's pay for a finished shift; later rate changes won't touch it."""
        entry = self._entries.get_by_id(require_positive_int(entry_id, "Entry id"))
        if not entry:
            raise NotFoundError("Time entry not found")
        if entry.is_paid:
            raise ValidationError("Entry is already paid")
        if entry.clock_in is None or entry.clock_out is None:
            raise ValidationError("Shift must be clocked out before it can be paid")

        employee = self._employees.get_by_id(entry.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        pay = self._calculator.pay(entry, employee.hourly_rate, treat_open_as_ongoing=COMPLETED_POLICY)
        amount = round_money(pay)
        self._entries.update_paid(entry_id=entry.entry_id, is_paid=True, paid_amount=amount, paid_at=parse_instant(now))
        logger.info("Entry %s marked paid: %s to %s", entry.entry_id, amount, employee.name)
        return amount

    def record_payment(self, employee_id: int, *, amount: Any, paid_date: date) -> int:
        """Manual payment for a day; creates a punch-less entry if none exists."""
        employee = self._employees.get_by_id(require_positive_int(employee_id, "Employee id"))
        if not employee:
            raise NotFoundError("Employee not found")
        amount = round_money(require_money(amount, "Amount", allow_zero=False))
        paid_at = at_local_time(paid_date, time(PAYMENT_STAMP_HOUR), self._tz)

        existing = self._entries.get_for_employee_and_date(employee.employee_id, paid_date)
        if existing:
            self._entries.update_paid(entry_id=existing.entry_id, is_paid=True, paid_amount=amount, paid_at=paid_at)
            entry_id = existing.entry_id
        else:
            entry_id = self._entries.create(
                employee_id=employee.employee_id,
                entry_date=paid_date,
                is_paid=True,
                paid_amount=amount,
                paid_at=paid_at,
            )

        logger.info("Recorded payment %s to %s for %s (entry %s)", amount, employee.name, paid_date, entry_id)
        return entry_id

    def timesheet_csv(
        self,
        *,
        now: datetime,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> TimesheetFile:
        """CSV timesheet; no start means every entry (bulk sheet)."""
        now = parse_instant(now)
        if start is not None:
            end = end or start
            self._check_range(start, end)
        else:
            end = None

        rows = self._entries.list_rows(start_date=start, end_date=end)
        content = write_timesheet_csv(build_timesheet_rows(rows, now=now, tz_name=self._tz, calculator=self._calculator))
        filename = timesheet_filename(start, end, business_date(now, self._tz))
        return TimesheetFile(filename=filename, content=content)

    @staticmethod
    def _check_range(start: date, end: date) -> None:
        if start > end:
            raise ValidationError("Start date must be on or before end date")
