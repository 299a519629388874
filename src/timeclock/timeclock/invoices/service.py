from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..common.datetime_utils import parse_instant
from ..common.validators import require_money, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_CURRENCY_SYMBOL, INVOICE_NUMBER_PREFIX
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.engine import COMPLETED_POLICY, format_money, round_hours, round_money
from ..time_entries.repository import TimeEntryRepository
from .model import Invoice, InvoiceItem


def new_invoice_number(now: datetime) -> str:
    """INV- plus the last six digits of the epoch milliseconds."""
    millis = int(parse_instant(now).timestamp() * 1000)
    return f"{INVOICE_NUMBER_PREFIX}{str(millis)[-6:]}"


class InvoiceService:
    """Use case: invoice lines priced from an employee's hourly rate."""

    def __init__(
        self,
        employees: EmployeeRepository,
        entries: TimeEntryRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._entries = entries
        self._calculator = calculator or StandardPayrollCalculator()

    def line_from_employee(
        self,
        employee_id: int,
        *,
        hours: Any = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> InvoiceItem:
        """Unit price is the current rate; quantity is given hours or worked hours in range."""
        employee = self._employees.get_by_id(require_positive_int(employee_id, "Employee id"))
        if not employee:
            raise NotFoundError("Employee not found")

        if hours is not None and str(hours).strip() != "":
            quantity = require_money(hours, "Hours")
        else:
            if start is None:
                raise ValidationError("Give hours or a date range")
            end = end or start
            if start > end:
                raise ValidationError("Start date must be on or before end date")
            rows = self._entries.list_rows(start_date=start, end_date=end, employee_id=employee.employee_id)
            worked = sum(
                self._calculator.worked_hours(r.entry, treat_open_as_ongoing=COMPLETED_POLICY) for r in rows
            )
            quantity = round_hours(worked)

        return InvoiceItem(
            description=f"{employee.name} - labor",
            quantity=quantity,
            rate=round_money(employee.hourly_rate),
        )

    @staticmethod
    def build_invoice(
        *,
        invoice_number: str,
        client_name: str,
        issue_date: date,
        items: Iterable[dict],
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Invoice:
        parsed = [
            InvoiceItem(
                description=require_non_empty(str(i.get("description") or ""), "Description"),
                quantity=require_money(i.get("quantity", 1), "Quantity"),
                rate=require_money(i.get("rate", 0), "Rate"),
            )
            for i in items
        ]
        if not parsed:
            raise ValidationError("Invoice needs at least one item")
        return Invoice(
            invoice_number=require_non_empty(invoice_number, "Invoice number"),
            client_name=require_non_empty(client_name, "Client name"),
            issue_date=issue_date,
            items=parsed,
            due_date=due_date,
            notes=notes.strip() if notes else None,
        )

    @staticmethod
    def to_dict(invoice: Invoice, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> dict:
        return {
            "invoice_number": invoice.invoice_number,
            "client_name": invoice.client_name,
            "issue_date": invoice.issue_date.isoformat(),
            "due_date": invoice.due_date.isoformat() if invoice.due_date else None,
            "notes": invoice.notes,
            "items": [
                {
                    "description": i.description,
                    "quantity": str(i.quantity),
                    "rate": str(round_money(i.rate)),
                    "amount": str(round_money(i.amount)),
                }
                for i in invoice.items
            ],
            "total": str(round_money(invoice.total)),
            "total_display": format_money(invoice.total, currency_symbol),
        }
