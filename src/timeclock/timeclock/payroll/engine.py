"""Work-hours and pay figures shared by every view.

The live board, the admin entries table, the CSV timesheet, the payroll
calculator and invoice lines all go through these functions so the numbers
they show agree. Nothing here rounds; format with :func:`round_money` /
:func:`round_hours` at display time.

Open-entry policy per consumer:

    live board, CSV timesheet .......... treat_open_as_ongoing=True
    admin table, payroll calculator,
    mark-as-paid snapshot .............. treat_open_as_ongoing=False
"""
from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ..core.constants import DEFAULT_CURRENCY_SYMBOL
from ..time_entries.model import TimeEntry
from .calculator.base import PayrollCalculator, Rate
from .calculator.standard_calculator import StandardPayrollCalculator

LIVE_POLICY = True
COMPLETED_POLICY = False

_TWO_PLACES = Decimal("0.01")
_default_calculator: PayrollCalculator = StandardPayrollCalculator()


def compute_worked_hours(
    entry: TimeEntry,
    now: Optional[datetime] = None,
    *,
    treat_open_as_ongoing: bool = False,
    calculator: Optional[PayrollCalculator] = None,
) -> float:
    calc = calculator or _default_calculator
    return calc.worked_hours(entry, now, treat_open_as_ongoing=treat_open_as_ongoing)


def compute_pay(
    entry: TimeEntry,
    hourly_rate: Rate,
    now: Optional[datetime] = None,
    *,
    treat_open_as_ongoing: bool = False,
    calculator: Optional[PayrollCalculator] = None,
) -> float:
    calc = calculator or _default_calculator
    return calc.pay(entry, hourly_rate, now, treat_open_as_ongoing=treat_open_as_ongoing)


def displayed_paid_amount(entry: TimeEntry, live_pay: float) -> Union[Decimal, float]:
    """Amount to show as paid: the stored snapshot wins over today's rate."""
    if entry.paid_amount is not None:
        return entry.paid_amount
    return live_pay


def round_money(value: Union[Decimal, float, int]) -> Decimal:
    """Two decimals, halves away from zero."""
    return Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def round_hours(value: Union[Decimal, float, int]) -> Decimal:
    return round_money(value)


def format_money(value: Union[Decimal, float, int], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """e.g. '₱1,234.50'."""
    amount = round_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
