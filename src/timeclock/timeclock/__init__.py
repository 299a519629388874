"""Shop Timeclock package.

This package is organized by feature modules (employees, time_entries,
payroll, invoices, ...) with a thin Flask controller layer and
service/repository layers. Worked hours and pay for every view come from
``payroll.engine``.
"""
from __future__ import annotations

from .payroll.engine import compute_pay, compute_worked_hours, displayed_paid_amount
from .time_entries.status import work_status

__all__ = ["compute_pay", "compute_worked_hours", "displayed_paid_amount", "work_status"]
