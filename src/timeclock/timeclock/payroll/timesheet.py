"""Timesheet CSV export.

Open shifts are valued through ``now`` here (a still-working employee shows
hours so far), which is the same policy as the live board.
"""
from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import business_zone, parse_instant
from ..time_entries.model import TimeEntryRow
from .calculator.base import PayrollCalculator
from .engine import LIVE_POLICY, compute_pay, compute_worked_hours, round_hours, round_money

TIMESHEET_FIELDS = [
    "Employee",
    "Date",
    "Clock In",
    "Clock Out",
    "Lunch Out",
    "Lunch In",
    "Hours",
    "Rate",
    "Pay",
    "Paid Status",
    "Paid Amount",
]

STILL_WORKING = "Still Working"


def format_us_datetime(instant: Optional[datetime], tz_name: Optional[str] = None) -> str:
    """e.g. '1/5/2025, 8:03:09 AM' in the business timezone."""
    if instant is None:
        return ""
    local = parse_instant(instant).astimezone(business_zone(tz_name))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {meridiem}"


def build_timesheet_rows(
    rows: Iterable[TimeEntryRow],
    *,
    now: datetime,
    tz_name: Optional[str] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> list[dict]:
    out: list[dict] = []
    for r in rows:
        entry = r.entry
        hours = compute_worked_hours(entry, now, treat_open_as_ongoing=LIVE_POLICY, calculator=calculator)
        pay = compute_pay(entry, r.hourly_rate, now, treat_open_as_ongoing=LIVE_POLICY, calculator=calculator)
        out.append(
            {
                "Employee": r.employee_name,
                "Date": entry.entry_date.strftime("%Y-%m-%d"),
                "Clock In": format_us_datetime(entry.clock_in, tz_name),
                "Clock Out": format_us_datetime(entry.clock_out, tz_name) if entry.clock_out else STILL_WORKING,
                "Lunch Out": format_us_datetime(entry.lunch_out, tz_name),
                "Lunch In": format_us_datetime(entry.lunch_in, tz_name),
                "Hours": str(round_hours(hours)),
                "Rate": str(round_money(r.hourly_rate)),
                "Pay": str(round_money(pay)),
                "Paid Status": "Paid" if entry.is_paid else "Unpaid",
                "Paid Amount": str(round_money(entry.paid_amount)) if entry.paid_amount else "0.00",
            }
        )
    return out


def write_timesheet_csv(rows: Sequence[dict]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=TIMESHEET_FIELDS)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def timesheet_filename(start: Optional[date], end: Optional[date], today: date) -> str:
    if start is None:
        return f"timesheet-{today.isoformat()}.csv"
    if end is None or end == start:
        return f"timesheet-{start.isoformat()}.csv"
    return f"timesheet-{start.isoformat()}-to-{end.isoformat()}.csv"
