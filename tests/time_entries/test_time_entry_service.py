from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.timeclock.timeclock.core.enums import ClockAction, WorkStatus
from src.timeclock.timeclock.core.exceptions import NotFoundError, ValidationError
from src.timeclock.timeclock.employees.model import Employee
from src.timeclock.timeclock.time_entries.model import TimeEntry
from src.timeclock.timeclock.time_entries.service import TimeEntryService
from src.timeclock.timeclock.time_entries.status import work_status
from tests.fakes import InMemoryEmployees, InMemoryTimeEntries, utc

# 08:00 on 2025-03-03 in Manila
MORNING = utc(2025, 3, 3, 0, 0)
TODAY = date(2025, 3, 3)


def _setup():
    employees = InMemoryEmployees([Employee(employee_id=1, name="Maria", hourly_rate=Decimal("75.00"))])
    entries = InMemoryTimeEntries(employees)
    return TimeEntryService(entries, employees, business_timezone="Asia/Manila"), entries


def test_full_day_of_punches():
    svc, entries = _setup()

    entry_id = svc.clock_in(1, now=MORNING)
    svc.start_lunch(1, now=MORNING + timedelta(hours=4))
    svc.end_lunch(1, now=MORNING + timedelta(hours=5))
    svc.clock_out(1, now=MORNING + timedelta(hours=9))

    entry = entries.get_by_id(entry_id)
    assert entry.entry_date == TODAY
    assert entry.clock_in == MORNING
    assert entry.lunch_in == MORNING + timedelta(hours=5)
    assert work_status(entry) == WorkStatus.FINISHED


def test_shift_date_uses_business_timezone():
    svc, entries = _setup()
    # 17:30 UTC on the 2nd is already 01:30 on the 3rd in Manila
    entry_id = svc.clock_in(1, now=utc(2025, 3, 2, 17, 30))
    assert entries.get_by_id(entry_id).entry_date == TODAY


def test_cannot_clock_in_twice():
    svc, _ = _setup()
    svc.clock_in(1, now=MORNING)
    with pytest.raises(ValidationError):
        svc.clock_in(1, now=MORNING + timedelta(hours=1))


def test_clock_in_unknown_employee():
    svc, _ = _setup()
    with pytest.raises(NotFoundError):
        svc.clock_in(99, now=MORNING)


def test_clock_in_fills_payment_only_entry():
    svc, entries = _setup()
    paid_id = entries.create(employee_id=1, entry_date=TODAY, is_paid=True, paid_amount=Decimal("500.00"))

    assert svc.clock_in(1, now=MORNING) == paid_id
    assert entries.get_by_id(paid_id).clock_in == MORNING


def test_lunch_requires_open_shift():
    svc, _ = _setup()
    with pytest.raises(ValidationError):
        svc.start_lunch(1, now=MORNING)


def test_only_one_lunch():
    svc, _ = _setup()
    svc.clock_in(1, now=MORNING)
    svc.start_lunch(1, now=MORNING + timedelta(hours=4))
    with pytest.raises(ValidationError):
        svc.start_lunch(1, now=MORNING + timedelta(hours=4, minutes=5))
    svc.end_lunch(1, now=MORNING + timedelta(hours=5))
    with pytest.raises(ValidationError):
        svc.end_lunch(1, now=MORNING + timedelta(hours=5, minutes=1))


def test_clock_out_during_lunch_closes_lunch():
    svc, _ = _setup()
    svc.clock_in(1, now=MORNING)
    svc.start_lunch(1, now=MORNING + timedelta(hours=4))

    entry = svc.clock_out(1, now=MORNING + timedelta(hours=5))

    assert entry.lunch_in == MORNING + timedelta(hours=5)
    assert entry.clock_out == MORNING + timedelta(hours=5)


def test_cannot_clock_out_twice():
    svc, _ = _setup()
    svc.clock_in(1, now=MORNING)
    svc.clock_out(1, now=MORNING + timedelta(hours=8))
    with pytest.raises(ValidationError):
        svc.clock_out(1, now=MORNING + timedelta(hours=9))


def test_perform_dispatches_actions():
    svc, entries = _setup()
    entry_id = svc.perform(ClockAction.CLOCK_IN, 1, now=MORNING)
    svc.perform(ClockAction.LUNCH_OUT, 1, now=MORNING + timedelta(hours=3))
    assert work_status(entries.get_by_id(entry_id)) == WorkStatus.ON_LUNCH


def test_bulk_clock_out_only_closes_open_entries():
    svc, entries = _setup()
    open_entry = entries.add(TimeEntry(entry_id=10, employee_id=1, entry_date=TODAY, clock_in=MORNING))
    done = entries.add(
        TimeEntry(
            entry_id=11,
            employee_id=1,
            entry_date=TODAY - timedelta(days=1),
            clock_in=MORNING - timedelta(days=1),
            clock_out=MORNING - timedelta(days=1) + timedelta(hours=8),
        )
    )
    now = MORNING + timedelta(hours=10)

    closed = svc.bulk_clock_out([open_entry.entry_id, done.entry_id], now=now)

    assert closed == 1
    assert entries.get_by_id(10).clock_out == now
    assert entries.get_by_id(11).clock_out == done.clock_out


def test_bulk_clock_out_needs_selection():
    svc, _ = _setup()
    with pytest.raises(ValidationError):
        svc.bulk_clock_out([], now=MORNING)


def test_admin_update_edits_and_clears_punches():
    svc, entries = _setup()
    entries.add(
        TimeEntry(
            entry_id=5,
            employee_id=1,
            entry_date=TODAY,
            clock_in=MORNING,
            clock_out=MORNING + timedelta(hours=8),
            lunch_out=MORNING + timedelta(hours=4),
        )
    )

    updated = svc.admin_update(
        5,
        now=MORNING + timedelta(hours=12),
        clock_out="2025-03-03T09:30:00Z",
        lunch_out="",
        is_paid=True,
        paid_amount="600",
    )

    stored = entries.get_by_id(5)
    assert stored == updated
    assert stored.clock_in == MORNING
    assert stored.clock_out == utc(2025, 3, 3, 9, 30)
    assert stored.lunch_out is None
    assert stored.is_paid and stored.paid_amount == Decimal("600")
    assert stored.paid_at == MORNING + timedelta(hours=12)


def test_admin_update_rejects_negative_paid_amount():
    svc, entries = _setup()
    entries.add(TimeEntry(entry_id=5, employee_id=1, entry_date=TODAY, clock_in=MORNING))
    with pytest.raises(ValidationError):
        svc.admin_update(5, now=MORNING, paid_amount="-1")


def test_admin_update_unpaid_clears_paid_at():
    svc, entries = _setup()
    entries.add(
        TimeEntry(entry_id=5, employee_id=1, entry_date=TODAY, is_paid=True, paid_amount=Decimal("10"), paid_at=MORNING)
    )
    svc.admin_update(5, now=MORNING, is_paid=False)
    stored = entries.get_by_id(5)
    assert stored.is_paid is False
    assert stored.paid_at is None
    assert stored.paid_amount == Decimal("10")


def test_today_board_values_open_shift_live():
    svc, _ = _setup()
    svc.clock_in(1, now=MORNING)

    rows = svc.today_board(now=MORNING + timedelta(hours=2, minutes=30))

    assert len(rows) == 1
    row = rows[0]
    assert row["status"] == "Working"
    assert row["live"] is True
    assert row["clock_in"] == "08:00 AM"
    assert row["clock_out"] == "-"
    assert row["hours"] == "2.50"
    assert row["pay"] == "187.50"
    assert row["can_mark_paid"] is False


def test_admin_create_adds_finished_shift_in_business_time():
    svc, entries = _setup()

    entry_id = svc.admin_create(1, entry_date=date(2025, 3, 1), clock_in="09:00", clock_out="13:00")

    entry = entries.get_by_id(entry_id)
    assert entry.entry_date == date(2025, 3, 1)
    assert entry.clock_in == utc(2025, 3, 1, 1, 0)
    assert entry.clock_out == utc(2025, 3, 1, 5, 0)
    assert entry.is_paid is False
    assert work_status(entry) == WorkStatus.FINISHED


def test_admin_create_defaults_to_full_day():
    svc, entries = _setup()
    entry = entries.get_by_id(svc.admin_create(1, entry_date=TODAY))
    assert entry.clock_out - entry.clock_in == timedelta(hours=8)


def test_admin_create_fills_payment_only_entry():
    svc, entries = _setup()
    paid_id = entries.create(employee_id=1, entry_date=TODAY, is_paid=True, paid_amount=Decimal("500.00"))

    assert svc.admin_create(1, entry_date=TODAY) == paid_id
    stored = entries.get_by_id(paid_id)
    assert stored.clock_in is not None
    assert stored.paid_amount == Decimal("500.00")


@pytest.mark.parametrize(
    "employee_id, clock_in, clock_out, error",
    [
        (1, "17:00", "09:00", ValidationError),
        (1, "09:00", "09:00", ValidationError),
        (1, "9am", "17:00", ValidationError),
        (99, "09:00", "17:00", NotFoundError),
    ],
)
def test_admin_create_rejects_bad_shift(employee_id, clock_in, clock_out, error):
    svc, _ = _setup()
    with pytest.raises(error):
        svc.admin_create(employee_id, entry_date=TODAY, clock_in=clock_in, clock_out=clock_out)


def test_admin_create_refuses_second_shift_for_the_day():
    svc, _ = _setup()
    svc.clock_in(1, now=MORNING)
    with pytest.raises(ValidationError):
        svc.admin_create(1, entry_date=TODAY)
