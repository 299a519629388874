from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Protocol, Sequence

from .model import TimeEntry, TimeEntryRow


class TimeEntryRepository(Protocol):
    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, entry_date: date) -> Optional[TimeEntry]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_punches(
        self,
        *,
        entry_id: int,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        lunch_out: Optional[datetime],
        lunch_in: Optional[datetime],
    ) -> bool:
        """Overwrite all four punches (None clears a punch)."""

        raise NotImplementedError

    def close_open_entries(self, *, entry_ids: Iterable[int], clock_out: datetime) -> int:
        """Stamp clock_out on entries that are clocked in and still open.

        Returns number of entries closed.
        """

        raise NotImplementedError

    def update_paid(
        self,
        *,
        entry_id: int,
        is_paid: bool,
        paid_amount: Optional[Decimal],
        paid_at: Optional[datetime],
    ) -> bool:
        raise NotImplementedError

    def list_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[TimeEntryRow]:
        """Entries joined with employee name/rate, newest date first.

        Missing bounds mean "unbounded" (bulk export).
        """

        raise NotImplementedError
