from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from ...time_entries.model import TimeEntry

Rate = Union[Decimal, float, int]


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Implementations must be pure: the same entry, ``now`` and policy always
    yield the same hours, and nothing is read from the system clock.
    """

    @abstractmethod
    def worked_hours(
        self,
        entry: TimeEntry,
        now: Optional[datetime] = None,
        *,
        treat_open_as_ongoing: bool = False,
    ) -> float:
        raise NotImplementedError

    def pay(
        self,
        entry: TimeEntry,
        hourly_rate: Rate,
        now: Optional[datetime] = None,
        *,
        treat_open_as_ongoing: bool = False,
    ) -> float:
        """Live theoretical pay: hours x rate, no overtime or minimum rules."""
        hours = self.worked_hours(entry, now, treat_open_as_ongoing=treat_open_as_ongoing)
        return hours * float(hourly_rate)
