from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import parse_instant
from ...core.constants import MINUTES_PER_HOUR
from ...time_entries.model import TimeEntry
from .base import PayrollCalculator


def _minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (end - clock_in) - lunch, floored once at 0, in hours.

    end is clock_out, or ``now`` for an open shift when the caller treats open
    entries as ongoing. An open lunch (lunch_out without lunch_in) keeps
    deducting up to that same end-of-work instant, never less than zero.
    Instants may be aware, naive (taken as UTC) or ISO strings.
    """

    def worked_hours(
        self,
        entry: TimeEntry,
        now: Optional[datetime] = None,
        *,
        treat_open_as_ongoing: bool = False,
    ) -> float:
        clock_in = parse_instant(entry.clock_in)
        if clock_in is None:
            return 0.0

        end_of_work = self._end_of_work(entry, parse_instant(now), treat_open_as_ongoing)
        if end_of_work is None:
            return 0.0

        minutes = _minutes_between(clock_in, end_of_work)
        minutes -= self._lunch_minutes(entry, end_of_work)
        return max(minutes, 0.0) / MINUTES_PER_HOUR

    @staticmethod
    def _end_of_work(entry: TimeEntry, now: Optional[datetime], treat_open_as_ongoing: bool) -> Optional[datetime]:
        clock_out = parse_instant(entry.clock_out)
        if clock_out is not None:
            return clock_out
        if treat_open_as_ongoing:
            # No now -> nothing more to count.
            return now
        return None

    @staticmethod
    def _lunch_minutes(entry: TimeEntry, end_of_work: datetime) -> float:
        lunch_out = parse_instant(entry.lunch_out)
        if lunch_out is None:
            return 0.0
        lunch_in = parse_instant(entry.lunch_in)
        if lunch_in is not None:
            # Not clamped: combined with gross before the single floor.
            return _minutes_between(lunch_out, lunch_in)
        # Lunch started after work ended deducts nothing.
        return _minutes_between(lunch_out, max(end_of_work, lunch_out))
