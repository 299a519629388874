from __future__ import annotations

from enum import Enum


class WorkStatus(str, Enum):
    """Trạng thái làm việc suy ra từ bốn mốc chấm công (không lưu CSDL)."""

    NOT_STARTED = "NOT_STARTED"
    WORKING = "WORKING"
    ON_LUNCH = "ON_LUNCH"
    FINISHED = "FINISHED"


class ClockAction(str, Enum):
    """Các thao tác chấm công của nhân viên (khớp với URL /api/clock/<action>)."""

    CLOCK_IN = "in"
    LUNCH_OUT = "lunch-out"
    LUNCH_IN = "lunch-in"
    CLOCK_OUT = "out"
