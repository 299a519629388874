from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Thực thể miền (domain): Bản ghi chấm công của một nhân viên trong một ngày.

    Bốn mốc thời gian đều có thể rỗng và là thời điểm tuyệt đối (UTC, có tzinfo).
    Số giờ và tiền công luôn được tính lại; chỉ paid_amount là giá trị chụp lại.
    """

    entry_id: int
    employee_id: int
    entry_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    lunch_out: Optional[datetime] = None
    lunch_in: Optional[datetime] = None
    is_paid: bool = False
    paid_amount: Optional[Decimal] = None
    paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class TimeEntryRow:
    """Read-model phục vụ báo cáo/xuất file: bản ghi kèm tên và mức lương hiện tại."""

    entry: TimeEntry
    employee_name: str
    hourly_rate: Decimal
