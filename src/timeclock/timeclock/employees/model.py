from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên.

    hourly_rate là mức lương hiện tại; thay đổi theo thời gian và không làm
    thay đổi các khoản đã trả (paid_amount đã chụp lại lúc trả).
    """

    employee_id: int
    name: str
    hourly_rate: Decimal
    position: Optional[str] = None
