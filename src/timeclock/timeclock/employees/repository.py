from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, name: str, hourly_rate: Decimal, position: Optional[str] = None) -> int:
        raise NotImplementedError

    def update_rate(self, *, employee_id: int, hourly_rate: Decimal) -> bool:
        raise NotImplementedError
