from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.validators import require_money, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employees and their hourly rates (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def add_employee(self, *, name: str, hourly_rate: Any, position: Optional[str] = None) -> int:
        name = require_non_empty(name, "Name")
        rate = require_money(hourly_rate, "Hourly rate")
        position = position.strip() if position and position.strip() else None

        employee_id = self._employees.create(name=name, hourly_rate=rate, position=position)
        logger.info("Added employee %s (%s) at rate %s", employee_id, name, rate)
        return employee_id

    def change_rate(self, *, employee_id: int, hourly_rate: Any) -> Decimal:
        """Rate changes apply to live pay only; paid snapshots are untouched."""
        rate = require_money(hourly_rate, "Hourly rate")
        self.get(employee_id)
        if not self._employees.update_rate(employee_id=int(employee_id), hourly_rate=rate):
            raise ValidationError("Updating hourly rate failed")
        logger.info("Employee %s rate changed to %s", employee_id, rate)
        return rate
