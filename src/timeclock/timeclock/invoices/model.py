from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class InvoiceItem:
    """Dòng hoá đơn: amount = quantity x rate."""

    description: str
    quantity: Decimal
    rate: Decimal

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.rate


@dataclass(frozen=True)
class Invoice:
    invoice_number: str
    client_name: str
    issue_date: date
    items: list[InvoiceItem] = field(default_factory=list)
    due_date: Optional[date] = None
    notes: Optional[str] = None

    @property
    def total(self) -> Decimal:
        return sum((item.amount for item in self.items), Decimal("0"))
