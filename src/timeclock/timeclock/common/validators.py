from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_money(value: Any, field_name: str, *, allow_zero: bool = True) -> Decimal:
    """Parse a currency amount (two decimals by convention)."""
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field_name} must be {'non-negative' if allow_zero else 'greater than zero'}")
    return amount


def optional_money(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_money(value, field_name)


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid") from None
    if number <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return number


_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def parse_bool(value: Any, field_name: str) -> bool:
    """JSON booleans, 0/1, or their usual string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValidationError(f"{field_name} must be true or false")
