from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_BUSINESS_TIMEZONE
from ..core.exceptions import ValidationError

InstantLike = Union[str, datetime, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_wall_time(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) wall-clock time."""
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(str(value).strip(), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time: {value!r}")


def parse_instant(value: InstantLike) -> Optional[datetime]:
    """Normalize an ISO-8601 string or datetime into an aware UTC instant.

    Blank/None -> None. Naive values are taken as UTC (that's how the store
    keeps them). A trailing 'Z' is accepted.
    """

    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}") from None
    if not isinstance(value, datetime):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def business_zone(name: str | None = None) -> ZoneInfo:
    return ZoneInfo(name or DEFAULT_BUSINESS_TIMEZONE)


def business_date(instant: datetime, tz_name: str | None = None) -> date:
    """Civil date of an instant at the business location (the shift date)."""
    return parse_instant(instant).astimezone(business_zone(tz_name)).date()


def at_local_time(day: date, at: time, tz_name: str | None = None) -> datetime:
    """Instant for a wall-clock time on a civil date at the business location."""
    local = datetime.combine(day, at, tzinfo=business_zone(tz_name))
    return local.astimezone(timezone.utc)


def format_local(instant: Optional[datetime], tz_name: str | None = None, *, fmt: str = "%m/%d/%Y, %I:%M:%S %p") -> str:
    """Display helper. Only presentation code should call this."""
    if instant is None:
        return ""
    return parse_instant(instant).astimezone(business_zone(tz_name)).strftime(fmt)


def to_naive_utc(instant: Optional[datetime]) -> Optional[datetime]:
    """MySQL DATETIME has no zone; the store keeps UTC wall time."""
    if instant is None:
        return None
    return parse_instant(instant).replace(tzinfo=None)
