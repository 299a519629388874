from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from ..common.datetime_utils import parse_instant, to_naive_utc
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection per unit of work; commit on success, rollback on error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def in_clause(values: Sequence[Any]) -> str:
    """'%s,%s,...' for an IN (...) list."""
    return ",".join(["%s"] * len(values))


def read_instant(value: Any) -> Optional[datetime]:
    # DATETIME columns hold UTC wall time.
    return parse_instant(value)


def write_instant(value: Optional[datetime]) -> Optional[datetime]:
    return to_naive_utc(value)


def read_money(value: Any, *, default: Optional[Decimal] = None) -> Optional[Decimal]:
    if value is None:
        return default
    return Decimal(str(value))
