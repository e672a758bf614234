from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..common.money import to_money
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    bound = conn_factory.current()
    if bound is not None:
        # Commit/rollback belong to the enclosing transaction; buffered so the
        # shared connection never holds unread rows between queries.
        cur = bound.cursor(dictionary=dictionary, buffered=True)
        try:
            yield bound, cur
        finally:
            cur.close()
        return

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
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def lock_clause(for_update: bool) -> str:
    return " FOR UPDATE" if for_update else ""


def normalize_mysql_decimal(value: Any) -> Decimal:
    """Normalize DECIMAL columns across connector implementations.

    mysql-connector returns DECIMAL as decimal.Decimal, but the pure-python
    driver may hand back strings or floats for computed columns.
    """

    if value is None:
        return to_money(0)
    return to_money(value)


def optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None
