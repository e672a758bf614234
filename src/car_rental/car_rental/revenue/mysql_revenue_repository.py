from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import RevenueReason
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, lock_clause, normalize_mysql_decimal, optional_int
from .model import Revenue, RevenueDelta, RevenueEntry
from .repository import RevenueRepository


class MySQLRevenueRepository(RevenueRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, revenue_id: int, *, for_update: bool = False) -> Optional[Revenue]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT revenue_id, total_amount FROM revenue WHERE revenue_id=%s" + lock_clause(for_update),
                (int(revenue_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Revenue(revenue_id=int(row["revenue_id"]), total_amount=normalize_mysql_decimal(row["total_amount"]))

    def create(self, *, total_amount: Decimal) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO revenue(total_amount) VALUES(%s)", (total_amount,))
            return int(cur.lastrowid)

    def save_total(self, *, revenue_id: int, total_amount: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE revenue SET total_amount=%s WHERE revenue_id=%s",
                (total_amount, int(revenue_id)),
            )
            return cur.rowcount > 0

    def record_entry(self, delta: RevenueDelta) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO revenue_entries(revenue_id, amount, reason, reservation_id)
                VALUES(%s,%s,%s,%s)
                """,
                (int(delta.revenue_id), delta.amount, delta.reason.value, delta.reservation_id),
            )
            return int(cur.lastrowid)

    def list_entries(self, revenue_id: int) -> Sequence[RevenueEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, revenue_id, amount, reason, reservation_id, created_at
                FROM revenue_entries
                WHERE revenue_id=%s
                ORDER BY entry_id
                """,
                (int(revenue_id),),
            )
            return [
                RevenueEntry(
                    entry_id=int(r["entry_id"]),
                    revenue_id=int(r["revenue_id"]),
                    amount=normalize_mysql_decimal(r["amount"]),
                    reason=RevenueReason(r["reason"]),
                    reservation_id=optional_int(r.get("reservation_id")),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def delete_by_id(self, revenue_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM revenue_entries WHERE revenue_id=%s", (int(revenue_id),))
            cur.execute("DELETE FROM revenue WHERE revenue_id=%s", (int(revenue_id),))
            return cur.rowcount > 0
