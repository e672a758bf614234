from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_decimal, optional_int
from .model import Rent, Returnal
from .repository import RentRepository, ReturnRepository


def _to_rent(row: Dict[str, Any]) -> Rent:
    return Rent(
        rent_id=int(row["rent_id"]),
        employee_id=optional_int(row.get("employee_id")),
        reservation_id=int(row["reservation_id"]),
        rent_date=row["rent_date"],
        comments=row.get("comments"),
    )


def _to_returnal(row: Dict[str, Any]) -> Returnal:
    return Returnal(
        return_id=int(row["return_id"]),
        employee_id=optional_int(row.get("employee_id")),
        reservation_id=int(row["reservation_id"]),
        return_date=row["return_date"],
        upcharge=normalize_mysql_decimal(row.get("upcharge")),
        comments=row.get("comments"),
    )


class MySQLRentRepository(RentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, rent_id: int) -> Optional[Rent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT rent_id, employee_id, reservation_id, rent_date, comments FROM rent WHERE rent_id=%s",
                (int(rent_id),),
            )
            row = fetchone(cur)
            return _to_rent(row) if row else None

    def list_all(self) -> Sequence[Rent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT rent_id, employee_id, reservation_id, rent_date, comments FROM rent ORDER BY rent_id")
            return [_to_rent(r) for r in fetchall(cur)]

    def get_for_reservation(self, reservation_id: int) -> Optional[Rent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT rent_id, employee_id, reservation_id, rent_date, comments FROM rent WHERE reservation_id=%s",
                (int(reservation_id),),
            )
            row = fetchone(cur)
            return _to_rent(row) if row else None

    def create(self, *, employee_id: int, reservation_id: int, rent_date: date, comments: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO rent(employee_id, reservation_id, rent_date, comments) VALUES(%s,%s,%s,%s)",
                (int(employee_id), int(reservation_id), rent_date, comments),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        rent_id: int,
        employee_id: int,
        reservation_id: int,
        rent_date: date,
        comments: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE rent SET employee_id=%s, reservation_id=%s, rent_date=%s, comments=%s
                WHERE rent_id=%s
                """,
                (int(employee_id), int(reservation_id), rent_date, comments, int(rent_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, rent_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM rent WHERE rent_id=%s", (int(rent_id),))
            return cur.rowcount > 0

    def delete_for_reservation(self, reservation_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM rent WHERE reservation_id=%s", (int(reservation_id),))
            return int(cur.rowcount)

    def detach_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE rent SET employee_id=NULL WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)


class MySQLReturnRepository(ReturnRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, return_id: int) -> Optional[Returnal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT return_id, employee_id, reservation_id, return_date, upcharge, comments
                FROM returnals WHERE return_id=%s
                """,
                (int(return_id),),
            )
            row = fetchone(cur)
            return _to_returnal(row) if row else None

    def list_all(self) -> Sequence[Returnal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT return_id, employee_id, reservation_id, return_date, upcharge, comments
                FROM returnals ORDER BY return_id
                """
            )
            return [_to_returnal(r) for r in fetchall(cur)]

    def get_for_reservation(self, reservation_id: int) -> Optional[Returnal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT return_id, employee_id, reservation_id, return_date, upcharge, comments
                FROM returnals WHERE reservation_id=%s
                """,
                (int(reservation_id),),
            )
            row = fetchone(cur)
            return _to_returnal(row) if row else None

    def create(
        self,
        *,
        employee_id: int,
        reservation_id: int,
        return_date: date,
        upcharge: Decimal,
        comments: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO returnals(employee_id, reservation_id, return_date, upcharge, comments)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), int(reservation_id), return_date, upcharge, comments),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        return_id: int,
        employee_id: int,
        reservation_id: int,
        return_date: date,
        upcharge: Decimal,
        comments: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE returnals
                SET employee_id=%s, reservation_id=%s, return_date=%s, upcharge=%s, comments=%s
                WHERE return_id=%s
                """,
                (int(employee_id), int(reservation_id), return_date, upcharge, comments, int(return_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, return_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM returnals WHERE return_id=%s", (int(return_id),))
            return cur.rowcount > 0

    def delete_for_reservation(self, reservation_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM returnals WHERE reservation_id=%s", (int(reservation_id),))
            return int(cur.rowcount)

    def detach_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE returnals SET employee_id=NULL WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)
