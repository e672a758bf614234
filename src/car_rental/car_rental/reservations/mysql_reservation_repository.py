from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_decimal
from .model import Reservation
from .repository import ReservationRepository

_COLUMNS = "reservation_id, client_id, car_id, start_date, end_date, price, start_branch_id, end_branch_id"


def _to_reservation(row: Dict[str, Any]) -> Reservation:
    return Reservation(
        reservation_id=int(row["reservation_id"]),
        client_id=int(row["client_id"]),
        car_id=int(row["car_id"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        price=normalize_mysql_decimal(row["price"]),
        start_branch_id=int(row["start_branch_id"]),
        end_branch_id=int(row["end_branch_id"]),
    )


class MySQLReservationRepository(ReservationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reservation WHERE reservation_id=%s", (int(reservation_id),))
            row = fetchone(cur)
            return _to_reservation(row) if row else None

    def list_all(self) -> Sequence[Reservation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reservation ORDER BY reservation_id")
            return [_to_reservation(r) for r in fetchall(cur)]

    def list_for_car(self, car_id: int) -> Sequence[Reservation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reservation WHERE car_id=%s ORDER BY start_date",
                (int(car_id),),
            )
            return [_to_reservation(r) for r in fetchall(cur)]

    def list_for_client(self, client_id: int) -> Sequence[Reservation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reservation WHERE client_id=%s ORDER BY start_date",
                (int(client_id),),
            )
            return [_to_reservation(r) for r in fetchall(cur)]

    def exists_for_branch(self, branch_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 FROM reservation WHERE start_branch_id=%s OR end_branch_id=%s LIMIT 1",
                (int(branch_id), int(branch_id)),
            )
            return fetchone(cur) is not None

    def create(
        self,
        *,
        client_id: int,
        car_id: int,
        start_date: date,
        end_date: date,
        price: Decimal,
        start_branch_id: int,
        end_branch_id: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO reservation(client_id, car_id, start_date, end_date, price, start_branch_id, end_branch_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(client_id), int(car_id), start_date, end_date, price, int(start_branch_id), int(end_branch_id)),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        reservation_id: int,
        client_id: int,
        car_id: int,
        start_date: date,
        end_date: date,
        price: Decimal,
        start_branch_id: int,
        end_branch_id: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE reservation
                SET client_id=%s, car_id=%s, start_date=%s, end_date=%s, price=%s,
                    start_branch_id=%s, end_branch_id=%s
                WHERE reservation_id=%s
                """,
                (
                    int(client_id),
                    int(car_id),
                    start_date,
                    end_date,
                    price,
                    int(start_branch_id),
                    int(end_branch_id),
                    int(reservation_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, reservation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM reservation WHERE reservation_id=%s", (int(reservation_id),))
            return cur.rowcount > 0
