from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import CarStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, lock_clause, normalize_mysql_decimal, optional_int
from .model import Car, CarDetails
from .repository import CarRepository

_COLUMNS = """
    car_id, make, model, body_style, year_of_manufacture, colour, mileage, status, price, branch_id
"""


def _to_car(row: Dict[str, Any]) -> Car:
    return Car(
        car_id=int(row["car_id"]),
        make=row["make"],
        model=row["model"],
        body_style=row.get("body_style"),
        year_of_manufacture=int(row["year_of_manufacture"]),
        colour=row.get("colour"),
        mileage=float(row.get("mileage") or 0),
        status=CarStatus(row["status"]),
        price=normalize_mysql_decimal(row["price"]),
        branch_id=optional_int(row.get("branch_id")),
    )


class MySQLCarRepository(CarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, car_id: int, *, for_update: bool = False) -> Optional[Car]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM cars WHERE car_id=%s" + lock_clause(for_update), (int(car_id),))
            row = fetchone(cur)
            return _to_car(row) if row else None

    def list_all(self) -> Sequence[Car]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM cars ORDER BY car_id")
            return [_to_car(r) for r in fetchall(cur)]

    def list_by_branch(self, branch_id: int) -> Sequence[Car]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM cars WHERE branch_id=%s ORDER BY car_id", (int(branch_id),))
            return [_to_car(r) for r in fetchall(cur)]

    def create(self, *, details: CarDetails, branch_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO cars(make, model, body_style, year_of_manufacture, colour, mileage, status, price, branch_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    details.make,
                    details.model,
                    details.body_style,
                    int(details.year_of_manufacture),
                    details.colour,
                    float(details.mileage),
                    details.status.value,
                    details.price,
                    branch_id,
                ),
            )
            return int(cur.lastrowid)

    def update(self, *, car_id: int, details: CarDetails, branch_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE cars
                SET make=%s, model=%s, body_style=%s, year_of_manufacture=%s, colour=%s,
                    mileage=%s, status=%s, price=%s, branch_id=%s
                WHERE car_id=%s
                """,
                (
                    details.make,
                    details.model,
                    details.body_style,
                    int(details.year_of_manufacture),
                    details.colour,
                    float(details.mileage),
                    details.status.value,
                    details.price,
                    branch_id,
                    int(car_id),
                ),
            )
            return cur.rowcount > 0

    def update_mileage_and_price(self, *, car_id: int, mileage: float, price: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE cars SET mileage=%s, price=%s WHERE car_id=%s",
                (float(mileage), price, int(car_id)),
            )
            return cur.rowcount > 0

    def update_status(self, *, car_id: int, status: CarStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE cars SET status=%s WHERE car_id=%s", (status.value, int(car_id)))
            return cur.rowcount > 0

    def delete_by_id(self, car_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM cars WHERE car_id=%s", (int(car_id),))
            return cur.rowcount > 0
