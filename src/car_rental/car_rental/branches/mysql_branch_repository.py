from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import Branch, CarRental
from .repository import BranchRepository, CarRentalRepository


def _to_branch(row: Dict[str, Any]) -> Branch:
    return Branch(
        branch_id=int(row["branch_id"]),
        name=row["name"],
        address=row.get("address"),
        car_rental_id=int(row["car_rental_id"]),
        revenue_id=optional_int(row.get("revenue_id")),
    )


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT branch_id, name, address, car_rental_id, revenue_id FROM branch WHERE branch_id=%s",
                (int(branch_id),),
            )
            row = fetchone(cur)
            return _to_branch(row) if row else None

    def list_all(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT branch_id, name, address, car_rental_id, revenue_id FROM branch ORDER BY branch_id")
            return [_to_branch(r) for r in fetchall(cur)]

    def create(self, *, name: str, address: Optional[str], car_rental_id: int, revenue_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO branch(name, address, car_rental_id, revenue_id) VALUES(%s,%s,%s,%s)",
                (name, address, int(car_rental_id), int(revenue_id)),
            )
            return int(cur.lastrowid)

    def update(self, *, branch_id: int, name: str, address: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE branch SET name=%s, address=%s WHERE branch_id=%s",
                (name, address, int(branch_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, branch_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM branch WHERE branch_id=%s", (int(branch_id),))
            return cur.rowcount > 0


class MySQLCarRentalRepository(CarRentalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, car_rental_id: int) -> Optional[CarRental]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT car_rental_id, name, internet_domain, address, owner, logotype
                FROM car_rental
                WHERE car_rental_id=%s
                """,
                (int(car_rental_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return CarRental(
                car_rental_id=int(row["car_rental_id"]),
                name=row["name"],
                internet_domain=row.get("internet_domain"),
                address=row.get("address"),
                owner=row.get("owner"),
                logotype=row.get("logotype"),
            )

    def list_all(self) -> Sequence[CarRental]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT car_rental_id, name, internet_domain, address, owner, logotype FROM car_rental ORDER BY car_rental_id"
            )
            return [
                CarRental(
                    car_rental_id=int(r["car_rental_id"]),
                    name=r["name"],
                    internet_domain=r.get("internet_domain"),
                    address=r.get("address"),
                    owner=r.get("owner"),
                    logotype=r.get("logotype"),
                )
                for r in fetchall(cur)
            ]

    def create(
        self,
        *,
        name: str,
        internet_domain: Optional[str],
        address: Optional[str],
        owner: Optional[str],
        logotype: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO car_rental(name, internet_domain, address, owner, logotype)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, internet_domain, address, owner, logotype),
            )
            return int(cur.lastrowid)
