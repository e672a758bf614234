from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, Optional, Sequence

from ..core.enums import Role, UserKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import Client, Employee, UserAccount
from .repository import ClientRepository, EmployeeRepository, UserRepository

_COLUMNS = "user_id, kind, login, password_hash, name, surname, position, email, address, branch_id, roles"


def encode_roles(roles: Iterable[Role]) -> str:
    return ",".join(sorted(r.value for r in roles))


def decode_roles(value: Optional[str]) -> FrozenSet[Role]:
    return frozenset(Role(v) for v in (value or "").split(",") if v)


def _to_account(row: Dict[str, Any]) -> UserAccount:
    common = dict(
        user_id=int(row["user_id"]),
        login=row["login"],
        password_hash=row["password_hash"],
        name=row["name"],
        surname=row["surname"],
        branch_id=optional_int(row.get("branch_id")),
        roles=decode_roles(row.get("roles")),
    )
    if UserKind(row["kind"]) == UserKind.EMPLOYEE:
        return Employee(position=row.get("position"), **common)
    return Client(email=row.get("email"), address=row.get("address"), **common)


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_login(self, login: str) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE login=%s", (login,))
            row = fetchone(cur)
            return _to_account(row) if row else None

    def login_exists(self, login: str, *, exclude_user_id: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_user_id is None:
                cur.execute("SELECT 1 FROM users WHERE login=%s", (login,))
            else:
                cur.execute("SELECT 1 FROM users WHERE login=%s AND user_id<>%s", (login, int(exclude_user_id)))
            return fetchone(cur) is not None


class _MySQLAccountRepository:
    _kind: UserKind

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, user_id: int) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE user_id=%s AND kind=%s",
                (int(user_id), self._kind.value),
            )
            row = fetchone(cur)
            return _to_account(row) if row else None

    def _list(self) -> list:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE kind=%s ORDER BY user_id", (self._kind.value,))
            return [_to_account(r) for r in fetchall(cur)]

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s AND kind=%s", (int(user_id), self._kind.value))
            return cur.rowcount > 0


class MySQLEmployeeRepository(_MySQLAccountRepository, EmployeeRepository):
    _kind = UserKind.EMPLOYEE

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get(employee_id)

    def list_all(self) -> Sequence[Employee]:
        return self._list()

    def create(
        self,
        *,
        login: str,
        password_hash: str,
        name: str,
        surname: str,
        position: Optional[str],
        branch_id: Optional[int],
        roles: FrozenSet[Role],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(kind, login, password_hash, name, surname, position, branch_id, roles)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (self._kind.value, login, password_hash, name, surname, position, branch_id, encode_roles(roles)),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        login: str,
        password_hash: str,
        name: str,
        surname: str,
        position: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET login=%s, password_hash=%s, name=%s, surname=%s, position=%s
                WHERE user_id=%s AND kind=%s
                """,
                (login, password_hash, name, surname, position, int(employee_id), self._kind.value),
            )
            return cur.rowcount > 0


class MySQLClientRepository(_MySQLAccountRepository, ClientRepository):
    _kind = UserKind.CLIENT

    def get_by_id(self, client_id: int) -> Optional[Client]:
        return self._get(client_id)

    def list_all(self) -> Sequence[Client]:
        return self._list()

    def create(
        self,
        *,
        login: str,
        password_hash: str,
        name: str,
        surname: str,
        email: Optional[str],
        address: Optional[str],
        roles: FrozenSet[Role],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(kind, login, password_hash, name, surname, email, address, roles)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (self._kind.value, login, password_hash, name, surname, email, address, encode_roles(roles)),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        client_id: int,
        login: str,
        password_hash: str,
        name: str,
        surname: str,
        email: Optional[str],
        address: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET login=%s, password_hash=%s, name=%s, surname=%s, email=%s, address=%s
                WHERE user_id=%s AND kind=%s
                """,
                (login, password_hash, name, surname, email, address, int(client_id), self._kind.value),
            )
            return cur.rowcount > 0

    def set_branch(self, *, client_id: int, branch_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET branch_id=%s WHERE user_id=%s AND kind=%s",
                (branch_id, int(client_id), self._kind.value),
            )
            return cur.rowcount > 0
