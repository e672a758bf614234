from __future__ import annotations

from typing import FrozenSet, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Client, Employee, UserAccount


class UserRepository(Protocol):
    """Login-level access across every account kind.

    Note (DIP): services depend on these interfaces, not on a concrete database.
    """

    def get_by_login(self, login: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def login_exists(self, login: str, *, exclude_user_id: Optional[int] = None) -> bool:
        raise NotImplementedError


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError


class ClientRepository(Protocol):
    def get_by_id(self, client_id: int) -> Optional[Client]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Client]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def set_branch(self, *, client_id: int, branch_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, client_id: int) -> bool:
        raise NotImplementedError
