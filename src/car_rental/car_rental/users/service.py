from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Callable, ContextManager, FrozenSet, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..branches.repository import BranchRepository
from ..common.validators import optional_strip, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AlreadyAssignedError,
    AuthenticationError,
    DuplicateLoginError,
    NotFoundError,
)
from ..rents.repository import RentRepository, ReturnRepository
from ..reservations.repository import ReservationRepository
from .model import AuthenticatedUser, Client, Employee
from .repository import ClientRepository, EmployeeRepository, UserRepository

logger = logging.getLogger(__name__)


def check_duplicate_login(users: UserRepository, login: str, *, exclude_user_id: Optional[int] = None) -> None:
    if users.login_exists(login, exclude_user_id=exclude_user_id):
        raise DuplicateLoginError(f"Login {login!r} is already taken")


def _credentials(login: str, password: str) -> tuple:
    login = require_non_empty(login, "Login")
    require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
    return login, generate_password_hash(password)


class AuthService:
    """Use case: authenticate an account (HTTP Basic)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, login: str, password: str) -> AuthenticatedUser:
        user = self._users.get_by_login(login or "")
        if not user:
            raise AuthenticationError("Invalid login or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid login or password")

        return AuthenticatedUser.of(user)


class EmployeeService:
    """Use case: manage staff accounts (admin)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        users: UserRepository,
        branches: BranchRepository,
        rents: RentRepository,
        returns: ReturnRepository,
        *,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._employees = employees
        self._users = users
        self._branches = branches
        self._rents = rents
        self._returns = returns
        self._tx = transaction

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"No employee under ID #{employee_id}")
        return employee

    def add_employee(
        self,
        *,
        login: str,
        password: str,
        name: str,
        surname: str,
        position: Optional[str] = None,
        branch_id: Optional[int] = None,
        roles: FrozenSet[Role] = frozenset({Role.USER}),
    ) -> Employee:
        login, password_hash = _credentials(login, password)
        name = require_non_empty(name, "Name")
        surname = require_non_empty(surname, "Surname")

        with self._tx():
            check_duplicate_login(self._users, login)
            if branch_id is not None and not self._branches.get_by_id(branch_id):
                raise NotFoundError(f"No branch under ID #{branch_id}")
            employee_id = self._employees.create(
                login=login,
                password_hash=password_hash,
                name=name,
                surname=surname,
                position=optional_strip(position),
                branch_id=branch_id,
                roles=frozenset(roles) or frozenset({Role.USER}),
            )
        logger.info("employee #%s added (%s)", employee_id, login)
        return self.get_employee(employee_id)

    def edit_employee(
        self,
        employee_id: int,
        *,
        login: str,
        password: str,
        name: str,
        surname: str,
        position: Optional[str] = None,
    ) -> Employee:
        login, password_hash = _credentials(login, password)
        name = require_non_empty(name, "Name")
        surname = require_non_empty(surname, "Surname")

        with self._tx():
            employee = self.get_employee(employee_id)
            check_duplicate_login(self._users, login, exclude_user_id=employee.user_id)
            self._employees.update(
                employee_id=employee.user_id,
                login=login,
                password_hash=password_hash,
                name=name,
                surname=surname,
                position=optional_strip(position),
            )
        return self.get_employee(employee_id)

    def delete_employee(self, employee_id: int) -> None:
        """Delete the account; rents and returns it handled stay, without an employee."""
        with self._tx():
            employee = self.get_employee(employee_id)
            rents = self._rents.detach_employee(employee.user_id)
            returns = self._returns.detach_employee(employee.user_id)
            self._employees.delete_by_id(employee.user_id)
        logger.info("employee #%s deleted (detached %d rent(s), %d return(s))", employee.user_id, rents, returns)


class ClientService:
    """Use case: manage client accounts and their branch assignment."""

    def __init__(
        self,
        clients: ClientRepository,
        users: UserRepository,
        branches: BranchRepository,
        reservations: ReservationRepository,
        rents: RentRepository,
        returns: ReturnRepository,
        *,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._clients = clients
        self._users = users
        self._branches = branches
        self._reservations = reservations
        self._rents = rents
        self._returns = returns
        self._tx = transaction

    def get_client(self, client_id: int) -> Client:
        client = self._clients.get_by_id(int(client_id))
        if not client:
            raise NotFoundError("Client not found")
        return client

    def list_clients(self) -> Sequence[Client]:
        return self._clients.list_all()

    def add_client(
        self,
        *,
        login: str,
        password: str,
        name: str,
        surname: str,
        email: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Client:
        login, password_hash = _credentials(login, password)
        with self._tx():
            check_duplicate_login(self._users, login)
            client_id = self._clients.create(
                login=login,
                password_hash=password_hash,
                name=require_non_empty(name, "Name"),
                surname=require_non_empty(surname, "Surname"),
                email=optional_strip(email),
                address=optional_strip(address),
                roles=frozenset({Role.USER}),
            )
        logger.info("client #%s added (%s)", client_id, login)
        return self.get_client(client_id)

    def edit_client(
        self,
        client_id: int,
        *,
        login: str,
        password: str,
        name: str,
        surname: str,
        email: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Client:
        login, password_hash = _credentials(login, password)
        with self._tx():
            client = self._clients.get_by_id(int(client_id))
            if not client:
                raise NotFoundError("No client under that ID!")
            check_duplicate_login(self._users, login, exclude_user_id=client.user_id)
            self._clients.update(
                client_id=client.user_id,
                login=login,
                password_hash=password_hash,
                name=require_non_empty(name, "Name"),
                surname=require_non_empty(surname, "Surname"),
                email=optional_strip(email),
                address=optional_strip(address),
            )
        return self.get_client(client_id)

    def remove_client(self, client_id: int) -> None:
        """Delete a client with every reservation it holds.

        Rents go first, then returns, then reservations and finally the client,
        so no foreign key is ever left dangling.
        """
        with self._tx():
            client = self._clients.get_by_id(int(client_id))
            if not client:
                raise NotFoundError("No client under that ID!")

            reservations = self._reservations.list_for_client(client.user_id)
            for r in reservations:
                self._rents.delete_for_reservation(r.reservation_id)
            for r in reservations:
                self._returns.delete_for_reservation(r.reservation_id)
            for r in reservations:
                self._reservations.delete_by_id(r.reservation_id)
            self._clients.delete_by_id(client.user_id)
        logger.info("client #%s removed with %d reservation(s)", client.user_id, len(reservations))

    def assign_to_branch(self, client_id: int, branch_id: int) -> Client:
        with self._tx():
            client = self._clients.get_by_id(int(client_id))
            if not client:
                raise NotFoundError(f"No client under ID #{client_id}")
            if client.branch_id is not None:
                raise AlreadyAssignedError("This client is already assigned to existing branch!")
            if not self._branches.get_by_id(int(branch_id)):
                raise NotFoundError(f"No branch under ID #{branch_id}")
            self._clients.set_branch(client_id=client.user_id, branch_id=int(branch_id))
        return self.get_client(client_id)

    def remove_from_branch(self, client_id: int, branch_id: int) -> None:
        with self._tx():
            if not self._branches.get_by_id(int(branch_id)):
                raise NotFoundError(f"No branch under ID #{branch_id}")
            client = self._clients.get_by_id(int(client_id))
            if not client or client.branch_id != int(branch_id):
                raise NotFoundError(
                    f"No client under ID #{client_id} is assigned to branch under ID #{branch_id}"
                )
            self._clients.set_branch(client_id=client.user_id, branch_id=None)
