from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Protocol, Union

from ..core.enums import Role, UserKind


class Authenticatable(Protocol):
    """Capability shared by every account kind."""

    @property
    def user_id(self) -> int: ...

    @property
    def login(self) -> str: ...

    @property
    def password_hash(self) -> str: ...

    @property
    def roles(self) -> FrozenSet[Role]: ...

    @property
    def kind(self) -> UserKind: ...


@dataclass(frozen=True)
class Employee:
    """Domain entity: staff account.

    Plain data object; ids of related rows only, no DB access.
    """

    user_id: int
    login: str
    password_hash: str
    name: str
    surname: str
    position: Optional[str]
    branch_id: Optional[int]
    roles: FrozenSet[Role] = frozenset({Role.USER})

    @property
    def kind(self) -> UserKind:
        return UserKind.EMPLOYEE


@dataclass(frozen=True)
class Client:
    user_id: int
    login: str
    password_hash: str
    name: str
    surname: str
    email: Optional[str]
    address: Optional[str]
    branch_id: Optional[int]
    roles: FrozenSet[Role] = frozenset({Role.USER})

    @property
    def kind(self) -> UserKind:
        return UserKind.CLIENT


UserAccount = Union[Employee, Client]


@dataclass(frozen=True)
class AuthenticatedUser:
    """What the security filter stores on ``flask.g`` after HTTP Basic login."""

    user_id: int
    login: str
    kind: UserKind
    roles: FrozenSet[Role]

    @classmethod
    def of(cls, account: Authenticatable) -> "AuthenticatedUser":
        return cls(user_id=account.user_id, login=account.login, kind=account.kind, roles=frozenset(account.roles))

    def has_role(self, role: Role) -> bool:
        return role in self.roles
