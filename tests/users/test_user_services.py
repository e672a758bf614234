from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from werkzeug.security import check_password_hash

from src.car_rental.car_rental.core.enums import Role, UserKind
from src.car_rental.car_rental.core.exceptions import (
    AlreadyAssignedError,
    AuthenticationError,
    DuplicateLoginError,
    NotFoundError,
    ValidationError,
)
from src.car_rental.car_rental.reservations.model import ReservationRequest


def test_authenticate_employee_and_client(world):
    world.add_employee(login="boss", password="secret1", roles=frozenset({Role.ADMIN, Role.USER}))
    world.add_client(login="jan", password="secret2")
    auth = world.container.auth_service

    boss = auth.authenticate("boss", "secret1")
    assert boss.kind == UserKind.EMPLOYEE
    assert boss.has_role(Role.ADMIN)

    jan = auth.authenticate("jan", "secret2")
    assert jan.kind == UserKind.CLIENT
    assert not jan.has_role(Role.ADMIN)


@pytest.mark.parametrize("login,password", [("boss", "wrong!!"), ("nobody", "secret1"), ("", "")])
def test_authenticate_rejects_bad_credentials(world, login, password):
    world.add_employee(login="boss", password="secret1")
    with pytest.raises(AuthenticationError):
        world.container.auth_service.authenticate(login, password)


def test_authenticate_tolerates_placeholder_hash(world):
    world.clients.create(
        login="legacy", password_hash="CHANGE_ME", name="L", surname="L", email=None, address=None,
        roles=frozenset({Role.USER}),
    )
    with pytest.raises(AuthenticationError):
        world.container.auth_service.authenticate("legacy", "CHANGE_ME")


def test_add_employee_hashes_password_and_checks_login(world):
    service = world.container.employee_service
    employee = service.add_employee(login="anna", password="secret1", name="Anna", surname="Nowak")

    assert employee.password_hash != "secret1"
    assert check_password_hash(employee.password_hash, "secret1")
    assert employee.roles == frozenset({Role.USER})

    world.add_client(login="jan")
    with pytest.raises(DuplicateLoginError):
        service.add_employee(login="jan", password="secret1", name="X", surname="Y")


def test_add_employee_validates_input(world):
    service = world.container.employee_service
    with pytest.raises(ValidationError):
        service.add_employee(login="anna", password="123", name="Anna", surname="Nowak")
    with pytest.raises(ValidationError):
        service.add_employee(login="anna", password="secret1", name=" ", surname="Nowak")


def test_edit_employee_may_keep_its_own_login(world):
    service = world.container.employee_service
    employee_id = world.add_employee(login="anna")
    world.add_employee(login="piotr")

    edited = service.edit_employee(
        employee_id, login="anna", password="newpass", name="Anna", surname="Kowalska", position="Manager"
    )
    assert edited.surname == "Kowalska"
    assert check_password_hash(edited.password_hash, "newpass")

    with pytest.raises(DuplicateLoginError):
        service.edit_employee(employee_id, login="piotr", password="newpass", name="Anna", surname="K")


def test_delete_employee_detaches_rents_and_returns(world):
    employee_id = world.add_employee()
    rent_id = world.rents.create(employee_id=employee_id, reservation_id=1, rent_date=date(2024, 3, 1), comments=None)
    return_id = world.returns.create(
        employee_id=employee_id, reservation_id=1, return_date=date(2024, 3, 3), upcharge=Decimal("0.00"), comments=None
    )

    world.container.employee_service.delete_employee(employee_id)

    assert world.employees.get_by_id(employee_id) is None
    assert world.rents.get_by_id(rent_id).employee_id is None
    assert world.returns.get_by_id(return_id).employee_id is None

    with pytest.raises(NotFoundError):
        world.container.employee_service.delete_employee(employee_id)


def test_client_crud(world):
    service = world.container.client_service
    client = service.add_client(login="jan", password="secret1", name="Jan", surname="Kowalski", email=" jan@x.pl ")
    assert client.email == "jan@x.pl"
    assert service.list_clients() == [client]

    edited = service.edit_client(
        client.user_id, login="jan2", password="secret2", name="Jan", surname="Nowak", address="Gdansk"
    )
    assert (edited.login, edited.surname, edited.address) == ("jan2", "Nowak", "Gdansk")
    assert check_password_hash(edited.password_hash, "secret2")

    with pytest.raises(NotFoundError, match="No client under that ID!"):
        service.edit_client(999, login="x", password="secret1", name="X", surname="Y")


def test_remove_client_cascades_rents_returns_then_reservations(world):
    client_id = world.add_client()
    car_id = world.add_car()
    reservations = world.container.reservation_service
    r1 = reservations.create(ReservationRequest(client_id, car_id, date(2024, 3, 1), date(2024, 3, 3), 1, 1))
    r2 = reservations.create(ReservationRequest(client_id, car_id, date(2024, 3, 10), date(2024, 3, 12), 1, 1))
    world.rents.create(employee_id=None, reservation_id=r1.reservation_id, rent_date=date(2024, 3, 1), comments=None)

    world.container.client_service.remove_client(client_id)

    assert world.clients.get_by_id(client_id) is None
    assert world.reservations.items == {}
    assert world.rents.items == {}
    assert world.cascade_log == [
        f"rent:{r1.reservation_id}",
        f"rent:{r2.reservation_id}",
        f"return:{r1.reservation_id}",
        f"return:{r2.reservation_id}",
    ]


def test_remove_unknown_client(world):
    with pytest.raises(NotFoundError):
        world.container.client_service.remove_client(3)


def test_assign_and_unassign_branch(world):
    service = world.container.client_service
    client_id = world.add_client()

    assert service.assign_to_branch(client_id, world.branch_a).branch_id == world.branch_a
    with pytest.raises(AlreadyAssignedError):
        service.assign_to_branch(client_id, world.branch_b)

    with pytest.raises(NotFoundError):
        service.remove_from_branch(client_id, world.branch_b)

    service.remove_from_branch(client_id, world.branch_a)
    assert world.clients.get_by_id(client_id).branch_id is None


def test_assign_to_unknown_branch_or_client(world):
    service = world.container.client_service
    client_id = world.add_client()
    with pytest.raises(NotFoundError):
        service.assign_to_branch(client_id, 999)
    with pytest.raises(NotFoundError):
        service.assign_to_branch(999, world.branch_a)
