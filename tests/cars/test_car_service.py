from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from src.car_rental.car_rental.cars.model import CarDetails
from src.car_rental.car_rental.core.enums import CarStatus
from src.car_rental.car_rental.core.exceptions import NotFoundError, ValidationError
from src.car_rental.car_rental.reservations.model import ReservationRequest


def _details(**overrides) -> CarDetails:
    base = CarDetails(
        make="Skoda",
        model="Octavia",
        body_style="ESTATE",
        year_of_manufacture=2020,
        colour="grey",
        mileage=72000.0,
        status=CarStatus.AVAILABLE,
        price=Decimal("120.00"),
    )
    return replace(base, **overrides)


def test_add_and_get_car(world):
    service = world.container.car_service
    car = service.add_car(_details(make="  Skoda "), branch_id=world.branch_a)

    assert car.make == "Skoda"
    assert service.get_car(car.car_id) == car
    assert service.list_cars() == [car]


@pytest.mark.parametrize("price", ["0.99", "10000.01"])
def test_price_out_of_bounds(world, price):
    with pytest.raises(ValidationError):
        world.container.car_service.add_car(_details(price=Decimal(price)))


def test_add_car_to_unknown_branch(world):
    with pytest.raises(NotFoundError):
        world.container.car_service.add_car(_details(), branch_id=999)


def test_edit_keeps_branch_when_not_given(world):
    service = world.container.car_service
    car = service.add_car(_details(), branch_id=world.branch_b)

    edited = service.edit_car(car.car_id, _details(colour="black"))

    assert edited.colour == "black"
    assert edited.branch_id == world.branch_b


def test_get_unknown_car(world):
    with pytest.raises(NotFoundError, match="There is no car with selected id"):
        world.container.car_service.get_car(5)


def test_update_mileage_price_and_status(world):
    service = world.container.car_service
    car = service.add_car(_details())

    car = service.update_mileage_and_price(car.car_id, mileage=80000.0, price=Decimal("110.00"))
    assert (car.mileage, car.price) == (80000.0, Decimal("110.00"))

    assert service.update_status(car.car_id, "unavailable").status == CarStatus.UNAVAILABLE
    with pytest.raises(ValidationError):
        service.update_status(car.car_id, "broken")


def test_status_on_date_counts_both_ends_of_a_reservation(world):
    car_id = world.add_car()
    client_id = world.add_client()
    world.container.reservation_service.create(
        ReservationRequest(client_id, car_id, date(2024, 3, 10), date(2024, 3, 12), world.branch_a, world.branch_a)
    )
    service = world.container.car_service

    assert service.status_on_date(car_id, date(2024, 3, 10)) == CarStatus.RENTED
    assert service.status_on_date(car_id, date(2024, 3, 12)) == CarStatus.RENTED
    assert service.status_on_date(car_id, date(2024, 3, 13)) == CarStatus.AVAILABLE


def test_delete_car_cascades_in_order(world):
    car_id = world.add_car()
    client_id = world.add_client()
    r = world.container.reservation_service.create(
        ReservationRequest(client_id, car_id, date(2024, 3, 10), date(2024, 3, 12), world.branch_a, world.branch_a)
    )
    world.rents.create(employee_id=None, reservation_id=r.reservation_id, rent_date=date(2024, 3, 10), comments=None)

    world.container.car_service.delete_car(car_id)

    assert world.cars.items == {}
    assert world.reservations.items == {}
    assert world.rents.items == {}
    assert world.cascade_log == [f"rent:{r.reservation_id}", f"return:{r.reservation_id}"]


def test_delete_unknown_car(world):
    with pytest.raises(NotFoundError):
        world.container.car_service.delete_car(1)
