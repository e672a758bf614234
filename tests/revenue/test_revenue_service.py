from __future__ import annotations

from decimal import Decimal

import pytest

from src.car_rental.car_rental.cars.model import Car
from src.car_rental.car_rental.core.enums import CarStatus, RevenueReason
from src.car_rental.car_rental.core.exceptions import NotFoundError
from src.car_rental.car_rental.revenue.lookup import revenue_id_for_car


def test_apply_delta_accumulates_and_records_ledger(world):
    service = world.container.revenue_service
    revenue_id = world.branches.get_by_id(world.branch_a).revenue_id

    service.apply_delta(revenue_id, Decimal("200.00"), reason=RevenueReason.RESERVATION_CREATED, reservation_id=1)
    total = service.apply_delta(revenue_id, Decimal("-50.5"), reason=RevenueReason.RESERVATION_CANCELLED)

    assert total.total_amount == Decimal("149.50")
    assert service.get_revenue(revenue_id).total_amount == Decimal("149.50")
    assert [e.amount for e in service.list_entries(revenue_id)] == [Decimal("200.00"), Decimal("-50.50")]


def test_total_may_go_negative(world):
    service = world.container.revenue_service
    revenue_id = world.branches.get_by_id(world.branch_b).revenue_id

    total = service.apply_delta(revenue_id, Decimal("-10.00"), reason=RevenueReason.RESERVATION_CANCELLED)

    assert total.total_amount == Decimal("-10.00")


def test_float_amounts_do_not_drift(world):
    service = world.container.revenue_service
    revenue_id = service.open_account()
    for _ in range(10):
        service.apply_delta(revenue_id, 0.1, reason=RevenueReason.RETURN_UPCHARGE)

    assert service.get_revenue(revenue_id).total_amount == Decimal("1.00")


def test_unknown_revenue(world):
    with pytest.raises(NotFoundError):
        world.container.revenue_service.apply_delta(99, Decimal("1.00"), reason=RevenueReason.RETURN_UPCHARGE)


def _car(branch_id):
    return Car(1, "Fiat", "500", None, 2020, None, 0.0, CarStatus.AVAILABLE, Decimal("80.00"), branch_id)


def test_revenue_for_car_follows_owning_branch(world):
    expected = world.branches.get_by_id(world.branch_b).revenue_id
    assert revenue_id_for_car(_car(world.branch_b), world.branches) == expected


def test_revenue_for_unassigned_car(world):
    with pytest.raises(NotFoundError):
        revenue_id_for_car(_car(None), world.branches)
