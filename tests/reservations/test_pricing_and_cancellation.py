from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.car_rental.car_rental.rents.model import Rent
from src.car_rental.car_rental.reservations.cancellation.factory import CancellationStrategyFactory
from src.car_rental.car_rental.reservations.cancellation.full_refund_strategy import FullRefundStrategy
from src.car_rental.car_rental.reservations.cancellation.late_fee_strategy import LateCancellationStrategy
from src.car_rental.car_rental.reservations.pricing.standard_calculator import StandardPriceCalculator


def test_price_is_rate_times_days():
    calc = StandardPriceCalculator()
    price = calc.price(
        daily_rate=Decimal("100.00"),
        start_date=date(2024, 3, 10),
        end_date=date(2024, 3, 12),
        start_branch_id=1,
        end_branch_id=1,
    )
    assert price == Decimal("200.00")


def test_one_way_rental_adds_cross_location_charge():
    calc = StandardPriceCalculator()
    price = calc.price(
        daily_rate=Decimal("99.99"),
        start_date=date(2024, 3, 10),
        end_date=date(2024, 3, 13),
        start_branch_id=1,
        end_branch_id=2,
    )
    assert price == Decimal("399.97")


def _rent(on: date) -> Rent:
    return Rent(rent_id=1, employee_id=1, reservation_id=1, rent_date=on)


def test_factory_picks_full_refund_without_rent():
    factory = CancellationStrategyFactory()
    assert isinstance(factory.for_reservation(rent=None, today=date(2024, 3, 1)), FullRefundStrategy)


def test_factory_picks_full_refund_well_before_rent_date():
    factory = CancellationStrategyFactory()
    strategy = factory.for_reservation(rent=_rent(date(2024, 3, 4)), today=date(2024, 3, 1))
    assert isinstance(strategy, FullRefundStrategy)


def test_factory_picks_late_fee_close_to_rent_date():
    factory = CancellationStrategyFactory()
    strategy = factory.for_reservation(rent=_rent(date(2024, 3, 3)), today=date(2024, 3, 1))
    assert isinstance(strategy, LateCancellationStrategy)


def test_factory_picks_late_fee_once_the_rent_date_has_passed():
    factory = CancellationStrategyFactory()
    strategy = factory.for_reservation(rent=_rent(date(2024, 2, 20)), today=date(2024, 3, 1))
    assert isinstance(strategy, LateCancellationStrategy)


def test_late_cancellation_keeps_twenty_percent():
    decision = LateCancellationStrategy().decide(price=Decimal("333.33"))
    assert decision.refund == Decimal("266.66")
    assert decision.retained_fee == Decimal("66.67")
    assert decision.refund + decision.retained_fee == Decimal("333.33")
