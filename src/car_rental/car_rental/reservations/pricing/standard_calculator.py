from __future__ import annotations

from datetime import date
from decimal import Decimal

from ...common.datetime_utils import days_between
from ...common.money import to_money
from ...core.constants import CROSS_LOCATION_CHARGE
from .base import PriceCalculator


class StandardPriceCalculator(PriceCalculator):
    """Daily rate times whole days, plus a flat charge for one-way rentals."""

    def __init__(self, cross_location_charge: Decimal = CROSS_LOCATION_CHARGE):
        self._cross_location_charge = to_money(cross_location_charge)

    def price(
        self,
        *,
        daily_rate: Decimal,
        start_date: date,
        end_date: date,
        start_branch_id: int,
        end_branch_id: int,
    ) -> Decimal:
        total = to_money(daily_rate) * days_between(start_date, end_date)
        if start_branch_id != end_branch_id:
            total += self._cross_location_charge
        return to_money(total)
