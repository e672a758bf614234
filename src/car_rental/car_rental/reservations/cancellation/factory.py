from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ...common.datetime_utils import days_between
from ...core.constants import FREE_CANCELLATION_DAYS, LATE_CANCELLATION_REFUND_RATE
from ...rents.model import Rent
from .base import CancellationStrategy
from .full_refund_strategy import FullRefundStrategy
from .late_fee_strategy import LateCancellationStrategy


@dataclass
class CancellationStrategyFactory:
    """Factory Pattern: choose the refund rule for a cancelled reservation."""

    free_cancellation_days: int = FREE_CANCELLATION_DAYS
    late_refund_rate: Decimal = field(default=LATE_CANCELLATION_REFUND_RATE)

    def for_reservation(self, *, rent: Optional[Rent], today: date) -> CancellationStrategy:
        if rent is None:
            return FullRefundStrategy()

        if days_between(today, rent.rent_date) > self.free_cancellation_days:
            return FullRefundStrategy()
        return LateCancellationStrategy(self.late_refund_rate)
