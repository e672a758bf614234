from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal


class PriceCalculator(ABC):
    """Strategy interface: compute the price of a reservation."""

    @abstractmethod
    def price(
        self,
        *,
        daily_rate: Decimal,
        start_date: date,
        end_date: date,
        start_branch_id: int,
        end_branch_id: int,
    ) -> Decimal:
        raise NotImplementedError
