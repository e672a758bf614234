from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Revenue, RevenueDelta, RevenueEntry


class RevenueRepository(Protocol):
    def get_by_id(self, revenue_id: int, *, for_update: bool = False) -> Optional[Revenue]:
        raise NotImplementedError

    def create(self, *, total_amount: Decimal) -> int:
        raise NotImplementedError

    def save_total(self, *, revenue_id: int, total_amount: Decimal) -> bool:
        raise NotImplementedError

    def record_entry(self, delta: RevenueDelta) -> int:
        raise NotImplementedError

    def list_entries(self, revenue_id: int) -> Sequence[RevenueEntry]:
        raise NotImplementedError

    def delete_by_id(self, revenue_id: int) -> bool:
        raise NotImplementedError
