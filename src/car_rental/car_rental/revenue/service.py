from __future__ import annotations

import logging
from contextlib import nullcontext
from decimal import Decimal
from typing import Callable, ContextManager, Optional, Sequence

from ..common.money import to_money
from ..core.enums import RevenueReason
from ..core.exceptions import NotFoundError
from .model import Revenue, RevenueDelta, RevenueEntry
from .repository import RevenueRepository

logger = logging.getLogger(__name__)


class RevenueService:
    """Applies signed deltas to branch revenue totals.

    Negative totals are allowed; refunds may push a branch below zero.
    """

    def __init__(self, revenues: RevenueRepository, *, transaction: Callable[[], ContextManager] = nullcontext):
        self._revenues = revenues
        self._tx = transaction

    def apply(self, delta: RevenueDelta) -> Revenue:
        with self._tx():
            revenue = self._revenues.get_by_id(delta.revenue_id, for_update=True)
            if not revenue:
                raise NotFoundError(f"No revenue under ID #{delta.revenue_id}")

            amount = to_money(delta.amount)
            new_total = to_money(revenue.total_amount + amount)
            self._revenues.save_total(revenue_id=revenue.revenue_id, total_amount=new_total)
            self._revenues.record_entry(
                RevenueDelta(
                    revenue_id=revenue.revenue_id,
                    amount=amount,
                    reason=delta.reason,
                    reservation_id=delta.reservation_id,
                )
            )

        logger.info(
            "revenue #%s %+.2f (%s) -> %s", revenue.revenue_id, amount, delta.reason.value, new_total
        )
        return Revenue(revenue_id=revenue.revenue_id, total_amount=new_total)

    def apply_delta(
        self,
        revenue_id: int,
        amount: Decimal,
        *,
        reason: RevenueReason,
        reservation_id: Optional[int] = None,
    ) -> Revenue:
        return self.apply(
            RevenueDelta(revenue_id=int(revenue_id), amount=amount, reason=reason, reservation_id=reservation_id)
        )

    def open_account(self) -> int:
        return self._revenues.create(total_amount=to_money(0))

    def get_revenue(self, revenue_id: int) -> Revenue:
        revenue = self._revenues.get_by_id(int(revenue_id))
        if not revenue:
            raise NotFoundError(f"No revenue under ID #{revenue_id}")
        return revenue

    def list_entries(self, revenue_id: int) -> Sequence[RevenueEntry]:
        self.get_revenue(revenue_id)
        return self._revenues.list_entries(int(revenue_id))

    def close_account(self, revenue_id: int) -> None:
        """Drop an account together with its ledger."""
        self._revenues.delete_by_id(int(revenue_id))
