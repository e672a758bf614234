from __future__ import annotations

from decimal import Decimal

from ...common.money import to_money
from .base import CancellationStrategy, RefundDecision


class FullRefundStrategy(CancellationStrategy):
    def decide(self, *, price: Decimal) -> RefundDecision:
        return RefundDecision(refund=to_money(price), retained_fee=to_money(0), note="Full refund")
