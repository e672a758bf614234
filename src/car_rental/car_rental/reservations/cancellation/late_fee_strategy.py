from __future__ import annotations

from decimal import Decimal

from ...common.money import to_money
from ...core.constants import LATE_CANCELLATION_REFUND_RATE
from .base import CancellationStrategy, RefundDecision


class LateCancellationStrategy(CancellationStrategy):
    def __init__(self, refund_rate: Decimal = LATE_CANCELLATION_REFUND_RATE):
        self._refund_rate = refund_rate

    def decide(self, *, price: Decimal) -> RefundDecision:
        price = to_money(price)
        refund = to_money(price * self._refund_rate)
        return RefundDecision(refund=refund, retained_fee=price - refund, note="Late cancellation fee retained")
