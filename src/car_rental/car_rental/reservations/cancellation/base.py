from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class RefundDecision:
    refund: Decimal
    retained_fee: Decimal
    note: Optional[str] = None


class CancellationStrategy(ABC):
    """Strategy Pattern: decide how much of a reservation price goes back."""

    @abstractmethod
    def decide(self, *, price: Decimal) -> RefundDecision:
        raise NotImplementedError
