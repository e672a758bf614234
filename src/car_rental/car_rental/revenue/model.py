from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import RevenueReason


@dataclass(frozen=True)
class Revenue:
    """Running monetary total of one branch."""

    revenue_id: int
    total_amount: Decimal


@dataclass(frozen=True)
class RevenueDelta:
    """Command: add a signed amount to a revenue total.

    The only way a revenue total changes; totals are never assigned directly.
    """

    revenue_id: int
    amount: Decimal
    reason: RevenueReason
    reservation_id: Optional[int] = None


@dataclass(frozen=True)
class RevenueEntry:
    """Ledger row written for every applied delta."""

    entry_id: int
    revenue_id: int
    amount: Decimal
    reason: RevenueReason
    reservation_id: Optional[int]
    created_at: datetime
