from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Rent:
    """Car handed over to the client against a reservation."""

    rent_id: int
    employee_id: Optional[int]
    reservation_id: int
    rent_date: date
    comments: Optional[str] = None


@dataclass(frozen=True)
class Returnal:
    """Car received back; ``upcharge`` covers damage, fuel, late return."""

    return_id: int
    employee_id: Optional[int]
    reservation_id: int
    return_date: date
    upcharge: Decimal
    comments: Optional[str] = None
