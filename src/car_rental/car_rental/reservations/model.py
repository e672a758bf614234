from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class ReservationRequest:
    """Input of create/edit; every field is an id or a calendar date."""

    client_id: int
    car_id: int
    start_date: date
    end_date: date
    start_branch_id: int
    end_branch_id: int


@dataclass(frozen=True)
class Reservation:
    reservation_id: int
    client_id: int
    car_id: int
    start_date: date
    end_date: date
    price: Decimal
    start_branch_id: int
    end_branch_id: int
