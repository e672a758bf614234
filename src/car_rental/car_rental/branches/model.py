from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CarRental:
    """Rental company owning the branches."""

    car_rental_id: int
    name: str
    internet_domain: Optional[str]
    address: Optional[str]
    owner: Optional[str]
    logotype: Optional[str] = None


@dataclass(frozen=True)
class Branch:
    """Physical rental office.

    Employees, cars and clients reference a branch through ``branch_id``.
    """

    branch_id: int
    name: str
    address: Optional[str]
    car_rental_id: int
    revenue_id: Optional[int]
