from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import CarStatus


@dataclass(frozen=True)
class CarDetails:
    """Mutable fields of a car, as accepted on add/edit."""

    make: str
    model: str
    body_style: Optional[str]
    year_of_manufacture: int
    colour: Optional[str]
    mileage: float
    status: CarStatus
    price: Decimal


@dataclass(frozen=True)
class Car:
    car_id: int
    make: str
    model: str
    body_style: Optional[str]
    year_of_manufacture: int
    colour: Optional[str]
    mileage: float
    status: CarStatus
    price: Decimal
    branch_id: Optional[int] = None
