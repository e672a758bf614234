from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import CarStatus
from .model import Car, CarDetails


class CarRepository(Protocol):
    def get_by_id(self, car_id: int, *, for_update: bool = False) -> Optional[Car]:
        """``for_update`` locks the car row until the enclosing transaction ends."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Car]:
        raise NotImplementedError

    def list_by_branch(self, branch_id: int) -> Sequence[Car]:
        raise NotImplementedError

    def create(self, *, details: CarDetails, branch_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, *, car_id: int, details: CarDetails, branch_id: Optional[int]) -> bool:
        raise NotImplementedError

    def update_mileage_and_price(self, *, car_id: int, mileage: float, price: Decimal) -> bool:
        raise NotImplementedError

    def update_status(self, *, car_id: int, status: CarStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, car_id: int) -> bool:
        raise NotImplementedError
