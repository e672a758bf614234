from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Branch, CarRental


class BranchRepository(Protocol):
    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Branch]:
        raise NotImplementedError

    def create(self, *, name: str, address: Optional[str], car_rental_id: int, revenue_id: int) -> int:
        raise NotImplementedError

    def update(self, *, branch_id: int, name: str, address: Optional[str]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, branch_id: int) -> bool:
        raise NotImplementedError


class CarRentalRepository(Protocol):
    def get_by_id(self, car_rental_id: int) -> Optional[CarRental]:
        raise NotImplementedError

    def list_all(self) -> Sequence[CarRental]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        internet_domain: Optional[str],
        address: Optional[str],
        owner: Optional[str],
        logotype: Optional[str],
    ) -> int:
        raise NotImplementedError
