from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Rent, Returnal


class RentRepository(Protocol):
    def get_by_id(self, rent_id: int) -> Optional[Rent]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Rent]:
        raise NotImplementedError

    def get_for_reservation(self, reservation_id: int) -> Optional[Rent]:
        raise NotImplementedError

    def create(self, *, employee_id: int, reservation_id: int, rent_date: date, comments: Optional[str]) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        rent_id: int,
        employee_id: int,
        reservation_id: int,
        rent_date: date,
        comments: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, rent_id: int) -> bool:
        raise NotImplementedError

    def delete_for_reservation(self, reservation_id: int) -> int:
        raise NotImplementedError

    def detach_employee(self, employee_id: int) -> int:
        """Null out ``employee_id`` on every rent handled by the employee."""

        raise NotImplementedError


class ReturnRepository(Protocol):
    def get_by_id(self, return_id: int) -> Optional[Returnal]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Returnal]:
        raise NotImplementedError

    def get_for_reservation(self, reservation_id: int) -> Optional[Returnal]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        reservation_id: int,
        return_date: date,
        upcharge: Decimal,
        comments: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        return_id: int,
        employee_id: int,
        reservation_id: int,
        return_date: date,
        upcharge: Decimal,
        comments: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, return_id: int) -> bool:
        raise NotImplementedError

    def delete_for_reservation(self, reservation_id: int) -> int:
        raise NotImplementedError

    def detach_employee(self, employee_id: int) -> int:
        raise NotImplementedError
