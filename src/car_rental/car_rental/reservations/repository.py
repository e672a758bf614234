from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Reservation


class ReservationRepository(Protocol):
    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Reservation]:
        raise NotImplementedError

    def list_for_car(self, car_id: int) -> Sequence[Reservation]:
        raise NotImplementedError

    def list_for_client(self, client_id: int) -> Sequence[Reservation]:
        raise NotImplementedError

    def exists_for_branch(self, branch_id: int) -> bool:
        """True when any reservation starts or ends at the branch."""

        raise NotImplementedError

    def create(
        self,
        *,
        client_id: int,
        car_id: int,
        start_date: date,
        end_date: date,
        price: Decimal,
        start_branch_id: int,
        end_branch_id: int,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        reservation_id: int,
        client_id: int,
        car_id: int,
        start_date: date,
        end_date: date,
        price: Decimal,
        start_branch_id: int,
        end_branch_id: int,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, reservation_id: int) -> bool:
        raise NotImplementedError
