from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import date
from decimal import Decimal
from typing import Callable, ContextManager, Optional, Sequence

from ..branches.repository import BranchRepository
from ..cars.repository import CarRepository
from ..common.money import to_money
from ..common.validators import optional_strip, require_between
from ..core.constants import MAX_UPCHARGE
from ..core.enums import RevenueReason
from ..core.exceptions import AlreadyExistsError, NotFoundError
from ..reservations.model import Reservation
from ..reservations.repository import ReservationRepository
from ..revenue.lookup import revenue_id_for_car
from ..revenue.service import RevenueService
from ..users.repository import EmployeeRepository
from .model import Rent, Returnal
from .repository import RentRepository, ReturnRepository

logger = logging.getLogger(__name__)


def _require_employee(employees: EmployeeRepository, employee_id: int) -> None:
    if not employees.get_by_id(int(employee_id)):
        raise NotFoundError(f"No employee under ID #{employee_id}")


def _require_reservation(reservations: ReservationRepository, reservation_id: int) -> Reservation:
    reservation = reservations.get_by_id(int(reservation_id))
    if not reservation:
        raise NotFoundError(f"No reservation under ID #{reservation_id}")
    return reservation


class RentService:
    """Hand-over of a reserved car to the client."""

    def __init__(
        self,
        rents: RentRepository,
        employees: EmployeeRepository,
        reservations: ReservationRepository,
        *,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._rents = rents
        self._employees = employees
        self._reservations = reservations
        self._tx = transaction

    def list_rents(self) -> Sequence[Rent]:
        return self._rents.list_all()

    def get_rent(self, rent_id: int) -> Rent:
        rent = self._rents.get_by_id(int(rent_id))
        if not rent:
            raise NotFoundError(f"No rent under ID #{rent_id}")
        return rent

    def add_rent(self, *, employee_id: int, reservation_id: int, rent_date: date, comments: Optional[str] = None) -> Rent:
        with self._tx():
            _require_employee(self._employees, employee_id)
            _require_reservation(self._reservations, reservation_id)
            if self._rents.get_for_reservation(int(reservation_id)):
                raise AlreadyExistsError(f"Reservation #{reservation_id} is already rented")
            rent_id = self._rents.create(
                employee_id=int(employee_id),
                reservation_id=int(reservation_id),
                rent_date=rent_date,
                comments=optional_strip(comments),
            )
        logger.info("rent #%s recorded for reservation #%s", rent_id, reservation_id)
        return self.get_rent(rent_id)

    def edit_rent(
        self,
        rent_id: int,
        *,
        employee_id: int,
        reservation_id: int,
        rent_date: date,
        comments: Optional[str] = None,
    ) -> Rent:
        with self._tx():
            rent = self.get_rent(rent_id)
            _require_employee(self._employees, employee_id)
            _require_reservation(self._reservations, reservation_id)
            other = self._rents.get_for_reservation(int(reservation_id))
            if other and other.rent_id != rent.rent_id:
                raise AlreadyExistsError(f"Reservation #{reservation_id} is already rented")
            self._rents.update(
                rent_id=rent.rent_id,
                employee_id=int(employee_id),
                reservation_id=int(reservation_id),
                rent_date=rent_date,
                comments=optional_strip(comments),
            )
        return self.get_rent(rent_id)

    def delete_rent(self, rent_id: int) -> None:
        with self._tx():
            rent = self.get_rent(rent_id)
            self._rents.delete_by_id(rent.rent_id)


class ReturnService:
    """Car returns; the upcharge is booked on the car's branch revenue."""

    def __init__(
        self,
        returns: ReturnRepository,
        employees: EmployeeRepository,
        reservations: ReservationRepository,
        cars: CarRepository,
        branches: BranchRepository,
        revenue: RevenueService,
        *,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._returns = returns
        self._employees = employees
        self._reservations = reservations
        self._cars = cars
        self._branches = branches
        self._revenue = revenue
        self._tx = transaction

    def list_returns(self) -> Sequence[Returnal]:
        return self._returns.list_all()

    def get_return(self, return_id: int) -> Returnal:
        returnal = self._returns.get_by_id(int(return_id))
        if not returnal:
            raise NotFoundError(f"No return under ID #{return_id}")
        return returnal

    def add_return(
        self,
        *,
        employee_id: int,
        reservation_id: int,
        return_date: date,
        upcharge: Decimal = Decimal("0.00"),
        comments: Optional[str] = None,
    ) -> Returnal:
        upcharge = self._check_upcharge(upcharge)
        with self._tx():
            _require_employee(self._employees, employee_id)
            reservation = _require_reservation(self._reservations, reservation_id)
            if self._returns.get_for_reservation(reservation.reservation_id):
                raise AlreadyExistsError(f"Reservation #{reservation_id} is already returned")
            return_id = self._returns.create(
                employee_id=int(employee_id),
                reservation_id=reservation.reservation_id,
                return_date=return_date,
                upcharge=upcharge,
                comments=optional_strip(comments),
            )
            self._book(reservation, upcharge)
        logger.info("return #%s recorded for reservation #%s (upcharge %s)", return_id, reservation_id, upcharge)
        return self.get_return(return_id)

    def edit_return(
        self,
        return_id: int,
        *,
        employee_id: int,
        reservation_id: int,
        return_date: date,
        upcharge: Decimal = Decimal("0.00"),
        comments: Optional[str] = None,
    ) -> Returnal:
        upcharge = self._check_upcharge(upcharge)
        with self._tx():
            current = self.get_return(return_id)
            _require_employee(self._employees, employee_id)
            reservation = _require_reservation(self._reservations, reservation_id)
            other = self._returns.get_for_reservation(reservation.reservation_id)
            if other and other.return_id != current.return_id:
                raise AlreadyExistsError(f"Reservation #{reservation_id} is already returned")
            self._returns.update(
                return_id=current.return_id,
                employee_id=int(employee_id),
                reservation_id=reservation.reservation_id,
                return_date=return_date,
                upcharge=upcharge,
                comments=optional_strip(comments),
            )
            if reservation.reservation_id == current.reservation_id:
                self._book(reservation, upcharge - current.upcharge)
            else:
                previous = self._reservations.get_by_id(current.reservation_id)
                if previous:
                    self._book(previous, -current.upcharge)
                self._book(reservation, upcharge)
        return self.get_return(return_id)

    def delete_return(self, return_id: int) -> None:
        with self._tx():
            returnal = self.get_return(return_id)
            reservation = self._reservations.get_by_id(returnal.reservation_id)
            self._returns.delete_by_id(returnal.return_id)
            if reservation:
                self._book(reservation, -returnal.upcharge)

    @staticmethod
    def _check_upcharge(upcharge: Decimal) -> Decimal:
        return require_between(to_money(upcharge), "Upcharge", to_money(0), MAX_UPCHARGE)

    def _book(self, reservation: Reservation, amount: Decimal) -> None:
        if not amount:
            return
        car = self._cars.get_by_id(reservation.car_id)
        if not car:
            raise NotFoundError(f"No car under ID #{reservation.car_id}")
        self._revenue.apply_delta(
            revenue_id_for_car(car, self._branches),
            amount,
            reason=RevenueReason.RETURN_UPCHARGE,
            reservation_id=reservation.reservation_id,
        )
