from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import date
from decimal import Decimal
from typing import Callable, ContextManager, Optional, Sequence

from ..branches.repository import BranchRepository
from ..common.validators import require_between, require_non_empty
from ..core.constants import MAX_CAR_PRICE, MIN_CAR_PRICE
from ..core.enums import CarStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..rents.repository import RentRepository, ReturnRepository
from ..reservations.repository import ReservationRepository
from .model import Car, CarDetails
from .repository import CarRepository

logger = logging.getLogger(__name__)


class CarService:
    """Use case: manage the fleet."""

    def __init__(
        self,
        cars: CarRepository,
        branches: BranchRepository,
        reservations: ReservationRepository,
        rents: RentRepository,
        returns: ReturnRepository,
        *,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._cars = cars
        self._branches = branches
        self._reservations = reservations
        self._rents = rents
        self._returns = returns
        self._tx = transaction

    def get_car(self, car_id: int) -> Car:
        car = self._cars.get_by_id(int(car_id))
        if not car:
            raise NotFoundError("There is no car with selected id")
        return car

    def list_cars(self) -> Sequence[Car]:
        return self._cars.list_all()

    def add_car(self, details: CarDetails, *, branch_id: Optional[int] = None) -> Car:
        details = self._validate(details)
        self._require_branch(branch_id)
        car_id = self._cars.create(details=details, branch_id=branch_id)
        logger.info("car #%s added (%s %s)", car_id, details.make, details.model)
        return self.get_car(car_id)

    def edit_car(self, car_id: int, details: CarDetails, *, branch_id: Optional[int] = None) -> Car:
        details = self._validate(details)
        with self._tx():
            car = self.get_car(car_id)
            if branch_id is None:
                branch_id = car.branch_id
            self._require_branch(branch_id)
            self._cars.update(car_id=car.car_id, details=details, branch_id=branch_id)
        return self.get_car(car_id)

    def update_mileage_and_price(self, car_id: int, *, mileage: float, price: Decimal) -> Car:
        if mileage < 0:
            raise ValidationError("Mileage cannot be negative")
        require_between(price, "Price", MIN_CAR_PRICE, MAX_CAR_PRICE)
        car = self.get_car(car_id)
        self._cars.update_mileage_and_price(car_id=car.car_id, mileage=float(mileage), price=price)
        return self.get_car(car_id)

    def update_status(self, car_id: int, status: str) -> Car:
        try:
            new_status = CarStatus((status or "").strip().upper())
        except ValueError:
            raise ValidationError(f"Unknown car status {status!r}")
        car = self.get_car(car_id)
        self._cars.update_status(car_id=car.car_id, status=new_status)
        return self.get_car(car_id)

    def status_on_date(self, car_id: int, on_date: date) -> CarStatus:
        """RENTED when a reservation occupies the car that day, the stored status otherwise."""
        car = self.get_car(car_id)
        for r in self._reservations.list_for_car(car.car_id):
            if r.start_date <= on_date <= r.end_date:
                return CarStatus.RENTED
        return car.status

    def delete_car(self, car_id: int) -> None:
        with self._tx():
            car = self.get_car(car_id)
            reservations = self._reservations.list_for_car(car.car_id)
            for r in reservations:
                self._rents.delete_for_reservation(r.reservation_id)
            for r in reservations:
                self._returns.delete_for_reservation(r.reservation_id)
            for r in reservations:
                self._reservations.delete_by_id(r.reservation_id)
            self._cars.delete_by_id(car.car_id)
        logger.info("car #%s deleted with %d reservation(s)", car.car_id, len(reservations))

    def _require_branch(self, branch_id: Optional[int]) -> None:
        if branch_id is not None and not self._branches.get_by_id(branch_id):
            raise NotFoundError(f"No branch under ID #{branch_id}")

    @staticmethod
    def _validate(details: CarDetails) -> CarDetails:
        require_non_empty(details.make, "Make")
        require_non_empty(details.model, "Model")
        require_between(details.price, "Price", MIN_CAR_PRICE, MAX_CAR_PRICE)
        if details.mileage < 0:
            raise ValidationError("Mileage cannot be negative")
        if details.year_of_manufacture < 1886:
            raise ValidationError("Year of manufacture is not valid")
        return CarDetails(
            make=details.make.strip(),
            model=details.model.strip(),
            body_style=details.body_style,
            year_of_manufacture=int(details.year_of_manufacture),
            colour=details.colour,
            mileage=float(details.mileage),
            status=details.status,
            price=details.price,
        )
