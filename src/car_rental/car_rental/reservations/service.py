from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, ContextManager, Optional, Sequence

from ..branches.repository import BranchRepository
from ..cars.model import Car
from ..cars.repository import CarRepository
from ..common.datetime_utils import today_local
from ..core.constants import MAX_RESERVATION_PRICE
from ..core.enums import RevenueReason
from ..core.exceptions import NotFoundError, TimeCollisionError, ValidationError
from ..rents.repository import RentRepository, ReturnRepository
from ..revenue.lookup import revenue_id_for_car
from ..revenue.service import RevenueService
from ..users.repository import ClientRepository
from .availability import DatePeriod, check_branch_continuity, find_collisions
from .cancellation.base import RefundDecision
from .cancellation.factory import CancellationStrategyFactory
from .model import Reservation, ReservationRequest
from .pricing.base import PriceCalculator
from .pricing.standard_calculator import StandardPriceCalculator
from .repository import ReservationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Admission:
    car: Car
    price: Decimal


class ReservationService:
    """Admission, pricing and cancellation of reservations.

    Every mutating call runs in one transaction: the car row is locked first, so
    the overlap check and the write that follows cannot interleave with another
    reservation attempt on the same car.
    """

    def __init__(
        self,
        reservations: ReservationRepository,
        cars: CarRepository,
        clients: ClientRepository,
        branches: BranchRepository,
        rents: RentRepository,
        returns: ReturnRepository,
        revenue: RevenueService,
        *,
        price_calculator: Optional[PriceCalculator] = None,
        cancellation_factory: Optional[CancellationStrategyFactory] = None,
        transaction: Callable[[], ContextManager] = nullcontext,
        today: Callable[[], date] = today_local,
    ):
        self._reservations = reservations
        self._cars = cars
        self._clients = clients
        self._branches = branches
        self._rents = rents
        self._returns = returns
        self._revenue = revenue
        self._calculator = price_calculator or StandardPriceCalculator()
        self._cancellation = cancellation_factory or CancellationStrategyFactory()
        self._tx = transaction
        self._today = today

    def list_all(self) -> Sequence[Reservation]:
        return self._reservations.list_all()

    def get(self, reservation_id: int) -> Reservation:
        reservation = self._reservations.get_by_id(int(reservation_id))
        if not reservation:
            raise NotFoundError(f"No reservation under ID #{reservation_id}")
        return reservation

    def create(self, request: ReservationRequest) -> Reservation:
        with self._tx():
            admission = self._admit(request)
            reservation_id = self._reservations.create(
                client_id=request.client_id,
                car_id=request.car_id,
                start_date=request.start_date,
                end_date=request.end_date,
                price=admission.price,
                start_branch_id=request.start_branch_id,
                end_branch_id=request.end_branch_id,
            )
            self._revenue.apply_delta(
                revenue_id_for_car(admission.car, self._branches),
                admission.price,
                reason=RevenueReason.RESERVATION_CREATED,
                reservation_id=reservation_id,
            )

        logger.info(
            "reservation #%s admitted: car #%s %s..%s price=%s",
            reservation_id, request.car_id, request.start_date, request.end_date, admission.price,
        )
        return self._build(reservation_id, request, admission.price)

    def edit(self, reservation_id: int, request: ReservationRequest) -> Reservation:
        with self._tx():
            current = self.get(reservation_id)
            admission = self._admit(request, exclude_reservation_id=current.reservation_id)

            self._reservations.update(
                reservation_id=current.reservation_id,
                client_id=request.client_id,
                car_id=request.car_id,
                start_date=request.start_date,
                end_date=request.end_date,
                price=admission.price,
                start_branch_id=request.start_branch_id,
                end_branch_id=request.end_branch_id,
            )
            # Credited additively like create; the earlier price is not reversed.
            self._revenue.apply_delta(
                revenue_id_for_car(admission.car, self._branches),
                admission.price,
                reason=RevenueReason.RESERVATION_EDITED,
                reservation_id=current.reservation_id,
            )

        logger.info("reservation #%s edited: price %s -> %s", current.reservation_id, current.price, admission.price)
        return self._build(current.reservation_id, request, admission.price)

    def cancel(self, reservation_id: int) -> RefundDecision:
        with self._tx():
            reservation = self.get(reservation_id)
            car = self._cars.get_by_id(reservation.car_id)
            if not car:
                raise NotFoundError(f"No car under ID #{reservation.car_id}")

            rent = self._rents.get_for_reservation(reservation.reservation_id)
            strategy = self._cancellation.for_reservation(rent=rent, today=self._today())
            decision = strategy.decide(price=reservation.price)

            self._revenue.apply_delta(
                revenue_id_for_car(car, self._branches),
                -decision.refund,
                reason=RevenueReason.RESERVATION_CANCELLED,
                reservation_id=reservation.reservation_id,
            )
            self._purge(reservation.reservation_id)

        logger.info(
            "reservation #%s cancelled: refund=%s fee=%s",
            reservation.reservation_id, decision.refund, decision.retained_fee,
        )
        return decision

    def delete(self, reservation_id: int) -> None:
        """Remove a reservation permanently. Revenue is left untouched, unlike ``cancel``."""
        with self._tx():
            reservation = self.get(reservation_id)
            self._purge(reservation.reservation_id)
        logger.info("reservation #%s deleted", reservation.reservation_id)

    def _purge(self, reservation_id: int) -> None:
        self._rents.delete_for_reservation(reservation_id)
        self._returns.delete_for_reservation(reservation_id)
        self._reservations.delete_by_id(reservation_id)

    def _admit(self, request: ReservationRequest, *, exclude_reservation_id: Optional[int] = None) -> _Admission:
        if request.start_date == request.end_date:
            raise TimeCollisionError("Car should be reserved for at least one day!")
        if request.start_date > request.end_date:
            raise ValidationError("End date must be after start date")

        car = self._cars.get_by_id(request.car_id, for_update=True)
        if not car:
            raise NotFoundError("No car under that ID")
        if not self._clients.get_by_id(request.client_id):
            raise NotFoundError("No customer under that ID")

        period = DatePeriod(request.start_date, request.end_date)
        existing = [
            r for r in self._reservations.list_for_car(car.car_id)
            if r.reservation_id != exclude_reservation_id
        ]
        if find_collisions(period, existing):
            logger.warning("car #%s already reserved within %s..%s", car.car_id, period.start, period.end)
            raise TimeCollisionError("Car cannot be reserved for given time period!")

        for branch_id in (request.start_branch_id, request.end_branch_id):
            if not self._branches.get_by_id(branch_id):
                raise NotFoundError("Branch not found")

        check_branch_continuity(
            existing,
            period=period,
            start_branch_id=request.start_branch_id,
            end_branch_id=request.end_branch_id,
        )

        price = self._calculator.price(
            daily_rate=car.price,
            start_date=request.start_date,
            end_date=request.end_date,
            start_branch_id=request.start_branch_id,
            end_branch_id=request.end_branch_id,
        )
        if price > MAX_RESERVATION_PRICE:
            raise ValidationError(f"Price must be lesser than {MAX_RESERVATION_PRICE}")
        return _Admission(car=car, price=price)

    @staticmethod
    def _build(reservation_id: int, request: ReservationRequest, price: Decimal) -> Reservation:
        return Reservation(
            reservation_id=int(reservation_id),
            client_id=request.client_id,
            car_id=request.car_id,
            start_date=request.start_date,
            end_date=request.end_date,
            price=price,
            start_branch_id=request.start_branch_id,
            end_branch_id=request.end_branch_id,
        )
