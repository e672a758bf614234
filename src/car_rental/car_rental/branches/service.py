from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Callable, ContextManager, Optional, Sequence

from ..cars.repository import CarRepository
from ..common.validators import optional_strip, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..reservations.repository import ReservationRepository
from ..revenue.service import RevenueService
from .model import Branch, CarRental
from .repository import BranchRepository, CarRentalRepository

logger = logging.getLogger(__name__)


class BranchService:
    """Branches and the rental companies they belong to."""

    def __init__(
        self,
        branches: BranchRepository,
        car_rentals: CarRentalRepository,
        cars: CarRepository,
        reservations: ReservationRepository,
        revenue: RevenueService,
        *,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._branches = branches
        self._car_rentals = car_rentals
        self._cars = cars
        self._reservations = reservations
        self._revenue = revenue
        self._tx = transaction

    def list_branches(self) -> Sequence[Branch]:
        return self._branches.list_all()

    def get_branch(self, branch_id: int) -> Branch:
        branch = self._branches.get_by_id(int(branch_id))
        if not branch:
            raise NotFoundError(f"No branch under ID #{branch_id}")
        return branch

    def add_branch(self, *, name: str, address: Optional[str], car_rental_id: int) -> Branch:
        name = require_non_empty(name, "Name")
        with self._tx():
            if not self._car_rentals.get_by_id(int(car_rental_id)):
                raise NotFoundError(f"No car rental under ID #{car_rental_id}")
            revenue_id = self._revenue.open_account()
            branch_id = self._branches.create(
                name=name,
                address=optional_strip(address),
                car_rental_id=int(car_rental_id),
                revenue_id=revenue_id,
            )
        logger.info("branch #%s added with revenue #%s", branch_id, revenue_id)
        return self.get_branch(branch_id)

    def edit_branch(self, branch_id: int, *, name: str, address: Optional[str]) -> Branch:
        name = require_non_empty(name, "Name")
        with self._tx():
            branch = self.get_branch(branch_id)
            self._branches.update(branch_id=branch.branch_id, name=name, address=optional_strip(address))
        return self.get_branch(branch_id)

    def delete_branch(self, branch_id: int) -> None:
        """Delete a branch with its revenue account.

        Refused while cars or reservations still point at the branch; staff and
        clients are simply unassigned.
        """
        with self._tx():
            branch = self.get_branch(branch_id)
            if self._cars.list_by_branch(branch.branch_id):
                raise ValidationError("Branch still has cars assigned")
            if self._reservations.exists_for_branch(branch.branch_id):
                raise ValidationError("Branch is referenced by reservations")
            self._branches.delete_by_id(branch.branch_id)
            if branch.revenue_id is not None:
                self._revenue.close_account(branch.revenue_id)
        logger.info("branch #%s deleted", branch.branch_id)

    def list_car_rentals(self) -> Sequence[CarRental]:
        return self._car_rentals.list_all()

    def add_car_rental(
        self,
        *,
        name: str,
        internet_domain: Optional[str] = None,
        address: Optional[str] = None,
        owner: Optional[str] = None,
        logotype: Optional[str] = None,
    ) -> CarRental:
        name = require_non_empty(name, "Name")
        with self._tx():
            car_rental_id = self._car_rentals.create(
                name=name,
                internet_domain=optional_strip(internet_domain),
                address=optional_strip(address),
                owner=optional_strip(owner),
                logotype=optional_strip(logotype),
            )
        car_rental = self._car_rentals.get_by_id(car_rental_id)
        if not car_rental:
            raise NotFoundError(f"No car rental under ID #{car_rental_id}")
        return car_rental
