from __future__ import annotations

from ..branches.repository import BranchRepository
from ..cars.model import Car
from ..core.exceptions import NotFoundError


def revenue_id_for_car(car: Car, branches: BranchRepository) -> int:
    """Revenue account credited for this car: the one of its owning branch."""
    if car.branch_id is None:
        raise NotFoundError(f"Car #{car.car_id} is not assigned to any branch")

    branch = branches.get_by_id(car.branch_id)
    if not branch or branch.revenue_id is None:
        raise NotFoundError(f"No revenue for branch #{car.branch_id}")
    return branch.revenue_id
