"""Date-interval rules for admitting a reservation on a car.

Periods are compared as half-open ``[start, end)`` intervals: two reservations
collide when they share a start day, share an end day, or one starts or ends
strictly inside the other. Back-to-back bookings (one ends the day the next
starts) do not collide.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from ..common.datetime_utils import days_between
from ..core.constants import BRANCH_HANDOVER_GRACE_DAYS
from ..core.exceptions import TimeCollisionError
from .model import Reservation


@dataclass(frozen=True)
class DatePeriod:
    start: date
    end: date

    def overlaps(self, other: "DatePeriod") -> bool:
        return self.start < other.end and other.start < self.end


def find_collisions(requested: DatePeriod, existing: Iterable[Reservation]) -> List[Reservation]:
    return [r for r in existing if requested.overlaps(DatePeriod(r.start_date, r.end_date))]


def previous_reservation(existing: Iterable[Reservation], start: date) -> Optional[Reservation]:
    """Reservation whose end date is the latest one on or before ``start``."""
    before = [r for r in existing if r.end_date <= start]
    return max(before, key=lambda r: r.end_date, default=None)


def next_reservation(existing: Iterable[Reservation], end: date) -> Optional[Reservation]:
    """Reservation whose start date is the earliest one on or after ``end``."""
    after = [r for r in existing if r.start_date >= end]
    return min(after, key=lambda r: r.start_date, default=None)


def check_branch_continuity(
    existing: Iterable[Reservation],
    *,
    period: DatePeriod,
    start_branch_id: int,
    end_branch_id: int,
    grace_days: int = BRANCH_HANDOVER_GRACE_DAYS,
) -> None:
    """Reject pickups/drop-offs at a branch the car cannot physically be at."""
    existing = list(existing)

    prev = previous_reservation(existing, period.start)
    if (
        prev is not None
        and prev.end_branch_id != start_branch_id
        and days_between(prev.end_date, period.start) <= grace_days
    ):
        raise TimeCollisionError(
            f"Car can be rented only from Branch #{prev.end_branch_id} for the selected date!"
        )

    nxt = next_reservation(existing, period.end)
    if (
        nxt is not None
        and nxt.start_branch_id != end_branch_id
        and days_between(period.end, nxt.start_date) <= grace_days
    ):
        raise TimeCollisionError(
            f"Car can be returned only to Branch #{nxt.start_branch_id} for the selected date!"
        )
