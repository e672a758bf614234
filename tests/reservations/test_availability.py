from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.car_rental.car_rental.core.exceptions import TimeCollisionError
from src.car_rental.car_rental.reservations.availability import (
    DatePeriod,
    check_branch_continuity,
    find_collisions,
    next_reservation,
    previous_reservation,
)
from src.car_rental.car_rental.reservations.model import Reservation


def _res(rid: int, start: date, end: date, start_branch: int = 1, end_branch: int = 1) -> Reservation:
    return Reservation(rid, 1, 1, start, end, Decimal("100.00"), start_branch, end_branch)


EXISTING = _res(1, date(2024, 3, 10), date(2024, 3, 15))


@pytest.mark.parametrize(
    "start,end",
    [
        (date(2024, 3, 10), date(2024, 3, 12)),  # same start day
        (date(2024, 3, 12), date(2024, 3, 15)),  # same end day
        (date(2024, 3, 12), date(2024, 3, 20)),  # starts inside
        (date(2024, 3, 5), date(2024, 3, 12)),   # ends inside
        (date(2024, 3, 5), date(2024, 3, 20)),   # covers the existing one
        (date(2024, 3, 11), date(2024, 3, 14)),  # fully inside
    ],
)
def test_overlapping_periods_collide(start, end):
    assert find_collisions(DatePeriod(start, end), [EXISTING]) == [EXISTING]


@pytest.mark.parametrize(
    "start,end",
    [
        (date(2024, 3, 15), date(2024, 3, 18)),  # picks up the day the previous one ends
        (date(2024, 3, 5), date(2024, 3, 10)),   # returns the day the next one starts
        (date(2024, 3, 20), date(2024, 3, 22)),
    ],
)
def test_touching_or_disjoint_periods_do_not_collide(start, end):
    assert find_collisions(DatePeriod(start, end), [EXISTING]) == []


def test_previous_and_next_pick_the_closest_neighbours():
    early = _res(1, date(2024, 3, 1), date(2024, 3, 3))
    late = _res(2, date(2024, 3, 5), date(2024, 3, 7))
    soon = _res(3, date(2024, 3, 12), date(2024, 3, 13))
    far = _res(4, date(2024, 3, 20), date(2024, 3, 21))
    existing = [far, early, soon, late]

    assert previous_reservation(existing, date(2024, 3, 9)) is late
    assert next_reservation(existing, date(2024, 3, 10)) is soon
    assert previous_reservation(existing, date(2024, 3, 1)) is None
    assert next_reservation(existing, date(2024, 3, 21)) is None


def test_pickup_right_after_a_drop_off_elsewhere_is_rejected():
    prev = _res(1, date(2024, 3, 1), date(2024, 3, 9), start_branch=1, end_branch=2)

    with pytest.raises(TimeCollisionError, match="rented only from Branch #2"):
        check_branch_continuity(
            [prev], period=DatePeriod(date(2024, 3, 10), date(2024, 3, 12)), start_branch_id=1, end_branch_id=1
        )


def test_return_right_before_a_pickup_elsewhere_is_rejected():
    nxt = _res(1, date(2024, 3, 13), date(2024, 3, 15), start_branch=2, end_branch=2)

    with pytest.raises(TimeCollisionError, match="returned only to Branch #2"):
        check_branch_continuity(
            [nxt], period=DatePeriod(date(2024, 3, 10), date(2024, 3, 12)), start_branch_id=1, end_branch_id=1
        )


def test_gap_longer_than_grace_allows_any_branch():
    prev = _res(1, date(2024, 3, 1), date(2024, 3, 8), start_branch=1, end_branch=2)
    nxt = _res(2, date(2024, 3, 14), date(2024, 3, 15), start_branch=2, end_branch=2)

    check_branch_continuity(
        [prev, nxt], period=DatePeriod(date(2024, 3, 10), date(2024, 3, 12)), start_branch_id=1, end_branch_id=1
    )


def test_same_branch_neighbours_pass():
    prev = _res(1, date(2024, 3, 1), date(2024, 3, 9), start_branch=2, end_branch=1)
    nxt = _res(2, date(2024, 3, 13), date(2024, 3, 15), start_branch=1, end_branch=2)

    check_branch_continuity(
        [prev, nxt], period=DatePeriod(date(2024, 3, 10), date(2024, 3, 12)), start_branch_id=1, end_branch_id=1
    )


def test_handover_on_the_same_day_counts_as_a_neighbour():
    prev = _res(1, date(2024, 3, 1), date(2024, 3, 9), start_branch=1, end_branch=2)
    nxt = _res(2, date(2024, 3, 12), date(2024, 3, 14), start_branch=2, end_branch=2)

    assert previous_reservation([prev, nxt], date(2024, 3, 9)) is prev
    assert next_reservation([prev, nxt], date(2024, 3, 12)) is nxt
    with pytest.raises(TimeCollisionError, match="rented only from Branch #2"):
        check_branch_continuity(
            [prev, nxt], period=DatePeriod(date(2024, 3, 9), date(2024, 3, 12)), start_branch_id=1, end_branch_id=2
        )
