"""Example: drive the service layer directly, without Flask.

Controllers stay thin; this script reserves the first demo car for two days and
prints the resulting price and branch revenue.
"""

import importlib
from datetime import timedelta

from config import get_settings_module

from src.car_rental.car_rental.common.datetime_utils import today_local
from src.car_rental.car_rental.reservations.model import ReservationRequest
from src.car_rental.car_rental.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    client = container.client_service.list_clients()[0]
    car = container.car_service.list_cars()[0]
    start = today_local() + timedelta(days=30)

    reservation = container.reservation_service.create(
        ReservationRequest(
            client_id=client.user_id,
            car_id=car.car_id,
            start_date=start,
            end_date=start + timedelta(days=2),
            start_branch_id=car.branch_id,
            end_branch_id=car.branch_id,
        )
    )
    branch = container.branch_service.get_branch(car.branch_id)
    print(reservation)
    print(container.revenue_service.get_revenue(branch.revenue_id))


if __name__ == "__main__":
    main()
