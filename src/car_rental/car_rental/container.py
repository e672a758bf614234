from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from datetime import date
from typing import Callable, ContextManager, Optional

from .branches.mysql_branch_repository import MySQLBranchRepository, MySQLCarRentalRepository
from .branches.repository import BranchRepository, CarRentalRepository
from .branches.service import BranchService
from .cars.mysql_car_repository import MySQLCarRepository
from .cars.repository import CarRepository
from .cars.service import CarService
from .common.datetime_utils import today_local
from .database.connection import DBConfig, DatabaseConnection
from .rents.mysql_rent_repository import MySQLRentRepository, MySQLReturnRepository
from .rents.repository import RentRepository, ReturnRepository
from .rents.service import RentService, ReturnService
from .reservations.cancellation.factory import CancellationStrategyFactory
from .reservations.mysql_reservation_repository import MySQLReservationRepository
from .reservations.pricing.standard_calculator import StandardPriceCalculator
from .reservations.repository import ReservationRepository
from .reservations.service import ReservationService
from .revenue.mysql_revenue_repository import MySQLRevenueRepository
from .revenue.repository import RevenueRepository
from .revenue.service import RevenueService
from .users.mysql_user_repository import MySQLClientRepository, MySQLEmployeeRepository, MySQLUserRepository
from .users.repository import ClientRepository, EmployeeRepository, UserRepository
from .users.service import AuthService, ClientService, EmployeeService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    revenue_repo: RevenueRepository
    branches_repo: BranchRepository
    car_rentals_repo: CarRentalRepository
    cars_repo: CarRepository
    users_repo: UserRepository
    employees_repo: EmployeeRepository
    clients_repo: ClientRepository
    reservations_repo: ReservationRepository
    rents_repo: RentRepository
    returns_repo: ReturnRepository

    revenue_service: RevenueService
    branch_service: BranchService
    car_service: CarService
    auth_service: AuthService
    employee_service: EmployeeService
    client_service: ClientService
    reservation_service: ReservationService
    rent_service: RentService
    return_service: ReturnService


def wire(
    *,
    revenue_repo: RevenueRepository,
    branches_repo: BranchRepository,
    car_rentals_repo: CarRentalRepository,
    cars_repo: CarRepository,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    clients_repo: ClientRepository,
    reservations_repo: ReservationRepository,
    rents_repo: RentRepository,
    returns_repo: ReturnRepository,
    conn: Optional[DatabaseConnection] = None,
    transaction: Callable[[], ContextManager] = nullcontext,
    today: Callable[[], date] = today_local,
) -> Container:
    """Build every service on top of the given repositories."""
    revenue_service = RevenueService(revenue_repo, transaction=transaction)
    branch_service = BranchService(
        branches_repo, car_rentals_repo, cars_repo, reservations_repo, revenue_service, transaction=transaction
    )
    car_service = CarService(
        cars_repo, branches_repo, reservations_repo, rents_repo, returns_repo, transaction=transaction
    )
    auth_service = AuthService(users_repo)
    employee_service = EmployeeService(
        employees_repo, users_repo, branches_repo, rents_repo, returns_repo, transaction=transaction
    )
    client_service = ClientService(
        clients_repo, users_repo, branches_repo, reservations_repo, rents_repo, returns_repo, transaction=transaction
    )
    reservation_service = ReservationService(
        reservations_repo,
        cars_repo,
        clients_repo,
        branches_repo,
        rents_repo,
        returns_repo,
        revenue_service,
        price_calculator=StandardPriceCalculator(),
        cancellation_factory=CancellationStrategyFactory(),
        transaction=transaction,
        today=today,
    )
    rent_service = RentService(rents_repo, employees_repo, reservations_repo, transaction=transaction)
    return_service = ReturnService(
        returns_repo, employees_repo, reservations_repo, cars_repo, branches_repo, revenue_service,
        transaction=transaction,
    )

    return Container(
        conn=conn,
        revenue_repo=revenue_repo,
        branches_repo=branches_repo,
        car_rentals_repo=car_rentals_repo,
        cars_repo=cars_repo,
        users_repo=users_repo,
        employees_repo=employees_repo,
        clients_repo=clients_repo,
        reservations_repo=reservations_repo,
        rents_repo=rents_repo,
        returns_repo=returns_repo,
        revenue_service=revenue_service,
        branch_service=branch_service,
        car_service=car_service,
        auth_service=auth_service,
        employee_service=employee_service,
        client_service=client_service,
        reservation_service=reservation_service,
        rent_service=rent_service,
        return_service=return_service,
    )


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire(
        conn=conn,
        transaction=conn.transaction,
        revenue_repo=MySQLRevenueRepository(conn),
        branches_repo=MySQLBranchRepository(conn),
        car_rentals_repo=MySQLCarRentalRepository(conn),
        cars_repo=MySQLCarRepository(conn),
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        clients_repo=MySQLClientRepository(conn),
        reservations_repo=MySQLReservationRepository(conn),
        rents_repo=MySQLRentRepository(conn),
        returns_repo=MySQLReturnRepository(conn),
    )
