from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from werkzeug.security import generate_password_hash

from src.car_rental.car_rental.branches.model import Branch, CarRental
from src.car_rental.car_rental.cars.model import Car, CarDetails
from src.car_rental.car_rental.container import Container, wire
from src.car_rental.car_rental.core.enums import CarStatus, Role
from src.car_rental.car_rental.rents.model import Rent, Returnal
from src.car_rental.car_rental.reservations.model import Reservation
from src.car_rental.car_rental.revenue.model import Revenue, RevenueDelta, RevenueEntry
from src.car_rental.car_rental.users.model import Client, Employee


class _Ids:
    def __init__(self):
        self._last = 0

    def next(self) -> int:
        self._last += 1
        return self._last


class InMemoryRevenue:
    def __init__(self):
        self.items: Dict[int, Revenue] = {}
        self.entries: List[RevenueEntry] = []
        self._ids = _Ids()
        self._entry_ids = _Ids()

    def get_by_id(self, revenue_id: int, *, for_update: bool = False) -> Optional[Revenue]:
        return self.items.get(revenue_id)

    def create(self, *, total_amount: Decimal) -> int:
        revenue_id = self._ids.next()
        self.items[revenue_id] = Revenue(revenue_id=revenue_id, total_amount=total_amount)
        return revenue_id

    def save_total(self, *, revenue_id: int, total_amount: Decimal) -> bool:
        self.items[revenue_id] = Revenue(revenue_id=revenue_id, total_amount=total_amount)
        return True

    def record_entry(self, delta: RevenueDelta) -> int:
        entry_id = self._entry_ids.next()
        self.entries.append(
            RevenueEntry(
                entry_id=entry_id,
                revenue_id=delta.revenue_id,
                amount=delta.amount,
                reason=delta.reason,
                reservation_id=delta.reservation_id,
                created_at=datetime(2024, 1, 1, 12, 0),
            )
        )
        return entry_id

    def list_entries(self, revenue_id: int):
        return [e for e in self.entries if e.revenue_id == revenue_id]

    def delete_by_id(self, revenue_id: int) -> bool:
        self.entries = [e for e in self.entries if e.revenue_id != revenue_id]
        return self.items.pop(revenue_id, None) is not None


class InMemoryBranches:
    def __init__(self):
        self.items: Dict[int, Branch] = {}
        self._ids = _Ids()

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        return self.items.get(branch_id)

    def list_all(self):
        return list(self.items.values())

    def create(self, *, name, address, car_rental_id, revenue_id) -> int:
        branch_id = self._ids.next()
        self.items[branch_id] = Branch(branch_id, name, address, car_rental_id, revenue_id)
        return branch_id

    def update(self, *, branch_id, name, address) -> bool:
        self.items[branch_id] = replace(self.items[branch_id], name=name, address=address)
        return True

    def delete_by_id(self, branch_id: int) -> bool:
        return self.items.pop(branch_id, None) is not None


class InMemoryCarRentals:
    def __init__(self):
        self.items: Dict[int, CarRental] = {}
        self._ids = _Ids()

    def get_by_id(self, car_rental_id: int) -> Optional[CarRental]:
        return self.items.get(car_rental_id)

    def list_all(self):
        return list(self.items.values())

    def create(self, *, name, internet_domain, address, owner, logotype) -> int:
        car_rental_id = self._ids.next()
        self.items[car_rental_id] = CarRental(car_rental_id, name, internet_domain, address, owner, logotype)
        return car_rental_id


class InMemoryCars:
    def __init__(self):
        self.items: Dict[int, Car] = {}
        self.locked: List[int] = []
        self._ids = _Ids()

    def get_by_id(self, car_id: int, *, for_update: bool = False) -> Optional[Car]:
        if for_update:
            self.locked.append(car_id)
        return self.items.get(car_id)

    def list_all(self):
        return list(self.items.values())

    def list_by_branch(self, branch_id: int):
        return [c for c in self.items.values() if c.branch_id == branch_id]

    def create(self, *, details: CarDetails, branch_id) -> int:
        car_id = self._ids.next()
        self.items[car_id] = Car(car_id=car_id, branch_id=branch_id, **details.__dict__)
        return car_id

    def update(self, *, car_id, details: CarDetails, branch_id) -> bool:
        self.items[car_id] = Car(car_id=car_id, branch_id=branch_id, **details.__dict__)
        return True

    def update_mileage_and_price(self, *, car_id, mileage, price) -> bool:
        self.items[car_id] = replace(self.items[car_id], mileage=mileage, price=price)
        return True

    def update_status(self, *, car_id, status) -> bool:
        self.items[car_id] = replace(self.items[car_id], status=status)
        return True

    def delete_by_id(self, car_id: int) -> bool:
        return self.items.pop(car_id, None) is not None


class InMemoryAccounts:
    """Employees and clients share one id space and one login namespace."""

    def __init__(self):
        self.items: Dict[int, object] = {}
        self._ids = _Ids()

    def add(self, build) -> int:
        user_id = self._ids.next()
        self.items[user_id] = build(user_id)
        return user_id


class InMemoryUsers:
    def __init__(self, accounts: InMemoryAccounts):
        self._accounts = accounts

    def get_by_login(self, login: str):
        for account in self._accounts.items.values():
            if account.login == login:
                return account
        return None

    def login_exists(self, login: str, *, exclude_user_id: Optional[int] = None) -> bool:
        return any(
            a.login == login and a.user_id != exclude_user_id for a in self._accounts.items.values()
        )


class InMemoryEmployees:
    def __init__(self, accounts: InMemoryAccounts):
        self._accounts = accounts

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        account = self._accounts.items.get(employee_id)
        return account if isinstance(account, Employee) else None

    def list_all(self):
        return [a for a in self._accounts.items.values() if isinstance(a, Employee)]

    def create(self, *, login, password_hash, name, surname, position, branch_id, roles) -> int:
        return self._accounts.add(
            lambda user_id: Employee(user_id, login, password_hash, name, surname, position, branch_id, roles)
        )

    def update(self, *, employee_id, login, password_hash, name, surname, position) -> bool:
        self._accounts.items[employee_id] = replace(
            self._accounts.items[employee_id],
            login=login, password_hash=password_hash, name=name, surname=surname, position=position,
        )
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        return self._accounts.items.pop(employee_id, None) is not None


class InMemoryClients:
    def __init__(self, accounts: InMemoryAccounts):
        self._accounts = accounts

    def get_by_id(self, client_id: int) -> Optional[Client]:
        account = self._accounts.items.get(client_id)
        return account if isinstance(account, Client) else None

    def list_all(self):
        return [a for a in self._accounts.items.values() if isinstance(a, Client)]

    def create(self, *, login, password_hash, name, surname, email, address, roles) -> int:
        return self._accounts.add(
            lambda user_id: Client(user_id, login, password_hash, name, surname, email, address, None, roles)
        )

    def update(self, *, client_id, login, password_hash, name, surname, email, address) -> bool:
        self._accounts.items[client_id] = replace(
            self._accounts.items[client_id],
            login=login, password_hash=password_hash, name=name, surname=surname, email=email, address=address,
        )
        return True

    def set_branch(self, *, client_id, branch_id) -> bool:
        self._accounts.items[client_id] = replace(self._accounts.items[client_id], branch_id=branch_id)
        return True

    def delete_by_id(self, client_id: int) -> bool:
        return self._accounts.items.pop(client_id, None) is not None


class InMemoryReservations:
    def __init__(self):
        self.items: Dict[int, Reservation] = {}
        self._ids = _Ids()

    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return self.items.get(reservation_id)

    def list_all(self):
        return list(self.items.values())

    def list_for_car(self, car_id: int):
        return sorted((r for r in self.items.values() if r.car_id == car_id), key=lambda r: r.start_date)

    def list_for_client(self, client_id: int):
        return [r for r in self.items.values() if r.client_id == client_id]

    def exists_for_branch(self, branch_id: int) -> bool:
        return any(branch_id in (r.start_branch_id, r.end_branch_id) for r in self.items.values())

    def create(self, **fields) -> int:
        reservation_id = self._ids.next()
        self.items[reservation_id] = Reservation(reservation_id=reservation_id, **fields)
        return reservation_id

    def update(self, *, reservation_id, **fields) -> bool:
        self.items[reservation_id] = Reservation(reservation_id=reservation_id, **fields)
        return True

    def delete_by_id(self, reservation_id: int) -> bool:
        return self.items.pop(reservation_id, None) is not None


class _HandoverRecords:
    """Shared behaviour of the rent and return fakes (one record per reservation)."""

    id_field = ""

    def __init__(self, log: List[str]):
        self.items: Dict[int, object] = {}
        self._ids = _Ids()
        self._log = log

    def get_by_id(self, record_id: int):
        return self.items.get(record_id)

    def list_all(self):
        return list(self.items.values())

    def get_for_reservation(self, reservation_id: int):
        for item in self.items.values():
            if item.reservation_id == reservation_id:
                return item
        return None

    def delete_by_id(self, record_id: int) -> bool:
        return self.items.pop(record_id, None) is not None

    def delete_for_reservation(self, reservation_id: int) -> int:
        self._log.append(f"{self.id_field}:{reservation_id}")
        doomed = [k for k, v in self.items.items() if v.reservation_id == reservation_id]
        for k in doomed:
            del self.items[k]
        return len(doomed)

    def detach_employee(self, employee_id: int) -> int:
        hits = [k for k, v in self.items.items() if v.employee_id == employee_id]
        for k in hits:
            self.items[k] = replace(self.items[k], employee_id=None)
        return len(hits)


class InMemoryRents(_HandoverRecords):
    id_field = "rent"

    def create(self, *, employee_id, reservation_id, rent_date, comments) -> int:
        rent_id = self._ids.next()
        self.items[rent_id] = Rent(rent_id, employee_id, reservation_id, rent_date, comments)
        return rent_id

    def update(self, *, rent_id, employee_id, reservation_id, rent_date, comments) -> bool:
        self.items[rent_id] = Rent(rent_id, employee_id, reservation_id, rent_date, comments)
        return True


class InMemoryReturns(_HandoverRecords):
    id_field = "return"

    def create(self, *, employee_id, reservation_id, return_date, upcharge, comments) -> int:
        return_id = self._ids.next()
        self.items[return_id] = Returnal(return_id, employee_id, reservation_id, return_date, upcharge, comments)
        return return_id

    def update(self, *, return_id, employee_id, reservation_id, return_date, upcharge, comments) -> bool:
        self.items[return_id] = Returnal(return_id, employee_id, reservation_id, return_date, upcharge, comments)
        return True


class Clock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


class World:
    """Fake repositories plus a wired container, seeded with two branches."""

    def __init__(self, today: date):
        self.cascade_log: List[str] = []
        self.clock = Clock(today)
        self.revenue = InMemoryRevenue()
        self.branches = InMemoryBranches()
        self.car_rentals = InMemoryCarRentals()
        self.cars = InMemoryCars()
        self.accounts = InMemoryAccounts()
        self.users = InMemoryUsers(self.accounts)
        self.employees = InMemoryEmployees(self.accounts)
        self.clients = InMemoryClients(self.accounts)
        self.reservations = InMemoryReservations()
        self.rents = InMemoryRents(self.cascade_log)
        self.returns = InMemoryReturns(self.cascade_log)

        self.container: Container = wire(
            revenue_repo=self.revenue,
            branches_repo=self.branches,
            car_rentals_repo=self.car_rentals,
            cars_repo=self.cars,
            users_repo=self.users,
            employees_repo=self.employees,
            clients_repo=self.clients,
            reservations_repo=self.reservations,
            rents_repo=self.rents,
            returns_repo=self.returns,
            today=self.clock,
        )

        self.car_rental_id = self.car_rentals.create(
            name="SDA Car Rental", internet_domain=None, address=None, owner=None, logotype=None
        )
        self.branch_a = self.add_branch("Gdansk")
        self.branch_b = self.add_branch("Warszawa")

    def add_branch(self, name: str) -> int:
        revenue_id = self.revenue.create(total_amount=Decimal("0.00"))
        return self.branches.create(name=name, address=None, car_rental_id=self.car_rental_id, revenue_id=revenue_id)

    def add_car(self, *, price: str = "100.00", branch_id: Optional[int] = None) -> int:
        details = CarDetails(
            make="Toyota",
            model="Corolla",
            body_style="SEDAN",
            year_of_manufacture=2021,
            colour="white",
            mileage=1000.0,
            status=CarStatus.AVAILABLE,
            price=Decimal(price),
        )
        return self.cars.create(details=details, branch_id=branch_id or self.branch_a)

    def add_client(self, login: str = "client", password: str = "secret1") -> int:
        return self.clients.create(
            login=login,
            password_hash=generate_password_hash(password),
            name="Jan",
            surname="Kowalski",
            email=None,
            address=None,
            roles=frozenset({Role.USER}),
        )

    def add_employee(self, login: str = "staff", password: str = "secret1", roles=frozenset({Role.USER})) -> int:
        return self.employees.create(
            login=login,
            password_hash=generate_password_hash(password),
            name="Anna",
            surname="Nowak",
            position="Desk",
            branch_id=self.branch_a,
            roles=roles,
        )

    def revenue_of(self, branch_id: int) -> Decimal:
        return self.revenue.items[self.branches.items[branch_id].revenue_id].total_amount


@pytest.fixture
def world() -> World:
    return World(today=date(2024, 1, 1))
