from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import field_int, field_str, iso, json_body, money
from ..container import Container
from ..core.exceptions import NotFoundError
from ..revenue.model import Revenue, RevenueEntry
from .model import Branch, CarRental


def branch_to_json(branch: Branch) -> dict:
    return {
        "id": branch.branch_id,
        "name": branch.name,
        "address": branch.address,
        "carRentalId": branch.car_rental_id,
        "revenueId": branch.revenue_id,
    }


def car_rental_to_json(car_rental: CarRental) -> dict:
    return {
        "id": car_rental.car_rental_id,
        "name": car_rental.name,
        "internetDomain": car_rental.internet_domain,
        "address": car_rental.address,
        "owner": car_rental.owner,
        "logotype": car_rental.logotype,
    }


def revenue_to_json(revenue: Revenue, entries) -> dict:
    return {
        "id": revenue.revenue_id,
        "totalAmount": money(revenue.total_amount),
        "entries": [_entry_to_json(e) for e in entries],
    }


def _entry_to_json(entry: RevenueEntry) -> dict:
    return {
        "id": entry.entry_id,
        "amount": money(entry.amount),
        "reason": entry.reason.value,
        "reservationId": entry.reservation_id,
        "createdAt": iso(entry.created_at),
    }


def register(app: Flask, container: Container) -> None:
    branches = container.branch_service
    revenue = container.revenue_service

    @app.get("/api/branches", endpoint="list_branches")
    def list_branches():
        return jsonify([branch_to_json(b) for b in branches.list_branches()])

    @app.get("/api/branches/<int:branch_id>", endpoint="get_branch")
    def get_branch(branch_id: int):
        return jsonify(branch_to_json(branches.get_branch(branch_id)))

    @app.post("/api/branches", endpoint="add_branch")
    def add_branch():
        data = json_body()
        branch = branches.add_branch(
            name=field_str(data, "name") or "",
            address=field_str(data, "address", required=False),
            car_rental_id=field_int(data, "carRentalId"),
        )
        return jsonify(branch_to_json(branch)), 201

    @app.put("/api/branches/<int:branch_id>", endpoint="edit_branch")
    def edit_branch(branch_id: int):
        data = json_body()
        branch = branches.edit_branch(
            branch_id,
            name=field_str(data, "name") or "",
            address=field_str(data, "address", required=False),
        )
        return jsonify(branch_to_json(branch))

    @app.delete("/api/branches/<int:branch_id>", endpoint="delete_branch")
    def delete_branch(branch_id: int):
        branches.delete_branch(branch_id)
        return jsonify({"success": True})

    @app.get("/api/branches/<int:branch_id>/revenue", endpoint="branch_revenue")
    def branch_revenue(branch_id: int):
        branch = branches.get_branch(branch_id)
        if branch.revenue_id is None:
            raise NotFoundError(f"No revenue for branch #{branch_id}")
        account = revenue.get_revenue(branch.revenue_id)
        return jsonify(revenue_to_json(account, revenue.list_entries(account.revenue_id)))

    @app.get("/carRental", endpoint="list_car_rentals")
    def list_car_rentals():
        return jsonify([car_rental_to_json(c) for c in branches.list_car_rentals()])

    @app.post("/carRental", endpoint="add_car_rental")
    def add_car_rental():
        data = json_body()
        car_rental = branches.add_car_rental(
            name=field_str(data, "name") or "",
            internet_domain=field_str(data, "internetDomain", required=False),
            address=field_str(data, "address", required=False),
            owner=field_str(data, "owner", required=False),
            logotype=field_str(data, "logotype", required=False),
        )
        return jsonify(car_rental_to_json(car_rental)), 201
