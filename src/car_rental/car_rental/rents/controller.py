from __future__ import annotations

from decimal import Decimal

from flask import Flask, jsonify

from ..common.http import field_date, field_int, field_money, field_str, iso, json_body, money
from ..container import Container
from .model import Rent, Returnal


def rent_to_json(rent: Rent) -> dict:
    return {
        "id": rent.rent_id,
        "employeeId": rent.employee_id,
        "reservationId": rent.reservation_id,
        "rentDate": iso(rent.rent_date),
        "comments": rent.comments,
    }


def return_to_json(returnal: Returnal) -> dict:
    return {
        "id": returnal.return_id,
        "employeeId": returnal.employee_id,
        "reservationId": returnal.reservation_id,
        "returnDate": iso(returnal.return_date),
        "upcharge": money(returnal.upcharge),
        "comments": returnal.comments,
    }


def register(app: Flask, container: Container) -> None:
    rents = container.rent_service
    returns = container.return_service

    @app.get("/api/rents", endpoint="list_rents")
    def list_rents():
        return jsonify([rent_to_json(r) for r in rents.list_rents()])

    @app.get("/api/rents/<int:rent_id>", endpoint="get_rent")
    def get_rent(rent_id: int):
        return jsonify(rent_to_json(rents.get_rent(rent_id)))

    @app.post("/api/rents", endpoint="add_rent")
    def add_rent():
        data = json_body()
        rent = rents.add_rent(
            employee_id=field_int(data, "employeeId"),
            reservation_id=field_int(data, "reservationId"),
            rent_date=field_date(data, "rentDate"),
            comments=field_str(data, "comments", required=False),
        )
        return jsonify(rent_to_json(rent)), 201

    @app.put("/api/rents/<int:rent_id>", endpoint="edit_rent")
    def edit_rent(rent_id: int):
        data = json_body()
        rent = rents.edit_rent(
            rent_id,
            employee_id=field_int(data, "employeeId"),
            reservation_id=field_int(data, "reservationId"),
            rent_date=field_date(data, "rentDate"),
            comments=field_str(data, "comments", required=False),
        )
        return jsonify(rent_to_json(rent))

    @app.delete("/api/rents/<int:rent_id>", endpoint="delete_rent")
    def delete_rent(rent_id: int):
        rents.delete_rent(rent_id)
        return jsonify({"success": True})

    @app.get("/api/returns", endpoint="list_returns")
    def list_returns():
        return jsonify([return_to_json(r) for r in returns.list_returns()])

    @app.get("/api/returns/<int:return_id>", endpoint="get_return")
    def get_return(return_id: int):
        return jsonify(return_to_json(returns.get_return(return_id)))

    @app.post("/api/returns", endpoint="add_return")
    def add_return():
        data = json_body()
        returnal = returns.add_return(
            employee_id=field_int(data, "employeeId"),
            reservation_id=field_int(data, "reservationId"),
            return_date=field_date(data, "returnDate"),
            upcharge=field_money(data, "upcharge", default=Decimal("0.00")),
            comments=field_str(data, "comments", required=False),
        )
        return jsonify(return_to_json(returnal)), 201

    @app.put("/api/returns/<int:return_id>", endpoint="edit_return")
    def edit_return(return_id: int):
        data = json_body()
        returnal = returns.edit_return(
            return_id,
            employee_id=field_int(data, "employeeId"),
            reservation_id=field_int(data, "reservationId"),
            return_date=field_date(data, "returnDate"),
            upcharge=field_money(data, "upcharge", default=Decimal("0.00")),
            comments=field_str(data, "comments", required=False),
        )
        return jsonify(return_to_json(returnal))

    @app.delete("/api/returns/<int:return_id>", endpoint="delete_return")
    def delete_return(return_id: int):
        returns.delete_return(return_id)
        return jsonify({"success": True})
