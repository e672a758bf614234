from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import field_date, field_float, field_int, field_money, field_str, iso, json_body, money
from ..container import Container
from ..core.enums import CarStatus
from ..core.exceptions import ValidationError
from .model import Car, CarDetails


def car_to_json(car: Car) -> dict:
    return {
        "id": car.car_id,
        "make": car.make,
        "model": car.model,
        "bodyStyle": car.body_style,
        "yearOfManufacture": car.year_of_manufacture,
        "colour": car.colour,
        "mileage": car.mileage,
        "status": car.status.value,
        "price": money(car.price),
        "branchId": car.branch_id,
    }


def _details_from(data) -> CarDetails:
    status_s = field_str(data, "status", required=False) or CarStatus.AVAILABLE.value
    try:
        status = CarStatus(status_s.strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown car status {status_s!r}")

    return CarDetails(
        make=field_str(data, "make") or "",
        model=field_str(data, "model") or "",
        body_style=field_str(data, "bodyStyle", required=False),
        year_of_manufacture=field_int(data, "yearOfManufacture") or 0,
        colour=field_str(data, "colour", required=False),
        mileage=field_float(data, "mileage"),
        status=status,
        price=field_money(data, "price"),
    )


def register(app: Flask, container: Container) -> None:
    cars = container.car_service

    @app.get("/cars", endpoint="list_cars")
    def list_cars():
        return jsonify([car_to_json(c) for c in cars.list_cars()])

    @app.get("/cars/<int:car_id>", endpoint="get_car")
    def get_car(car_id: int):
        return jsonify(car_to_json(cars.get_car(car_id)))

    @app.get("/cars/statusOnDate/<int:car_id>", endpoint="car_status_on_date")
    def car_status_on_date(car_id: int):
        on_date = field_date(request.args, "date")
        status = cars.status_on_date(car_id, on_date)
        return jsonify({"carId": car_id, "date": iso(on_date), "status": status.value})

    @app.post("/cars", endpoint="add_car")
    def add_car():
        data = json_body()
        car = cars.add_car(_details_from(data), branch_id=field_int(data, "branchId", required=False))
        return jsonify(car_to_json(car)), 201

    @app.put("/cars/<int:car_id>", endpoint="edit_car")
    def edit_car(car_id: int):
        data = json_body()
        car = cars.edit_car(car_id, _details_from(data), branch_id=field_int(data, "branchId", required=False))
        return jsonify(car_to_json(car))

    @app.patch("/cars/setMileageAndPrice/<int:car_id>", endpoint="set_car_mileage_and_price")
    def set_car_mileage_and_price(car_id: int):
        car = cars.update_mileage_and_price(
            car_id,
            mileage=field_float(request.args, "mileage"),
            price=field_money(request.args, "price"),
        )
        return jsonify(car_to_json(car))

    @app.patch("/cars/setStatus/<int:car_id>", endpoint="set_car_status")
    def set_car_status(car_id: int):
        car = cars.update_status(car_id, field_str(request.args, "status") or "")
        return jsonify(car_to_json(car))

    @app.delete("/cars/<int:car_id>", endpoint="delete_car")
    def delete_car(car_id: int):
        cars.delete_car(car_id)
        return jsonify({"success": True})
