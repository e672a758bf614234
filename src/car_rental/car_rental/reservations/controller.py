from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import field_date, field_int, iso, json_body, money
from ..container import Container
from .model import Reservation, ReservationRequest


def reservation_to_json(reservation: Reservation) -> dict:
    return {
        "id": reservation.reservation_id,
        "clientId": reservation.client_id,
        "carId": reservation.car_id,
        "startDate": iso(reservation.start_date),
        "endDate": iso(reservation.end_date),
        "price": money(reservation.price),
        "startBranchId": reservation.start_branch_id,
        "endBranchId": reservation.end_branch_id,
    }


def _request_from(data) -> ReservationRequest:
    return ReservationRequest(
        client_id=field_int(data, "clientId"),
        car_id=field_int(data, "carId"),
        start_date=field_date(data, "startDate"),
        end_date=field_date(data, "endDate"),
        start_branch_id=field_int(data, "startBranchId"),
        end_branch_id=field_int(data, "endBranchId"),
    )


def register(app: Flask, container: Container) -> None:
    reservations = container.reservation_service

    @app.get("/api/reservations", endpoint="list_reservations")
    def list_reservations():
        return jsonify([reservation_to_json(r) for r in reservations.list_all()])

    @app.get("/api/reservations/<int:reservation_id>", endpoint="get_reservation")
    def get_reservation(reservation_id: int):
        return jsonify(reservation_to_json(reservations.get(reservation_id)))

    @app.post("/api/reservations", endpoint="create_reservation")
    def create_reservation():
        reservation = reservations.create(_request_from(json_body()))
        return jsonify(reservation_to_json(reservation)), 201

    @app.put("/api/reservations/<int:reservation_id>", endpoint="edit_reservation")
    def edit_reservation(reservation_id: int):
        reservation = reservations.edit(reservation_id, _request_from(json_body()))
        return jsonify(reservation_to_json(reservation))

    @app.post("/api/reservations/<int:reservation_id>/cancel", endpoint="cancel_reservation")
    def cancel_reservation(reservation_id: int):
        decision = reservations.cancel(reservation_id)
        return jsonify(
            {
                "success": True,
                "refund": money(decision.refund),
                "retainedFee": money(decision.retained_fee),
                "message": decision.note,
            }
        )

    @app.delete("/api/reservations/<int:reservation_id>", endpoint="delete_reservation")
    def delete_reservation(reservation_id: int):
        reservations.delete(reservation_id)
        return jsonify({"success": True})
