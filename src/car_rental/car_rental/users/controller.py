from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import field_int, field_str, json_body
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import Client, Employee


def employee_to_json(employee: Employee) -> dict:
    return {
        "id": employee.user_id,
        "login": employee.login,
        "name": employee.name,
        "surname": employee.surname,
        "position": employee.position,
        "branchId": employee.branch_id,
        "roles": sorted(r.value for r in employee.roles),
    }


def client_to_json(client: Client) -> dict:
    return {
        "id": client.user_id,
        "login": client.login,
        "name": client.name,
        "surname": client.surname,
        "email": client.email,
        "address": client.address,
        "branchId": client.branch_id,
    }


def _roles_from(data) -> frozenset:
    raw = data.get("roles") or [Role.USER.value]
    if not isinstance(raw, list):
        raise ValidationError("roles must be a list")
    try:
        return frozenset(Role(str(r).strip().upper()) for r in raw)
    except ValueError:
        raise ValidationError("Unknown role")


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service
    clients = container.client_service

    @app.get("/api/me", endpoint="whoami")
    def whoami():
        user = g.get("current_user")
        if user is None:
            return jsonify({"authenticated": False})
        return jsonify(
            {
                "authenticated": True,
                "id": user.user_id,
                "login": user.login,
                "kind": user.kind.value,
                "roles": sorted(r.value for r in user.roles),
            }
        )

    # --- employees -------------------------------------------------------

    @app.get("/api/manageL1/employees", endpoint="list_employees")
    def list_employees():
        return jsonify([employee_to_json(e) for e in employees.list_employees()])

    @app.get("/api/manageL1/employees/<int:employee_id>", endpoint="get_employee")
    def get_employee(employee_id: int):
        return jsonify(employee_to_json(employees.get_employee(employee_id)))

    @app.post("/api/manageL1/employees", endpoint="add_employee")
    def add_employee():
        data = json_body()
        employee = employees.add_employee(
            login=field_str(data, "login") or "",
            password=field_str(data, "password") or "",
            name=field_str(data, "name") or "",
            surname=field_str(data, "surname") or "",
            position=field_str(data, "position", required=False),
            branch_id=field_int(data, "branchId", required=False),
            roles=_roles_from(data),
        )
        return jsonify(employee_to_json(employee)), 201

    @app.put("/api/manageL1/employees/<int:employee_id>", endpoint="edit_employee")
    def edit_employee(employee_id: int):
        data = json_body()
        employee = employees.edit_employee(
            employee_id,
            login=field_str(data, "login") or "",
            password=field_str(data, "password") or "",
            name=field_str(data, "name") or "",
            surname=field_str(data, "surname") or "",
            position=field_str(data, "position", required=False),
        )
        return jsonify(employee_to_json(employee))

    @app.delete("/api/manageL1/employees/<int:employee_id>", endpoint="delete_employee")
    def delete_employee(employee_id: int):
        employees.delete_employee(employee_id)
        return jsonify({"success": True})

    # --- clients ---------------------------------------------------------

    @app.get("/api/clients", endpoint="list_clients")
    def list_clients():
        return jsonify([client_to_json(c) for c in clients.list_clients()])

    @app.get("/api/clients/<int:client_id>", endpoint="get_client")
    def get_client(client_id: int):
        return jsonify(client_to_json(clients.get_client(client_id)))

    @app.post("/api/clients", endpoint="add_client")
    def add_client():
        data = json_body()
        client = clients.add_client(
            login=field_str(data, "login") or "",
            password=field_str(data, "password") or "",
            name=field_str(data, "name") or "",
            surname=field_str(data, "surname") or "",
            email=field_str(data, "email", required=False),
            address=field_str(data, "address", required=False),
        )
        return jsonify(client_to_json(client)), 201

    @app.put("/api/clients/<int:client_id>", endpoint="edit_client")
    def edit_client(client_id: int):
        data = json_body()
        client = clients.edit_client(
            client_id,
            login=field_str(data, "login") or "",
            password=field_str(data, "password") or "",
            name=field_str(data, "name") or "",
            surname=field_str(data, "surname") or "",
            email=field_str(data, "email", required=False),
            address=field_str(data, "address", required=False),
        )
        return jsonify(client_to_json(client))

    @app.delete("/api/clients/<int:client_id>", endpoint="remove_client")
    def remove_client(client_id: int):
        clients.remove_client(client_id)
        return jsonify({"success": True})

    @app.patch("/api/clients/<int:client_id>/assign/<int:branch_id>", endpoint="assign_client")
    def assign_client(client_id: int, branch_id: int):
        return jsonify(client_to_json(clients.assign_to_branch(client_id, branch_id)))

    @app.patch("/api/clients/<int:client_id>/unassign/<int:branch_id>", endpoint="unassign_client")
    def unassign_client(client_id: int, branch_id: int):
        clients.remove_from_branch(client_id, branch_id)
        return jsonify({"success": True})
