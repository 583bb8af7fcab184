from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_user, error_response, json_body, login_required
from .service import visible_employees


def register(app: Flask, container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="api_list_employees")
    @login_required
    def api_list_employees():
        try:
            roster = container.employee_service.list_roster()
        except Exception as e:
            return error_response(e)
        return jsonify([e.to_dict() for e in visible_employees(roster, current_user())])

    @app.route("/api/employees", methods=["POST"], endpoint="api_save_employee")
    @admin_required
    def api_save_employee():
        data = json_body()
        try:
            employee = container.employee_service.save_employee(
                employee_id=data.get("id"),
                name=data.get("name", ""),
                email=data.get("email", ""),
                created_at=data.get("createdAt"),
                username=data.get("username"),
                password=data.get("password"),
            )
        except Exception as e:
            return error_response(e)

        body = employee.to_dict()
        if data.get("username"):
            body["username"] = data["username"]
        return jsonify(body)

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="api_delete_employee")
    @admin_required
    def api_delete_employee(employee_id: str):
        try:
            removed = container.employee_service.delete_employee(employee_id, current_user=current_user())
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Deleted", "changes": removed})

    @app.route("/api/roster/sync", methods=["POST"], endpoint="api_sync_roster")
    @admin_required
    def api_sync_roster():
        try:
            report = container.roster_sync.run()
        except Exception as e:
            return error_response(e)
        return jsonify(report.to_dict())
