from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_int
from ..common.web import admin_required, current_user, error_response, json_body, login_required


def register(app: Flask, container) -> None:
    @app.route("/api/activity-log", methods=["GET"], endpoint="api_list_activity_log")
    @login_required
    def api_list_activity_log():
        try:
            limit = optional_int(request.args.get("limit"), "limit")
            entries = container.activity_log_service.list_recent(current_user=current_user(), limit=limit)
        except Exception as e:
            return error_response(e)
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/activity-log", methods=["POST"], endpoint="api_append_activity_log")
    @login_required
    def api_append_activity_log():
        try:
            entry_id = container.activity_log_service.append_from_payload(json_body())
        except Exception as e:
            return error_response(e)
        return jsonify({"id": entry_id, "status": "logged"})

    @app.route("/api/activity-log", methods=["DELETE"], endpoint="api_clear_activity_log")
    @admin_required
    def api_clear_activity_log():
        try:
            removed = container.activity_log_service.clear_all(current_user=current_user())
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Activity log cleared", "changes": removed})
