from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_int, require_non_empty
from ..common.web import current_user, ensure_can_edit, error_response, json_body, login_required
from ..employees.service import visible_employees
from .model import ActivityCell, activity_map_to_dict


def _own_rows_only(activities: dict, user) -> dict:
    if user is None or user.is_admin:
        return activities
    return {
        date_key: {emp_id: slots for emp_id, slots in employees.items() if emp_id == user.employee_id}
        for date_key, employees in activities.items()
    }


def register(app: Flask, container) -> None:
    service = container.timesheet_service

    def _row_state(ctx, employee_id: str) -> dict:
        return {
            "onFullDayLeave": service.is_on_full_day_leave(ctx, employee_id),
            "totals": service.compute_totals(ctx, employee_id).to_dict(),
        }

    # Raw cell store

    @app.route("/api/activities", methods=["GET"], endpoint="api_list_activities")
    @login_required
    def api_list_activities():
        try:
            activities = service.list_activities(request.args.get("dateKey"))
        except Exception as e:
            return error_response(e)
        return jsonify(_own_rows_only(activity_map_to_dict(activities), current_user()))

    @app.route("/api/activities", methods=["POST"], endpoint="api_save_activity")
    @login_required
    def api_save_activity():
        data = json_body()
        try:
            employee_id = require_non_empty(data.get("employeeId"), "employeeId")
            ensure_can_edit(current_user(), employee_id)
            cell = ActivityCell.from_payload(data)
            service.put_cell(data.get("dateKey"), employee_id, require_non_empty(data.get("timeSlot"), "timeSlot"), cell)
        except Exception as e:
            return error_response(e)
        return jsonify({"status": "saved"})

    @app.route("/api/activities", methods=["DELETE"], endpoint="api_delete_activity")
    @login_required
    def api_delete_activity():
        data = json_body()
        try:
            employee_id = require_non_empty(data.get("employeeId"), "employeeId")
            ensure_can_edit(current_user(), employee_id)
            removed = service.remove_cell(
                data.get("dateKey"), employee_id, require_non_empty(data.get("timeSlot"), "timeSlot")
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Deleted", "changes": 1 if removed else 0})

    # Timesheet grid operations (log entries written server-side)

    @app.route("/api/timesheet/<date_key>", methods=["GET"], endpoint="api_day_timesheet")
    @login_required
    def api_day_timesheet(date_key: str):
        user = current_user()
        try:
            ctx = service.load_context(date_key, current_user=user)
            rows = service.day_summary(ctx, visible_employees(ctx.roster, user))
        except Exception as e:
            return error_response(e)
        return jsonify(
            {
                "dateKey": ctx.date_key,
                "timeSlots": list(service.catalog.slots()),
                "rows": [r.to_dict() for r in rows],
            }
        )

    @app.route(
        "/api/timesheet/<date_key>/<employee_id>/slots/<time_slot>",
        methods=["POST"],
        endpoint="api_set_slot",
    )
    @login_required
    def api_set_slot(date_key: str, employee_id: str, time_slot: str):
        data = json_body()
        user = current_user()
        try:
            ensure_can_edit(user, employee_id)
            ctx = service.load_context(date_key, current_user=user)
            cell = service.set_activity(
                ctx,
                employee_id,
                time_slot,
                activity_type=data.get("type"),
                description=data.get("description", ""),
                start_page=optional_int(data.get("startPage"), "startPage"),
                end_page=optional_int(data.get("endPage"), "endPage"),
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"cell": cell.to_dict(), **_row_state(ctx, employee_id)})

    @app.route(
        "/api/timesheet/<date_key>/<employee_id>/slots/<time_slot>",
        methods=["DELETE"],
        endpoint="api_clear_slot",
    )
    @login_required
    def api_clear_slot(date_key: str, employee_id: str, time_slot: str):
        user = current_user()
        try:
            ensure_can_edit(user, employee_id)
            ctx = service.load_context(date_key, current_user=user)
            removed = service.clear_activity(ctx, employee_id, time_slot)
        except Exception as e:
            return error_response(e)
        return jsonify({"cleared": removed, **_row_state(ctx, employee_id)})

    @app.route(
        "/api/timesheet/<date_key>/<employee_id>/full-day-leave",
        methods=["POST"],
        endpoint="api_mark_full_day_leave",
    )
    @login_required
    def api_mark_full_day_leave(date_key: str, employee_id: str):
        user = current_user()
        try:
            ensure_can_edit(user, employee_id)
            ctx = service.load_context(date_key, current_user=user)
            result = service.mark_full_day_leave(ctx, employee_id)
        except Exception as e:
            return error_response(e)
        return jsonify({**result.to_dict(), **_row_state(ctx, employee_id)})

    @app.route(
        "/api/timesheet/<date_key>/<employee_id>/full-day-leave",
        methods=["DELETE"],
        endpoint="api_clear_full_day_leave",
    )
    @login_required
    def api_clear_full_day_leave(date_key: str, employee_id: str):
        user = current_user()
        try:
            ensure_can_edit(user, employee_id)
            ctx = service.load_context(date_key, current_user=user)
            result = service.clear_full_day_leave(ctx, employee_id)
        except Exception as e:
            return error_response(e)
        return jsonify({**result.to_dict(), **_row_state(ctx, employee_id)})

    @app.route(
        "/api/timesheet/<date_key>/<employee_id>/range",
        methods=["POST"],
        endpoint="api_mark_range",
    )
    @login_required
    def api_mark_range(date_key: str, employee_id: str):
        data = json_body()
        user = current_user()
        try:
            ensure_can_edit(user, employee_id)
            ctx = service.load_context(date_key, current_user=user)
            result = service.mark_range(
                ctx,
                employee_id,
                start_slot=data.get("startSlot"),
                end_slot=data.get("endSlot"),
                activity_type=data.get("type"),
                description=data.get("description", ""),
                full_day=bool(data.get("fullDay", False)),
            )
        except Exception as e:
            return error_response(e)
        return jsonify({**result.to_dict(), **_row_state(ctx, employee_id)})
