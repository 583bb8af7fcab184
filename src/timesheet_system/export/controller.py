from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.web import current_user, error_response, login_required
from ..employees.service import visible_employees
from .service import XLSX_MIMETYPE


def register(app: Flask, container) -> None:
    @app.route("/api/export", methods=["GET"], endpoint="api_export_timesheet")
    @login_required
    def api_export_timesheet():
        date_key = (request.args.get("dateKey") or "").strip()
        if not date_key:
            return jsonify({"error": "dateKey is required"}), 400

        user = current_user()
        try:
            ctx = container.timesheet_service.load_context(date_key, current_user=user)
            rows = container.timesheet_service.day_summary(ctx, visible_employees(ctx.roster, user))
            output = container.exporter.to_xlsx(rows)
        except Exception as e:
            return error_response(e)

        return send_file(
            output,
            download_name=f"Timesheet_{ctx.date_key}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
