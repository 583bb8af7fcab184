from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import current_user, error_response, json_body


def register(app: Flask, container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def api_register():
        data = json_body()
        try:
            user = container.auth_service.register(data.get("username", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e)
        return jsonify({"user": user.to_dict()})

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = json_body()
        try:
            user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e)

        session.clear()
        session["user"] = user.to_dict()
        return jsonify({"user": user.to_dict()})

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    def api_me():
        user = current_user()
        if user is None:
            return jsonify({"error": "Please log in to continue"}), 401
        return jsonify({"user": user.to_dict()})
