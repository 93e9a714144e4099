from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import current_caller, login_required
from ..container import Container
from .model import User

logger = logging.getLogger(__name__)


def user_to_dict(user: User) -> dict:
    return {
        "id": user.user_id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "employee_id": user.employee_id,
        "department": user.department,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.register(
            email=data.get("email", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            employee_id=data.get("employee_id", ""),
            department=data.get("department", ""),
            role=data.get("role") or "employee",
        )
        return jsonify({"success": True, "user": user_to_dict(user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = request.get_json(silent=True) or {}
        caller = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["user_id"] = caller.user_id
        session["role"] = caller.role.value
        logger.info("User %s signed in", caller.user_id)
        return jsonify({"success": True, "role": caller.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.auth_service.get_profile(current_caller())
        return jsonify(user_to_dict(user))
