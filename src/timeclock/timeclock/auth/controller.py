from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.responses import error_response
from ..core.exceptions import DomainError
from ..container import Container

ADMIN_SESSION_KEY = "admin"


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(ADMIN_SESSION_KEY):
            return jsonify({"success": False, "message": "Admin passkey required"}), 403
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/unlock", methods=["POST"], endpoint="admin_unlock")
    def admin_unlock():
        data = request.get_json(silent=True) or {}
        try:
            container.passkey_service.verify(str(data.get("passkey", "")))
        except DomainError as e:
            return error_response(e)
        session[ADMIN_SESSION_KEY] = True
        return jsonify({"success": True, "message": "Admin panel unlocked"})

    @app.route("/admin/lock", methods=["POST"], endpoint="admin_lock")
    def admin_lock():
        session.pop(ADMIN_SESSION_KEY, None)
        return jsonify({"success": True, "message": "Admin panel locked"})
