from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import AuthorizationError, DomainError, NotFoundError

logger = logging.getLogger(__name__)


def ok(message: str = "", **payload):
    body = {"success": True, **payload}
    if message:
        body["message"] = message
    return jsonify(body), 200


def error_response(e: DomainError):
    """Translate a business rule violation into a JSON error."""
    if isinstance(e, NotFoundError):
        status = 404
    elif isinstance(e, AuthorizationError):
        status = 403
    else:
        status = 400
    return jsonify({"success": False, "message": str(e)}), status


def server_error(message: str):
    logger.exception(message)
    return jsonify({"success": False, "message": message}), 500
