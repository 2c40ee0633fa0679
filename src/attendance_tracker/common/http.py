"""JSON plumbing shared by the controllers: envelopes, auth guards, error handlers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, InternalError

logger = logging.getLogger(__name__)


def ok(status_code: int = 200, **body):
    return jsonify({"success": True, **body}), status_code


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def make_guards(auth_service):
    """Build the (login_required, admin_required) decorators bound to ``auth_service``.

    The verified user is exposed to views as ``flask.g.current_user``.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            if not token:
                raise AuthenticationError("Access denied. Token required.")
            g.current_user = auth_service.verify(token)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if not g.current_user.is_admin:
                raise AuthorizationError()
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, InternalError):
            logger.error("internal error on %s %s: %s", request.method, request.path, e.message)
        return fail(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return fail(InternalError.default_message, 500)
