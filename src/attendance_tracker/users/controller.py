from __future__ import annotations

from flask import Flask, g, request

from ..common.http import bearer_token, make_guards, ok
from ..container import Container
from ..core.exceptions import InvalidToken
from .schemas import ActiveToggleRequest, LoginRequest, ProfileUpdateRequest, RegisterRequest, user_to_dict


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_guards(container.auth_service)

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = RegisterRequest.from_payload(request.get_json(silent=True))
        result = container.auth_service.register(
            name=body.name,
            email=body.email,
            password=body.password,
            department=body.department,
        )
        return ok(
            201,
            message=f"Registration successful! Your Employee ID: {result.user.employee_id}",
            token=result.token,
            user=user_to_dict(result.user),
        )

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = LoginRequest.from_payload(request.get_json(silent=True))
        result = container.auth_service.login(email=body.email, password=body.password)
        return ok(message="Login successful", token=result.token, user=user_to_dict(result.user))

    @app.route("/auth/verify", methods=["GET"], endpoint="auth_verify")
    def auth_verify():
        token = bearer_token()
        if not token:
            raise InvalidToken("Token not found")
        user = container.auth_service.verify(token)
        return ok(user=user_to_dict(user))

    @app.route("/auth/profile", methods=["GET"], endpoint="auth_profile")
    @login_required
    def auth_profile():
        user = container.user_service.get_profile(g.current_user.user_id)
        return ok(user=user_to_dict(user, with_activity=True))

    @app.route("/auth/profile", methods=["PUT"], endpoint="auth_profile_update")
    @login_required
    def auth_profile_update():
        body = ProfileUpdateRequest.from_payload(request.get_json(silent=True))
        user = container.user_service.update_profile(
            g.current_user.user_id,
            name=body.name,
            email=body.email,
            department=body.department,
        )
        return ok(message="Profile updated", user=user_to_dict(user))

    @app.route("/auth/users/<employee_id>/active", methods=["PATCH"], endpoint="auth_user_active")
    @admin_required
    def auth_user_active(employee_id: str):
        body = ActiveToggleRequest.from_payload(request.get_json(silent=True))
        user = container.user_service.set_active(actor=g.current_user, employee_id=employee_id, is_active=body.active)
        return ok(user=user_to_dict(user, with_activity=True))
