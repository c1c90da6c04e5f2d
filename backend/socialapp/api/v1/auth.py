"""Authentication endpoints: register, login, refresh, logout, me."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from socialapp.api.deps import (
    auth_service,
    call_service,
    clear_refresh_cookie,
    current_user,
    refresh_cookie_name,
    require_session,
    set_refresh_cookie,
    success_response,
    timing,
)
from socialapp.core.extensions import limiter
from socialapp.schemas import (
    AccessTokenSchema,
    AuthResultSchema,
    LoginSchema,
    RegisterSchema,
    UserSchema,
)
from socialapp.services.auth import LoginIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()
auth_result_schema = AuthResultSchema()
access_token_schema = AccessTokenSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Create an account, return the user and an access token, set the cookie."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    result = call_service(auth_service().register, RegisterIn(**payload))
    response = success_response(
        auth_result_schema.dump(result),
        message="User created successfully",
        status=201,
    )
    return set_refresh_cookie(response, result.refresh_token)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials; a failed login sets no cookie."""

    payload = login_schema.load(request.get_json(silent=True) or {})
    result = call_service(auth_service().login, LoginIn(**payload))
    response = success_response(auth_result_schema.dump(result), message="User logged in successfully")
    return set_refresh_cookie(response, result.refresh_token)


@bp.post("/refresh")
@timing
def refresh():
    """Trade the refresh cookie for a new access token and rotate the cookie."""

    token = request.cookies.get(refresh_cookie_name())
    result = call_service(auth_service().refresh, token)
    response = success_response(access_token_schema.dump(result), message="Token refreshed")
    return set_refresh_cookie(response, result.refresh_token)


@bp.post("/logout")
@require_session
@timing
def logout():
    """Clear the refresh cookie. Tokens are stateless; nothing is revoked."""

    return clear_refresh_cookie(success_response(message="Logout Successfully"))


@bp.get("/me")
@require_session
@timing
def me():
    """Return the profile of the acting user."""

    user = call_service(auth_service().me, current_user().id)
    return success_response({"user": user_schema.dump(user)})
