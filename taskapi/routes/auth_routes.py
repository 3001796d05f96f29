"""
Authentication endpoints for the task API.

Provides registration, login, token refresh and the current-identity probe.
Failures are rendered with one fixed message per endpoint so a client cannot
tell an unknown email from a wrong password, or an expired refresh token
from a forged one.
"""

import logging

from flask import Blueprint, current_app, request

from core.errors import APIError, ValidationError, safe_error_response, success_response
from taskapi.auth import get_auth_components, jwt_required, validate_password_strength
from taskapi.schemas import LoginRequest, RefreshTokenRequest, RegisterRequest, parse_body

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/v1/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create a new account and return a token pair."""
    req = parse_body(RegisterRequest, request.get_json(silent=True))

    valid, message = validate_password_strength(req.password, current_app.config["PASSWORD_MIN_LENGTH"])
    if not valid:
        raise ValidationError("Invalid input data", errors={"password": message})

    try:
        result = get_auth_components().service.register(req.email, req.password, req.name)
    except APIError:
        raise
    except Exception as e:
        return safe_error_response(e, "register user")

    return success_response(result.to_dict(), 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate with email and password and return a token pair."""
    req = parse_body(LoginRequest, request.get_json(silent=True))

    try:
        result = get_auth_components().service.login(req.email, req.password)
    except APIError:
        raise
    except Exception as e:
        return safe_error_response(e, "login")

    return success_response(result.to_dict())


@auth_bp.route('/refresh', methods=['POST'])
def refresh():
    """Exchange a refresh token for a new token pair."""
    req = parse_body(RefreshTokenRequest, request.get_json(silent=True))

    try:
        result = get_auth_components().service.refresh(req.refresh_token)
    except APIError:
        raise
    except Exception as e:
        return safe_error_response(e, "refresh token")

    return success_response(result.to_dict())


@auth_bp.route('/me', methods=['GET'])
@jwt_required
def me(ctx):
    """Return the identity carried by the presented access token."""
    return success_response({
        "user_id": ctx.user_id,
        "email": ctx.email,
        "expires_at": ctx.claims.expires_at.isoformat(),
    })
