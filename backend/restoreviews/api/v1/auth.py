"""Authentication endpoints: login and self-service signup."""

from __future__ import annotations

from flask import Blueprint, request

from restoreviews.api.deps import json_response, timing
from restoreviews.core.security import get_token_service
from restoreviews.schemas import LoginPayloadSchema, LoginSchema, SignupSchema, UserSchema
from restoreviews.services.auth import AuthService, LoginIn, RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

login_schema = LoginSchema()
signup_schema = SignupSchema()
login_payload_schema = LoginPayloadSchema()
user_schema = UserSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access token."""

    data = login_schema.load(request.get_json(silent=True) or {})
    service = AuthService(token_service=get_token_service())
    result = service.login(LoginIn(username=data["username"], password=data["password"]))
    claims = result.claims
    payload = login_payload_schema.dump(
        {
            "id": claims.subject_id,
            "username": claims.username,
            "role": claims.role,
            "issued_at": claims.issued_at,
            "expires_at": claims.expires_at,
            "access_token": result.access_token,
            "token_type": result.token_type,
        }
    )
    return json_response({"payload": payload})


@bp.post("/signup")
@timing
def signup():
    """Register a ``user``-role account and return its public representation."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    service = AuthService(token_service=get_token_service())
    user = service.register(RegisterIn(**data))
    return json_response({"data": user_schema.dump(user)}, status=201)
