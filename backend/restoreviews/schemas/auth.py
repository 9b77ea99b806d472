"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from restoreviews.core.roles import Role
from restoreviews.models.user import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)


class LoginSchema(Schema):
    """Validate login credentials.

    Length rules are deliberately absent: a too-short password is just a wrong
    password and must fail with the same 401 as any other.
    """

    username = fields.String(required=True, validate=validate.Length(min=1))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class SignupSchema(Schema):
    """Validate self-service registration payloads. Unknown keys (``role``...) are rejected."""

    username = fields.String(
        required=True,
        validate=validate.Length(min=USERNAME_MIN_LENGTH, max=USERNAME_MAX_LENGTH),
    )
    password = fields.String(
        required=True,
        load_only=True,
        validate=validate.Length(min=PASSWORD_MIN_LENGTH, max=128),
    )
    email = fields.Email(load_default=None, allow_none=True, validate=validate.Length(max=254))


class LoginPayloadSchema(Schema):
    """Serialize the body of a successful login."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    role = fields.Enum(Role, by_value=True, required=True)
    issued_at = fields.DateTime(required=True, data_key="issuedAt")
    expires_at = fields.DateTime(required=True, data_key="expiresAt")
    access_token = fields.String(required=True, data_key="accessToken")
    token_type = fields.String(required=True, data_key="tokenType")
