"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from restoreviews.core.roles import Role
from restoreviews.models.user import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)

_username = validate.Length(min=USERNAME_MIN_LENGTH, max=USERNAME_MAX_LENGTH)
_password = validate.Length(min=PASSWORD_MIN_LENGTH, max=128)


class UserCreateSchema(Schema):
    """Payload for creating a user from the admin surface."""

    username = fields.String(required=True, validate=_username)
    password = fields.String(required=True, load_only=True, validate=_password)
    email = fields.Email(required=True, validate=validate.Length(max=254))
    role = fields.Enum(Role, by_value=True, load_default=Role.USER)


class UserUpdateSchema(Schema):
    """Partial admin update. Every field is optional."""

    username = fields.String(validate=_username)
    password = fields.String(load_only=True, validate=_password)
    email = fields.Email(validate=validate.Length(max=254))
    role = fields.Enum(Role, by_value=True)


class UserSelfUpdateSchema(Schema):
    """Partial self-service update. ``role`` (and any other key) is dropped."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(validate=_username)
    password = fields.String(load_only=True, validate=_password)
    email = fields.Email(validate=validate.Length(max=254))


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(allow_none=True)
    role = fields.Enum(Role, by_value=True, required=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
