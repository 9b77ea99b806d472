"""Restaurant resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

_name = validate.Length(min=1, max=120)
_address = validate.Length(min=1, max=255)
_phone = validate.Length(min=1, max=32)


class RestaurantCreateSchema(Schema):
    name = fields.String(required=True, validate=_name)
    address = fields.String(required=True, validate=_address)
    phone_number = fields.String(required=True, data_key="phoneNumber", validate=_phone)


class RestaurantUpdateSchema(Schema):
    """Partial update; ``averageRating`` is derived and cannot be written."""

    name = fields.String(validate=_name)
    address = fields.String(validate=_address)
    phone_number = fields.String(data_key="phoneNumber", validate=_phone)


class RestaurantSchema(Schema):
    """Public representation of a restaurant."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    address = fields.String(required=True)
    phone_number = fields.String(required=True, data_key="phoneNumber")
    average_rating = fields.Float(required=True, data_key="averageRating")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
