"""Review resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from restoreviews.models.review import RATING_MAX, RATING_MIN

_rating = validate.Range(min=RATING_MIN, max=RATING_MAX)


class ReviewCreateSchema(Schema):
    """Payload for posting a review. ``userId`` defaults to the caller."""

    rating = fields.Float(required=True, allow_nan=False, validate=_rating)
    comment = fields.String(required=True, validate=validate.Length(min=1))
    restaurant_id = fields.Integer(required=True, data_key="restaurantId", strict=True)
    user_id = fields.Integer(load_default=None, data_key="userId", strict=True)


class ReviewUpdateSchema(Schema):
    rating = fields.Float(allow_nan=False, validate=_rating)
    comment = fields.String(validate=validate.Length(min=1))


class ReviewSchema(Schema):
    """Public representation of a review."""

    id = fields.Integer(required=True)
    rating = fields.Float(required=True)
    comment = fields.String(required=True)
    restaurant_id = fields.Integer(required=True, data_key="restaurantId")
    user_id = fields.Integer(required=True, data_key="userId")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
