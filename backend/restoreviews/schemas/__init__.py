"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginPayloadSchema, LoginSchema, SignupSchema
from .common import PageMetaSchema, PaginationQuerySchema, dump_page
from .restaurant import RestaurantCreateSchema, RestaurantSchema, RestaurantUpdateSchema
from .review import ReviewCreateSchema, ReviewSchema, ReviewUpdateSchema
from .user import UserCreateSchema, UserSchema, UserSelfUpdateSchema, UserUpdateSchema

__all__ = [
    "LoginSchema",
    "LoginPayloadSchema",
    "SignupSchema",
    "PageMetaSchema",
    "PaginationQuerySchema",
    "dump_page",
    "RestaurantSchema",
    "RestaurantCreateSchema",
    "RestaurantUpdateSchema",
    "ReviewSchema",
    "ReviewCreateSchema",
    "ReviewUpdateSchema",
    "UserSchema",
    "UserCreateSchema",
    "UserUpdateSchema",
    "UserSelfUpdateSchema",
]
