"""User endpoints: admin management and the self-service profile."""

from __future__ import annotations

from flask import Blueprint, g, request

from restoreviews.api.deps import (
    empty_response,
    json_response,
    parse_pagination,
    service_context,
    timing,
)
from restoreviews.api.guards import require_roles, require_self
from restoreviews.core.roles import Role
from restoreviews.schemas import (
    UserCreateSchema,
    UserSchema,
    UserSelfUpdateSchema,
    UserUpdateSchema,
    dump_page,
)
from restoreviews.services.users import UserCreateIn, UserService, UserUpdateIn

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_self_update_schema = UserSelfUpdateSchema()


# ------------------------------ Self-service ------------------------------


@bp.get("/me")
@require_self
@timing
def get_me():
    """Return the profile of the account named by ``?id=``."""

    service = UserService(ctx=service_context())
    user = service.get_user(g.claims.subject_id)
    return json_response({"data": user_schema.dump(user)})


@bp.put("/me")
@require_self
@timing
def update_me():
    """Update the caller's own profile. The role cannot be changed here."""

    data = user_self_update_schema.load(request.get_json(silent=True) or {})
    service = UserService(ctx=service_context())
    user = service.update_self(g.claims.subject_id, UserUpdateIn(**data))
    return json_response({"data": user_schema.dump(user)})


# ------------------------------ Administration ----------------------------


@bp.post("")
@require_roles(Role.ADMIN)
@timing
def create_user():
    """Create an account with an explicit role."""

    data = user_create_schema.load(request.get_json(silent=True) or {})
    service = UserService(ctx=service_context())
    user = service.create_user(UserCreateIn(**data))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.get("")
@require_roles(Role.ADMIN)
@timing
def list_users():
    """Return paginated users."""

    pagination = parse_pagination()
    service = UserService(ctx=service_context())
    page = service.list_users(page=pagination.page, take=pagination.take, sort=pagination.sort)
    return json_response(dump_page(page, user_schema))


@bp.get("/<int:user_id>")
@require_roles(Role.ADMIN)
@timing
def get_user(user_id: int):
    service = UserService(ctx=service_context())
    return json_response({"data": user_schema.dump(service.get_user(user_id))})


@bp.put("/<int:user_id>")
@require_roles(Role.ADMIN)
@timing
def update_user(user_id: int):
    data = user_update_schema.load(request.get_json(silent=True) or {})
    service = UserService(ctx=service_context())
    user = service.update_user(user_id, UserUpdateIn(**data))
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<int:user_id>")
@require_roles(Role.ADMIN)
@timing
def delete_user(user_id: int):
    """Delete an account and its reviews."""

    UserService(ctx=service_context()).delete_user(user_id)
    return empty_response()
