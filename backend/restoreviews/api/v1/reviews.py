"""Review endpoints. Mutations are limited to the author or an admin."""

from __future__ import annotations

from flask import Blueprint, g, request

from restoreviews.api.deps import (
    empty_response,
    json_response,
    parse_pagination,
    service_context,
    timing,
)
from restoreviews.api.guards import require_roles
from restoreviews.core.roles import Role
from restoreviews.schemas import (
    ReviewCreateSchema,
    ReviewSchema,
    ReviewUpdateSchema,
    dump_page,
)
from restoreviews.services.reviews import ReviewIn, ReviewService, ReviewUpdateIn

bp = Blueprint("reviews", __name__, url_prefix="/reviews")

review_schema = ReviewSchema()
review_create_schema = ReviewCreateSchema()
review_update_schema = ReviewUpdateSchema()


@bp.post("")
@require_roles(Role.USER, Role.ADMIN)
@timing
def create_review():
    """Post a review. ``userId`` defaults to the caller."""

    data = review_create_schema.load(request.get_json(silent=True) or {})
    if data.get("user_id") is None:
        data["user_id"] = g.claims.subject_id
    review = ReviewService(ctx=service_context()).create_review(ReviewIn(**data))
    return json_response({"data": review_schema.dump(review)}, status=201)


@bp.get("")
@require_roles(Role.ADMIN)
@timing
def list_reviews():
    """Return paginated reviews across all restaurants."""

    pagination = parse_pagination()
    page = ReviewService(ctx=service_context()).list_reviews(
        page=pagination.page, take=pagination.take, sort=pagination.sort
    )
    return json_response(dump_page(page, review_schema))


@bp.get("/<int:review_id>")
@require_roles(Role.USER, Role.ADMIN)
@timing
def get_review(review_id: int):
    review = ReviewService(ctx=service_context()).get_review(review_id)
    return json_response({"data": review_schema.dump(review)})


@bp.put("/<int:review_id>")
@require_roles(Role.USER, Role.ADMIN)
@timing
def update_review(review_id: int):
    data = review_update_schema.load(request.get_json(silent=True) or {})
    review = ReviewService(ctx=service_context()).update_review(review_id, ReviewUpdateIn(**data))
    return json_response({"data": review_schema.dump(review)})


@bp.delete("/<int:review_id>")
@require_roles(Role.USER, Role.ADMIN)
@timing
def delete_review(review_id: int):
    ReviewService(ctx=service_context()).delete_review(review_id)
    return empty_response()
