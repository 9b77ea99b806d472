"""Restaurant endpoints. Reading is public; writing is admin-only."""

from __future__ import annotations

from flask import Blueprint, request

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
    RestaurantCreateSchema,
    RestaurantSchema,
    RestaurantUpdateSchema,
    ReviewSchema,
    dump_page,
)
from restoreviews.services.restaurants import (
    RestaurantIn,
    RestaurantService,
    RestaurantUpdateIn,
)
from restoreviews.services.reviews import ReviewService

bp = Blueprint("restaurants", __name__, url_prefix="/restaurants")

restaurant_schema = RestaurantSchema()
restaurant_create_schema = RestaurantCreateSchema()
restaurant_update_schema = RestaurantUpdateSchema()
review_schema = ReviewSchema()


@bp.get("")
@timing
def list_restaurants():
    """Return paginated restaurants."""

    pagination = parse_pagination()
    page = RestaurantService().list_restaurants(
        page=pagination.page, take=pagination.take, sort=pagination.sort
    )
    return json_response(dump_page(page, restaurant_schema))


@bp.get("/<int:restaurant_id>")
@timing
def get_restaurant(restaurant_id: int):
    restaurant = RestaurantService().get_restaurant(restaurant_id)
    return json_response({"data": restaurant_schema.dump(restaurant)})


@bp.get("/<int:restaurant_id>/reviews")
@timing
def list_restaurant_reviews(restaurant_id: int):
    """Return the paginated reviews of one restaurant."""

    pagination = parse_pagination()
    page = ReviewService().list_for_restaurant(
        restaurant_id, page=pagination.page, take=pagination.take, sort=pagination.sort
    )
    return json_response(dump_page(page, review_schema))


@bp.post("")
@require_roles(Role.ADMIN)
@timing
def create_restaurant():
    data = restaurant_create_schema.load(request.get_json(silent=True) or {})
    restaurant = RestaurantService(ctx=service_context()).create_restaurant(RestaurantIn(**data))
    return json_response({"data": restaurant_schema.dump(restaurant)}, status=201)


@bp.put("/<int:restaurant_id>")
@require_roles(Role.ADMIN)
@timing
def update_restaurant(restaurant_id: int):
    data = restaurant_update_schema.load(request.get_json(silent=True) or {})
    restaurant = RestaurantService(ctx=service_context()).update_restaurant(
        restaurant_id, RestaurantUpdateIn(**data)
    )
    return json_response({"data": restaurant_schema.dump(restaurant)})


@bp.delete("/<int:restaurant_id>")
@require_roles(Role.ADMIN)
@timing
def delete_restaurant(restaurant_id: int):
    """Delete a restaurant and its reviews."""

    RestaurantService(ctx=service_context()).delete_restaurant(restaurant_id)
    return empty_response()
