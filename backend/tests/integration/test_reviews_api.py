"""Integration tests for ``/reviews``: ownership, validation, averages."""

from __future__ import annotations

import pytest

from tests.factories.restaurant import RestaurantFactory
from tests.factories.review import ReviewFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.assertions import assert_pagination, assert_problem

REVIEWS = "/api/v1/reviews"


def _average(client, restaurant_id: int) -> float:
    return client.get(f"/api/v1/restaurants/{restaurant_id}").get_json()["data"]["averageRating"]


def test_user_posts_review_and_average_updates(client, auth_header) -> None:
    alice = UserFactory()
    restaurant = RestaurantFactory()

    for rating in (3, 4):
        resp = client.post(
            REVIEWS,
            json={"rating": rating, "comment": "Solid", "restaurantId": restaurant.id},
            headers=auth_header(alice),
        )
        assert resp.status_code == 201
        assert resp.get_json()["data"]["userId"] == alice.id

    assert _average(client, restaurant.id) == 3.5


def test_posting_as_someone_else_is_403(client, auth_header) -> None:
    alice = UserFactory()
    bob = UserFactory()
    restaurant = RestaurantFactory()

    resp = client.post(
        REVIEWS,
        json={
            "rating": 5,
            "comment": "Sock puppet",
            "restaurantId": restaurant.id,
            "userId": bob.id,
        },
        headers=auth_header(alice),
    )

    assert_problem(resp, 403, "forbidden")
    assert _average(client, restaurant.id) == 0.0


def test_admin_posts_on_behalf_of_user(client, auth_header) -> None:
    bob = UserFactory()
    restaurant = RestaurantFactory()

    resp = client.post(
        REVIEWS,
        json={"rating": 2, "comment": "Phoned in", "restaurantId": restaurant.id, "userId": bob.id},
        headers=auth_header(AdminFactory()),
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["userId"] == bob.id


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"rating": 6, "comment": "Too good"}, "rating"),
        ({"rating": 0, "comment": "Too bad"}, "rating"),
        ({"rating": 3, "comment": ""}, "comment"),
        ({"comment": "No rating"}, "rating"),
    ],
)
def test_invalid_review_is_400(client, auth_header, payload, field) -> None:
    restaurant = RestaurantFactory()
    payload = {**payload, "restaurantId": restaurant.id}

    resp = client.post(REVIEWS, json=payload, headers=auth_header(UserFactory()))

    body = assert_problem(resp, 400, "validation_error")
    assert field in body["details"]["errors"]


def test_review_for_unknown_restaurant_is_404(client, auth_header) -> None:
    resp = client.post(
        REVIEWS,
        json={"rating": 4, "comment": "Lost", "restaurantId": 123456},
        headers=auth_header(UserFactory()),
    )

    assert_problem(resp, 404)


def test_anonymous_cannot_post(client) -> None:
    restaurant = RestaurantFactory()

    resp = client.post(REVIEWS, json={"rating": 4, "comment": "Hi", "restaurantId": restaurant.id})

    assert_problem(resp, 401)


def test_author_edits_own_review(client, auth_header) -> None:
    review = ReviewFactory(rating=2.0)

    resp = client.put(
        f"{REVIEWS}/{review.id}",
        json={"rating": 5, "comment": "Changed my mind"},
        headers=auth_header(review.user),
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["comment"] == "Changed my mind"
    assert _average(client, review.restaurant_id) == 5.0


def test_stranger_cannot_edit_or_delete(client, auth_header) -> None:
    review = ReviewFactory()
    stranger = auth_header(UserFactory())

    assert_problem(client.put(f"{REVIEWS}/{review.id}", json={"rating": 1}, headers=stranger), 403)
    assert_problem(client.delete(f"{REVIEWS}/{review.id}", headers=stranger), 403)


def test_admin_deletes_any_review(client, auth_header) -> None:
    review = ReviewFactory(rating=1.0)
    restaurant_id = review.restaurant_id

    resp = client.delete(f"{REVIEWS}/{review.id}", headers=auth_header(AdminFactory()))

    assert resp.status_code == 204
    assert _average(client, restaurant_id) == 0.0


def test_admin_lists_all_reviews(client, auth_header) -> None:
    ReviewFactory.create_batch(3)

    resp = client.get(REVIEWS, query_string={"take": 2}, headers=auth_header(AdminFactory()))

    body = resp.get_json()
    assert_pagination(body)
    assert body["totalCount"] == 3
    assert len(body["items"]) == 2


def test_plain_user_cannot_list_all_reviews(client, auth_header) -> None:
    assert_problem(client.get(REVIEWS, headers=auth_header(UserFactory())), 403)
