"""Integration tests for ``/users``: the self-service profile and admin CRUD."""

from __future__ import annotations

from datetime import timedelta

from tests.factories.review import ReviewFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.assertions import assert_pagination, assert_problem

USERS = "/api/v1/users"


# ------------------------------ /users/me ---------------------------------


def test_me_returns_own_profile(client, auth_header) -> None:
    alice = UserFactory(username="alice")

    resp = client.get(f"{USERS}/me", query_string={"id": alice.id}, headers=auth_header(alice))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["username"] == "alice"


def test_me_for_another_id_is_403(client, auth_header) -> None:
    alice = UserFactory()
    bob = UserFactory()

    resp = client.get(f"{USERS}/me", query_string={"id": bob.id}, headers=auth_header(alice))

    assert_problem(resp, 403, "forbidden")


def test_me_without_id_is_403(client, auth_header) -> None:
    alice = UserFactory()

    resp = client.get(f"{USERS}/me", headers=auth_header(alice))

    assert_problem(resp, 403)


def test_me_admin_has_no_bypass(client, auth_header) -> None:
    admin = AdminFactory()
    alice = UserFactory()

    resp = client.get(f"{USERS}/me", query_string={"id": alice.id}, headers=auth_header(admin))

    assert_problem(resp, 403)


def test_me_without_token_is_401(client) -> None:
    alice = UserFactory()

    resp = client.get(f"{USERS}/me", query_string={"id": alice.id})

    assert_problem(resp, 401, "unauthorized")


def test_me_update_cannot_change_role(client, auth_header) -> None:
    alice = UserFactory()

    resp = client.put(
        f"{USERS}/me",
        query_string={"id": alice.id},
        headers=auth_header(alice),
        json={"username": "alice_renamed", "role": "admin"},
    )

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["username"] == "alice_renamed"
    assert data["role"] == "user"


def test_signup_login_then_me_with_issued_token(client) -> None:
    """A token obtained through login opens the owner's profile and only that one."""
    other = UserFactory()
    signup = client.post("/api/v1/auth/signup", json={"username": "alice", "password": "secret1"})
    assert signup.status_code == 201
    alice_id = signup.get_json()["data"]["id"]

    login = client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret1"})
    assert login.status_code == 200
    payload = login.get_json()["payload"]
    assert payload["id"] == alice_id
    headers = {"Authorization": f"Bearer {payload['accessToken']}"}

    own = client.get(f"{USERS}/me", query_string={"id": alice_id}, headers=headers)
    foreign = client.get(f"{USERS}/me", query_string={"id": other.id}, headers=headers)

    assert own.status_code == 200
    assert own.get_json()["data"]["username"] == "alice"
    assert_problem(foreign, 403, "forbidden")


# ------------------------------ Role guard --------------------------------


def test_list_users_requires_token(client) -> None:
    assert_problem(client.get(USERS), 401)


def test_list_users_rejects_plain_user(client, auth_header) -> None:
    alice = UserFactory()

    assert_problem(client.get(USERS, headers=auth_header(alice)), 403)


def test_list_users_rejects_expired_token(client, auth_header) -> None:
    admin = AdminFactory()

    resp = client.get(USERS, headers=auth_header(admin, ttl=timedelta(seconds=-5)))

    assert_problem(resp, 401)


def test_list_users_rejects_malformed_header(client, auth_header) -> None:
    admin = AdminFactory()
    token = auth_header(admin)["Authorization"].split(" ", 1)[1]

    resp = client.get(USERS, headers={"Authorization": f"Token {token}"})

    assert_problem(resp, 401)


def test_admin_lists_users_paginated(client, auth_header) -> None:
    admin = AdminFactory()
    UserFactory.create_batch(4)

    resp = client.get(USERS, query_string={"take": 2, "page": 1}, headers=auth_header(admin))

    assert resp.status_code == 200
    body = resp.get_json()
    assert_pagination(body)
    assert body["totalCount"] == 5
    assert body["pageCount"] == 3
    assert len(body["items"]) == 2


# ------------------------------ Admin CRUD --------------------------------


def test_admin_creates_admin_account(client, auth_header) -> None:
    admin = AdminFactory()

    resp = client.post(
        USERS,
        headers=auth_header(admin),
        json={
            "username": "second_admin",
            "password": "pass12345",
            "email": "second@example.com",
            "role": "admin",
        },
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["role"] == "admin"


def test_admin_create_rejects_unknown_role(client, auth_header) -> None:
    admin = AdminFactory()

    resp = client.post(
        USERS,
        headers=auth_header(admin),
        json={
            "username": "weird",
            "password": "pass12345",
            "email": "w@example.com",
            "role": "root",
        },
    )

    assert_problem(resp, 400, "validation_error")


def test_admin_updates_role(client, auth_header) -> None:
    admin = AdminFactory()
    alice = UserFactory()

    resp = client.put(f"{USERS}/{alice.id}", headers=auth_header(admin), json={"role": "admin"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "admin"


def test_admin_get_missing_user_is_404(client, auth_header) -> None:
    admin = AdminFactory()

    assert_problem(client.get(f"{USERS}/99999", headers=auth_header(admin)), 404, "not_found")


def test_admin_deletes_user_and_reviews(client, auth_header) -> None:
    admin = AdminFactory()
    review = ReviewFactory()
    author_id = review.user_id

    resp = client.delete(f"{USERS}/{author_id}", headers=auth_header(admin))

    assert resp.status_code == 204
    assert client.get(f"/api/v1/reviews/{review.id}", headers=auth_header(admin)).status_code == 404
