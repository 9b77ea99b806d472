"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from restoreviews.core.roles import Role
from restoreviews.models.restaurant import Restaurant
from restoreviews.models.review import Review
from restoreviews.models.user import User
from restoreviews.repositories.restaurant import RestaurantRepository

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "username": "admin",
        "email": "admin@example.com",
        "password": "adminPass123",
        "role": Role.ADMIN,
    },
    {
        "username": "alice",
        "email": "alice@example.com",
        "password": "alicePass1",
        "role": Role.USER,
    },
    {
        "username": "bruno",
        "email": "bruno@example.com",
        "password": "brunoPass1",
        "role": Role.USER,
    },
]

RESTAURANT_FIXTURES: list[dict[str, str]] = [
    {
        "name": "La Taberna del Puerto",
        "address": "Calle del Mar 12, Valencia",
        "phone_number": "+34 961 000 111",
    },
    {
        "name": "Sushi Kaigan",
        "address": "Gran Via 45, Madrid",
        "phone_number": "+34 910 222 333",
    },
    {
        "name": "Trattoria Nonna Lia",
        "address": "Passeig de Gracia 8, Barcelona",
        "phone_number": "+34 933 444 555",
    },
]

REVIEW_FIXTURES: list[dict[str, Any]] = [
    {
        "username": "alice",
        "restaurant": "La Taberna del Puerto",
        "rating": 5.0,
        "comment": "Fresh fish and a lovely terrace.",
    },
    {
        "username": "bruno",
        "restaurant": "La Taberna del Puerto",
        "rating": 4.0,
        "comment": "Great paella, slow service.",
    },
    {
        "username": "alice",
        "restaurant": "Sushi Kaigan",
        "rating": 3.5,
        "comment": "Good nigiri, small portions.",
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo accounts (one admin, two users)."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    for fixture in USER_FIXTURES:
        user = session.execute(
            select(User).filter_by(username=fixture["username"])
        ).scalar_one_or_none()
        created = user is None
        if user is None:
            user = User(username=fixture["username"], email=fixture["email"], role=fixture["role"])
            user.password = fixture["password"]
            session.add(user)
        session.flush()
        _touch(summary, "users", created)

    session.commit()
    return summary


def seed_restaurants_and_reviews(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create demo restaurants, their reviews, and refresh each average."""
    if verbose:
        LOGGER.info("Seeding restaurants and reviews...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    by_name: dict[str, Restaurant] = {}

    for fixture in RESTAURANT_FIXTURES:
        restaurant, created = _get_or_create(
            session,
            Restaurant,
            name=fixture["name"],
            defaults={"address": fixture["address"], "phone_number": fixture["phone_number"]},
        )
        session.flush()
        by_name[restaurant.name] = restaurant
        _touch(summary, "restaurants", created)

    for fixture in REVIEW_FIXTURES:
        user = session.execute(
            select(User).filter_by(username=fixture["username"])
        ).scalar_one_or_none()
        if user is None:
            raise RuntimeError(f"User {fixture['username']} missing while creating reviews")
        restaurant = by_name[fixture["restaurant"]]
        _, created = _get_or_create(
            session,
            Review,
            user_id=user.id,
            restaurant_id=restaurant.id,
            defaults={"rating": fixture["rating"], "comment": fixture["comment"]},
        )
        session.flush()
        _touch(summary, "reviews", created)

    repo = RestaurantRepository(session=session)
    for restaurant in by_name.values():
        repo.refresh_average_rating(restaurant)

    session.commit()
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_restaurants_and_reviews):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["run_all", "seed_restaurants_and_reviews", "seed_users"]
