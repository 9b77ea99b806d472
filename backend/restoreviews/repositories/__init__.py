"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from restoreviews.repositories.base import (
    BaseRepository,
    apply_sorting,
    paginate_select,
    parse_sort_tokens,
)
from restoreviews.repositories.restaurant import RestaurantRepository
from restoreviews.repositories.review import ReviewRepository
from restoreviews.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "apply_sorting",
    "paginate_select",
    "parse_sort_tokens",
    # Domain
    "RestaurantRepository",
    "ReviewRepository",
    "UserRepository",
]
