"""Review repository."""

from __future__ import annotations

from restoreviews.models.review import Review
from restoreviews.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    model = Review
    sortable = {
        "id": "id",
        "rating": "rating",
        "created_at": "created_at",
        "createdAt": "created_at",
    }
    filterable = frozenset({"restaurant_id", "user_id"})
    # A review never moves to another restaurant or author.
    updatable = frozenset({"rating", "comment"})
