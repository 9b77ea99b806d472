# restoreviews/services/reviews/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from restoreviews.models.review import Review


@dataclass(frozen=True, slots=True)
class ReviewIn:
    """
    Input DTO for posting a review.

    :param rating: Score from 1 to 5.
    :type rating: float
    :param comment: Non-empty text.
    :type comment: str
    :param restaurant_id: Reviewed restaurant.
    :type restaurant_id: int
    :param user_id: Authoring account.
    :type user_id: int
    """

    rating: float
    comment: str
    restaurant_id: int
    user_id: int


@dataclass(frozen=True, slots=True)
class ReviewUpdateIn:
    """Partial update; ``None`` leaves a field untouched."""

    rating: float | None = None
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class ReviewOut:
    id: int
    rating: float
    comment: str
    restaurant_id: int
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, row: Review) -> ReviewOut:
        return cls(
            id=row.id,
            rating=row.rating,
            comment=row.comment,
            restaurant_id=row.restaurant_id,
            user_id=row.user_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
