"""Review (rating) model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Float, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from restoreviews.core.extensions import db

from .base import ModelValidationError, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .restaurant import Restaurant
    from .user import User

RATING_MIN = 1.0
RATING_MAX = 5.0


class Review(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A user's rating and comment for one restaurant.

    Fields
    ------
    rating : float
        Score between 1 and 5 inclusive.
    comment : str
        Non-empty free text.
    restaurant_id : int
        FK to :class:`Restaurant`. ``ON DELETE CASCADE``.
    user_id : int
        FK to the authoring :class:`User`. ``ON DELETE CASCADE``. This is the
        owner checked before non-admin updates and deletes.
    """

    __tablename__ = "reviews"
    __repr_label__ = "rating"

    rating: Mapped[float] = mapped_column(Float, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    restaurant_id: Mapped[int] = mapped_column(
        ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    restaurant: Mapped[Restaurant] = relationship("Restaurant", back_populates="reviews")
    user: Mapped[User] = relationship("User", back_populates="reviews")

    __table_args__ = (
        CheckConstraint(
            f"rating >= {RATING_MIN} AND rating <= {RATING_MAX}", name="rating_range"
        ),
        Index("ix_reviews_restaurant_id", "restaurant_id"),
        Index("ix_reviews_user_id", "user_id"),
    )

    @validates("rating")
    def _validate_rating(self, key: str, value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ModelValidationError("Rating must be a number.")
        if not RATING_MIN <= float(value) <= RATING_MAX:
            raise ModelValidationError(f"Rating must be between {RATING_MIN:g} and {RATING_MAX:g}.")
        return float(value)

    @validates("comment")
    def _validate_comment(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ModelValidationError("Comment is required.")
        return value.strip()
