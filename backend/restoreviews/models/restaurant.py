"""Restaurant (venue) model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from restoreviews.core.extensions import db

from .base import ModelValidationError, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .review import Review


class Restaurant(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A reviewable venue.

    ``average_rating`` is denormalized: the review service recomputes it
    whenever a review of this restaurant is created, changed or removed.
    """

    __tablename__ = "restaurants"
    __repr_label__ = "name"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    average_rating: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0, server_default="0"
    )

    reviews: Mapped[list[Review]] = relationship(
        "Review",
        back_populates="restaurant",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("ix_restaurants_name", "name"),)

    @validates("name", "address", "phone_number")
    def _strip_required(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ModelValidationError(f"{key} is required.")
        return value.strip()
