# restoreviews/services/restaurants/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from restoreviews.models.restaurant import Restaurant


@dataclass(frozen=True, slots=True)
class RestaurantIn:
    """
    Input DTO for creating a restaurant.

    :param name: Display name.
    :type name: str
    :param address: Postal address.
    :type address: str
    :param phone_number: Contact phone number.
    :type phone_number: str
    """

    name: str
    address: str
    phone_number: str


@dataclass(frozen=True, slots=True)
class RestaurantUpdateIn:
    """Partial update; ``None`` leaves a field untouched."""

    name: str | None = None
    address: str | None = None
    phone_number: str | None = None


@dataclass(frozen=True, slots=True)
class RestaurantOut:
    id: int
    name: str
    address: str
    phone_number: str
    average_rating: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, row: Restaurant) -> RestaurantOut:
        return cls(
            id=row.id,
            name=row.name,
            address=row.address,
            phone_number=row.phone_number,
            average_rating=float(row.average_rating or 0.0),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
