"""Restaurant repository."""

from __future__ import annotations

from sqlalchemy import func, select

from restoreviews.models.restaurant import Restaurant
from restoreviews.models.review import Review
from restoreviews.repositories.base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    """Restaurants, plus the stored ``average_rating`` maintenance."""

    model = Restaurant
    sortable = {
        "id": "id",
        "name": "name",
        "average_rating": "average_rating",
        "averageRating": "average_rating",
        "created_at": "created_at",
        "createdAt": "created_at",
    }
    filterable = frozenset({"name"})
    updatable = frozenset({"name", "address", "phone_number"})

    def refresh_average_rating(self, restaurant: Restaurant) -> float:
        """
        Recompute ``average_rating`` as the mean of the stored reviews and flush.

        Pending review inserts/deletes must be flushed before calling, which
        the base ``add``/``delete`` already do.

        :param restaurant: Managed restaurant instance.
        :type restaurant: Restaurant
        :returns: The new average, rounded to 2 decimals; ``0.0`` with no reviews.
        :rtype: float
        """
        average = self.session.execute(
            select(func.avg(Review.rating)).where(Review.restaurant_id == restaurant.id)
        ).scalar_one_or_none()
        restaurant.average_rating = 0.0 if average is None else round(float(average), 2)
        self.flush()
        return restaurant.average_rating
