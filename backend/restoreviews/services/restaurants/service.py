# restoreviews/services/restaurants/service.py
from __future__ import annotations

from collections.abc import Iterable

from restoreviews.models.restaurant import Restaurant
from restoreviews.repositories.restaurant import RestaurantRepository
from restoreviews.services._shared.base import BaseService
from restoreviews.services._shared.errors import NotFoundError
from restoreviews.services._shared.pagination import Page
from restoreviews.services.restaurants.dto import (
    RestaurantIn,
    RestaurantOut,
    RestaurantUpdateIn,
)


class RestaurantService(BaseService):
    """
    Restaurant catalog: plain CRUD plus paginated listing.

    ``average_rating`` is read-only here; :class:`ReviewService` maintains it.
    """

    def create_restaurant(self, dto: RestaurantIn) -> RestaurantOut:
        """
        Create a restaurant with no reviews (``average_rating == 0``).

        :param dto: Creation input.
        :type dto: RestaurantIn
        :returns: Persisted restaurant.
        :rtype: RestaurantOut
        """
        with self.rw_uow() as uow:
            row = Restaurant(
                name=dto.name,
                address=dto.address,
                phone_number=dto.phone_number,
                average_rating=0.0,
            )
            uow.restaurants.add(row)
            return RestaurantOut.from_model(row)

    def get_restaurant(self, restaurant_id: int) -> RestaurantOut:
        """
        :raises NotFoundError: When the id does not exist.
        """
        with self.ro_uow() as uow:
            row = uow.restaurants.get(restaurant_id)
            if row is None:
                raise NotFoundError("Restaurant", restaurant_id)
            return RestaurantOut.from_model(row)

    def list_restaurants(
        self, *, page: int, take: int, sort: Iterable[str] | None = None
    ) -> Page[RestaurantOut]:
        with self.ro_uow() as uow:
            rows = uow.restaurants.paginate(page=page, take=take, sort=sort)
            return rows.map(RestaurantOut.from_model)

    def update_restaurant(self, restaurant_id: int, dto: RestaurantUpdateIn) -> RestaurantOut:
        """
        Update name, address or phone number.

        :raises NotFoundError: When the id does not exist.
        """
        with self.rw_uow() as uow:
            repo: RestaurantRepository = uow.restaurants
            row = repo.get_for_update(restaurant_id)
            if row is None:
                raise NotFoundError("Restaurant", restaurant_id)
            updates = {
                k: v
                for k, v in {
                    "name": dto.name,
                    "address": dto.address,
                    "phone_number": dto.phone_number,
                }.items()
                if v is not None
            }
            repo.update(row, **updates)
            return RestaurantOut.from_model(row)

    def delete_restaurant(self, restaurant_id: int) -> None:
        """
        Delete a restaurant together with its reviews.

        :raises NotFoundError: When the id does not exist.
        """
        with self.rw_uow() as uow:
            row = uow.restaurants.get_for_update(restaurant_id)
            if row is None:
                raise NotFoundError("Restaurant", restaurant_id)
            uow.restaurants.delete(row)
