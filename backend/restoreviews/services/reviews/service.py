# restoreviews/services/reviews/service.py
from __future__ import annotations

import logging
from collections.abc import Iterable

from restoreviews.models.review import Review
from restoreviews.repositories.review import ReviewRepository
from restoreviews.services._shared.base import BaseService
from restoreviews.services._shared.errors import AuthorizationError, NotFoundError
from restoreviews.services._shared.pagination import Page
from restoreviews.services.reviews.dto import ReviewIn, ReviewOut, ReviewUpdateIn

log = logging.getLogger(__name__)


class ReviewService(BaseService):
    """
    Reviews and the ownership rule that guards them.

    Responsibilities
    ----------------
    - CRUD on reviews, with ownership checked via :meth:`BaseService.ensure_owner`
      for non-admin callers (taken from ``self.ctx``).
    - Keep ``Restaurant.average_rating`` equal to the mean of its reviews
      after every create, update and delete.
    """

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_review(self, dto: ReviewIn) -> ReviewOut:
        """
        Post a review and refresh the restaurant's average.

        Non-admin callers may only post as themselves.

        :param dto: Creation input.
        :type dto: ReviewIn
        :returns: Persisted review.
        :rtype: ReviewOut
        :raises AuthorizationError: When a non-admin posts for another account.
        :raises NotFoundError: When the restaurant or account does not exist.
        """
        self.ensure_owner(
            self.ctx.actor_id, dto.user_id, msg="You can only post reviews as yourself."
        )
        with self.rw_uow() as uow:
            restaurant = uow.restaurants.get_for_update(dto.restaurant_id)
            if restaurant is None:
                raise NotFoundError("Restaurant", dto.restaurant_id)
            if uow.users.get(dto.user_id) is None:
                raise NotFoundError("User", dto.user_id)

            row = Review(
                rating=dto.rating,
                comment=dto.comment,
                restaurant_id=restaurant.id,
                user_id=dto.user_id,
            )
            uow.reviews.add(row)
            uow.restaurants.refresh_average_rating(restaurant)
            return ReviewOut.from_model(row)

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def get_review(self, review_id: int) -> ReviewOut:
        """
        :raises NotFoundError: When the id does not exist.
        """
        with self.ro_uow() as uow:
            row = uow.reviews.get(review_id)
            if row is None:
                raise NotFoundError("Review", review_id)
            return ReviewOut.from_model(row)

    def list_reviews(
        self, *, page: int, take: int, sort: Iterable[str] | None = None
    ) -> Page[ReviewOut]:
        with self.ro_uow() as uow:
            rows = uow.reviews.paginate(page=page, take=take, sort=sort)
            return rows.map(ReviewOut.from_model)

    def list_for_restaurant(
        self,
        restaurant_id: int,
        *,
        page: int,
        take: int,
        sort: Iterable[str] | None = None,
    ) -> Page[ReviewOut]:
        """
        List the reviews of one restaurant.

        :raises NotFoundError: When the restaurant does not exist.
        """
        with self.ro_uow() as uow:
            if uow.restaurants.get(restaurant_id) is None:
                raise NotFoundError("Restaurant", restaurant_id)
            rows = uow.reviews.paginate(
                page=page,
                take=take,
                sort=sort,
                filters={"restaurant_id": restaurant_id},
            )
            return rows.map(ReviewOut.from_model)

    # ------------------------------------------------------------------ #
    # Update / Delete
    # ------------------------------------------------------------------ #

    def update_review(self, review_id: int, dto: ReviewUpdateIn) -> ReviewOut:
        """
        Change rating and/or comment of a review the caller owns.

        :raises NotFoundError: When the id does not exist.
        :raises AuthorizationError: When a non-admin caller is not the author.
        """
        with self.rw_uow() as uow:
            repo: ReviewRepository = uow.reviews
            row = repo.get_for_update(review_id)
            if row is None:
                raise NotFoundError("Review", review_id)
            self._ensure_author(row)

            updates = {
                k: v
                for k, v in {"rating": dto.rating, "comment": dto.comment}.items()
                if v is not None
            }
            repo.update(row, **updates)
            if "rating" in updates:
                uow.restaurants.refresh_average_rating(row.restaurant)
            return ReviewOut.from_model(row)

    def delete_review(self, review_id: int) -> None:
        """
        Delete a review the caller owns and refresh the restaurant's average.

        :raises NotFoundError: When the id does not exist.
        :raises AuthorizationError: When a non-admin caller is not the author.
        """
        with self.rw_uow() as uow:
            row = uow.reviews.get_for_update(review_id)
            if row is None:
                raise NotFoundError("Review", review_id)
            self._ensure_author(row)

            restaurant = row.restaurant
            uow.reviews.delete(row)
            uow.restaurants.refresh_average_rating(restaurant)

    def _ensure_author(self, row: Review) -> None:
        try:
            self.ensure_owner(self.ctx.actor_id, row.user_id)
        except AuthorizationError:
            log.warning(
                "reviews.ownership.denied",
                extra={"user_id": self.ctx.actor_id, "reason": f"review:{row.id}"},
            )
            raise
