# restoreviews/services/users/service.py
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError

from restoreviews.models.user import User
from restoreviews.repositories.user import UserRepository
from restoreviews.services._shared.base import BaseService
from restoreviews.services._shared.errors import (
    DuplicateAccountError,
    NotFoundError,
    violates,
)
from restoreviews.services._shared.pagination import Page
from restoreviews.services.users.dto import UserCreateIn, UserPublicOut, UserUpdateIn


class UserService(BaseService):
    """
    Account management for administrators plus the self-service profile.

    Notes
    -----
    - Route guards decide *who* may call each method; this service only
      enforces data rules (uniqueness, role immutability on self-updates).
    - Deleting an account removes its reviews through the ORM cascade.
    """

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_user(self, dto: UserCreateIn) -> UserPublicOut:
        """
        Create an account with an explicit role.

        :param dto: Creation input.
        :type dto: UserCreateIn
        :returns: Public projection of the new account.
        :rtype: UserPublicOut
        :raises DuplicateAccountError: When the username or email is taken.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_username(dto.username):
                    raise DuplicateAccountError()
                if repo.exists_by_email(dto.email):
                    raise DuplicateAccountError("email already in use")

                user = User(username=dto.username, email=dto.email, role=dto.role)
                user.password = dto.password
                repo.add(user)
                return UserPublicOut.from_model(user)
        except IntegrityError as ie:
            raise self._duplicate_from(ie) from ie

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def get_user(self, user_id: int) -> UserPublicOut:
        """
        Retrieve one account.

        :raises NotFoundError: When the id does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)

    def list_users(
        self, *, page: int, take: int, sort: Iterable[str] | None = None
    ) -> Page[UserPublicOut]:
        """
        List accounts one page at a time.

        :param page: 1-based page number.
        :type page: int
        :param take: Page size.
        :type take: int
        :param sort: Public sort tokens (``-username``...).
        :type sort: Iterable[str] | None
        :returns: Page of public projections.
        :rtype: Page[UserPublicOut]
        """
        with self.ro_uow() as uow:
            rows = uow.users.paginate(page=page, take=take, sort=sort)
            return rows.map(UserPublicOut.from_model)

    # ------------------------------------------------------------------ #
    # Update
    # ------------------------------------------------------------------ #

    def update_user(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Administrator update: any field, role included.

        :raises NotFoundError: When the id does not exist.
        :raises DuplicateAccountError: When the new username or email is taken.
        """
        return self._update(user_id, dto, allow_role=True)

    def update_self(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Self-service profile update. A ``role`` in ``dto`` is ignored.

        :raises NotFoundError: When the account no longer exists.
        :raises DuplicateAccountError: When the new username or email is taken.
        """
        return self._update(user_id, dto, allow_role=False)

    def _update(self, user_id: int, dto: UserUpdateIn, *, allow_role: bool) -> UserPublicOut:
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get_for_update(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)

                candidates: dict[str, Any] = {"username": dto.username, "email": dto.email}
                if allow_role:
                    candidates["role"] = dto.role
                updates = {k: v for k, v in candidates.items() if v is not None}

                new_username = updates.get("username")
                if new_username and new_username.strip() != user.username:
                    if repo.exists_by_username(new_username):
                        raise DuplicateAccountError()
                new_email = updates.get("email")
                if new_email and new_email.strip().lower() != (user.email or ""):
                    if repo.exists_by_email(new_email):
                        raise DuplicateAccountError("email already in use")

                repo.update(user, **updates)
                if dto.password is not None:
                    repo.update_password(user, dto.password)
                return UserPublicOut.from_model(user)
        except IntegrityError as ie:
            raise self._duplicate_from(ie) from ie

    # ------------------------------------------------------------------ #
    # Delete
    # ------------------------------------------------------------------ #

    def delete_user(self, user_id: int) -> None:
        """
        Delete an account and, through the cascade, its reviews.

        The ``average_rating`` of every restaurant those reviews belonged to
        is recomputed in the same transaction.

        :raises NotFoundError: When the id does not exist.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            touched = {review.restaurant for review in user.reviews}
            uow.users.delete(user)
            for restaurant in touched:
                uow.restaurants.refresh_average_rating(restaurant)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _duplicate_from(exc: IntegrityError) -> DuplicateAccountError:
        if violates(exc, "uq_users_email"):
            return DuplicateAccountError("email already in use")
        return DuplicateAccountError()
