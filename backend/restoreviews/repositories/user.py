"""User repository: the credential store."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from restoreviews.models.user import User
from restoreviews.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookup by username and email, plus password re-hashing. It never issues
    tokens or decides who may log in.
    """

    model = User
    sortable = {
        "id": "id",
        "username": "username",
        "email": "email",
        "role": "role",
        "created_at": "created_at",
        "createdAt": "created_at",
    }
    filterable = frozenset({"username", "email", "role"})
    # Passwords go through ``update_password`` so the model setter hashes them.
    updatable = frozenset({"username", "email", "role"})

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact (trimmed) username.

        :param username: Username to search.
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.username == username.strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username.strip())
        return self.session.execute(stmt).first() is not None

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the (normalized) email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Re-hash ``new_password`` onto ``user`` and flush.

        :param user: Managed user instance.
        :type user: User
        :param new_password: Raw password; the model setter hashes it.
        :type new_password: str
        """
        user.password = new_password
        self.flush()
