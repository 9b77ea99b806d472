# restoreviews/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from restoreviews.core.roles import Role
from restoreviews.models.user import User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for administrator-driven account creation.

    :param username: Unique username.
    :type username: str
    :param password: Raw password (hashed by the model).
    :type password: str
    :param email: Contact email.
    :type email: str
    :param role: Role to grant.
    :type role: Role
    """

    username: str
    password: str
    email: str
    role: Role = Role.USER


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for partial account updates. ``None`` leaves a field untouched.

    :param username: Optional new username.
    :type username: str | None
    :param email: Optional new email.
    :type email: str | None
    :param password: Optional new raw password (re-hashed).
    :type password: str | None
    :param role: Optional new role. Ignored on self-service updates.
    :type role: Role | None
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: Role | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public projection of an account. Never carries the password hash.
    """

    id: int
    username: str
    email: str | None
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
