"""
Errors raised by services, repositories and the token adapter.

Nothing here knows about HTTP. ``BaseService.translate_exceptions`` maps each
type to a status and problem code, and ``restoreviews/core/errors.py`` renders
the result.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Tell whether ``exc`` was raised by the unique constraint ``constraint_name``.

    PostgreSQL names the constraint in its message. SQLite only names the
    column (``UNIQUE constraint failed: users.username``), so for
    ``uq_<table>_<column>`` names the ``<table>.<column>`` pair is matched too.

    :param exc: Error raised by a flush or commit.
    :type exc: IntegrityError
    :param constraint_name: Constraint name such as ``uq_users_username``.
    :type constraint_name: str
    :rtype: bool
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if not name.startswith("uq_"):
        return False
    table, _, column = name[3:].partition("_")
    return bool(column) and f"{table}.{column}" in message


class ServiceError(Exception):
    """Root of the service error tree. Unmapped subclasses surface as ``400``."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """``entity`` with identifier ``key`` does not exist."""

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    A write would break uniqueness or another invariant of ``entity``.

    :param entity: Entity name, e.g. ``"User"``.
    :param detail: What collided, e.g. ``"email already in use"``.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateAccountError(ConflictError):
    """Signup or profile update reused a taken username or email."""

    def __init__(self, detail: str = "username already in use") -> None:
        super().__init__("User", detail)


class InvalidCredentialsError(ServiceError):
    """
    Login failed.

    Unknown usernames and wrong passwords share this message so callers
    cannot probe which accounts exist.
    """

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """The acting account may not touch the target resource."""

    def __init__(self, message: str = "You may not access this resource.") -> None:
        super().__init__(message)


class InvalidTokenError(ServiceError):
    """
    A session token failed verification.

    The message stays generic. :attr:`reason` (``expired``, ``bad_signature``,
    ``malformed``, ``missing_claim``...) is meant for logs only.
    """

    def __init__(self, reason: str = "invalid") -> None:
        super().__init__("Invalid or expired token")
        self.reason = reason
