# restoreviews/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from restoreviews.services._shared.ports.token_service import SessionClaims

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Account username (trimmed by the repository lookup).
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for self-service registration.

    :param username: Desired username.
    :type username: str
    :param password: Raw password (hashed by the model).
    :type password: str
    :param email: Optional contact email.
    :type email: str | None
    """

    username: str
    password: str
    email: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param claims: Claims embedded in ``access_token``.
    :type claims: SessionClaims
    :param access_token: Signed session token.
    :type access_token: str
    :param token_type: Authorization scheme clients must use.
    :type token_type: str
    """

    claims: SessionClaims
    access_token: str
    token_type: str = "Bearer"
