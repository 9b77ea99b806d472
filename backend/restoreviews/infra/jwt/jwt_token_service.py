# restoreviews/infra/jwt/jwt_token_service.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from restoreviews.core.config import ConfigurationError
from restoreviews.core.roles import Role
from restoreviews.services._shared.errors import InvalidTokenError
from restoreviews.services._shared.ports.token_service import (
    Identity,
    SessionClaims,
    TokenService,
)

REQUIRED_CLAIMS = ("sub", "username", "role", "iat", "exp")


@dataclass(frozen=True, slots=True)
class JWTTokenService(TokenService):
    """
    HMAC-signed JWT adapter for the :class:`TokenService` port (PyJWT).

    Tokens carry exactly ``sub``, ``username``, ``role``, ``iat`` and ``exp``.
    No ``jti`` or other random material is added, so issuing twice with the
    same identity, ttl and clock gives the same bytes.

    :param secret_key: Process-wide signing key. Required.
    :type secret_key: str
    :param algorithm: HMAC algorithm name (``HS256`` by default).
    :type algorithm: str
    :param default_ttl: Lifetime applied when :meth:`issue` gets no ``ttl``.
    :type default_ttl: timedelta
    :raises ConfigurationError: When the key is missing/blank or the algorithm
        is not an HMAC one.
    """

    secret_key: str = field(repr=False)
    algorithm: str = "HS256"
    default_ttl: timedelta = timedelta(minutes=20)

    def __post_init__(self) -> None:
        if not isinstance(self.secret_key, str) or not self.secret_key.strip():
            raise ConfigurationError("JWT_SECRET_KEY is not configured.")
        if self.algorithm not in ("HS256", "HS384", "HS512"):
            raise ConfigurationError(f"Unsupported JWT algorithm: {self.algorithm!r}")

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue(
        self,
        identity: Identity,
        ttl: timedelta | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        issued_at = now or datetime.now(UTC)
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=UTC)
        lifetime = self.default_ttl if ttl is None else ttl

        payload: dict[str, Any] = {
            "sub": str(identity.subject_id),
            "username": identity.username,
            "role": Role(identity.role).value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + lifetime).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify(self, token: str) -> SessionClaims:
        if not isinstance(token, str) or not token:
            raise InvalidTokenError("missing")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidTokenError("bad_signature") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("malformed") from exc

        return self._to_claims(payload)

    @staticmethod
    def _to_claims(payload: dict[str, Any]) -> SessionClaims:
        """Type-check the decoded payload; anything unexpected is a bad token."""
        username = payload["username"]
        if not isinstance(username, str) or not username:
            raise InvalidTokenError("malformed")
        try:
            subject_id = int(payload["sub"])
            role = Role(payload["role"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidTokenError("malformed") from exc

        return SessionClaims(
            subject_id=subject_id,
            username=username,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )
