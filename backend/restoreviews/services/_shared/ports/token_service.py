from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from restoreviews.core.roles import Role


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Claims supplied by the caller when issuing a token.

    :param subject_id: Account primary key.
    :type subject_id: int
    :param username: Account username.
    :type username: str
    :param role: Account role.
    :type role: Role
    """

    subject_id: int
    username: str
    role: Role


@dataclass(frozen=True, slots=True)
class SessionClaims:
    """
    Verified content of a session token.

    :param subject_id: Account primary key (``sub``).
    :type subject_id: int
    :param username: Account username.
    :type username: str
    :param role: Account role.
    :type role: Role
    :param issued_at: Issue instant (``iat``), timezone-aware UTC.
    :type issued_at: datetime
    :param expires_at: Expiry instant (``exp``), timezone-aware UTC.
    :type expires_at: datetime
    """

    subject_id: int
    username: str
    role: Role
    issued_at: datetime
    expires_at: datetime

    @property
    def identity(self) -> Identity:
        return Identity(subject_id=self.subject_id, username=self.username, role=self.role)


class TokenService(Protocol):
    """Port for issuing and verifying signed, time-limited session tokens."""

    def issue(
        self,
        identity: Identity,
        ttl: timedelta | None = None,
        *,
        now: datetime | None = None,
    ) -> str: ...

    def verify(self, token: str) -> SessionClaims: ...
