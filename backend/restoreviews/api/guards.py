"""Route guards: role membership and self-ownership.

Each guard is split in two. ``authorize_roles``/``authorize_self`` are plain
functions of the ``Authorization`` header and a :class:`TokenService`; they
raise service errors and know nothing about Flask. ``require_roles`` and
``require_self`` wrap them as view decorators, translate failures to
``401``/``403`` and store the verified claims on ``flask.g``.

Guards run before the view body, so a denied request never opens a unit of
work or reaches a service.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Collection
from typing import Any, TypeVar

from flask import g, request

from restoreviews.core.errors import Forbidden, Unauthorized
from restoreviews.core.roles import Role
from restoreviews.core.security import get_token_service
from restoreviews.services._shared.errors import AuthorizationError, InvalidTokenError
from restoreviews.services._shared.ports.token_service import SessionClaims, TokenService

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "
#: Owner id used when the request carries none; no account has it.
MISSING_OWNER_ID = -99


# --------------------------------------------------------------------------- #
# Pure checks
# --------------------------------------------------------------------------- #


def extract_bearer(header: str | None) -> str:
    """
    Return the token of an ``Authorization: Bearer <token>`` header.

    :param header: Raw header value.
    :type header: str | None
    :returns: The token part.
    :rtype: str
    :raises InvalidTokenError: If the header is missing, uses another scheme or
        carries no token.
    """
    if not header or not header.startswith(BEARER_PREFIX):
        raise InvalidTokenError("missing")
    token = header[len(BEARER_PREFIX) :].strip()
    if not token or " " in token:
        raise InvalidTokenError("malformed_header")
    return token


def parse_owner_id(raw: Any) -> int:
    """Coerce a request-supplied owner id, falling back to :data:`MISSING_OWNER_ID`."""
    if raw is None or isinstance(raw, bool):
        return MISSING_OWNER_ID
    try:
        return int(str(raw).strip())
    except ValueError:
        return MISSING_OWNER_ID


def authorize_roles(
    header: str | None,
    roles: Collection[Role],
    tokens: TokenService,
) -> SessionClaims | None:
    """
    Role-membership check.

    An empty ``roles`` collection declares a public route: the request is
    allowed without looking at the header and ``None`` is returned.

    :param header: ``Authorization`` header value.
    :type header: str | None
    :param roles: Roles permitted on the route.
    :type roles: Collection[Role]
    :param tokens: Token verifier.
    :type tokens: TokenService
    :returns: Verified claims, or ``None`` for a public route.
    :rtype: SessionClaims | None
    :raises InvalidTokenError: If the token is missing, malformed, forged or expired.
    :raises AuthorizationError: If the token's role is not permitted.
    """
    if not roles:
        return None
    claims = tokens.verify(extract_bearer(header))
    if claims.role not in roles:
        raise AuthorizationError("Insufficient role for this resource.")
    return claims


def authorize_self(header: str | None, raw_owner_id: Any, tokens: TokenService) -> SessionClaims:
    """
    Self-ownership check: the token's subject must equal the requested owner id.

    An absent or non-numeric owner id becomes :data:`MISSING_OWNER_ID`, which
    never matches, so such requests are denied with ``AuthorizationError``.

    :raises InvalidTokenError: If the token is missing, malformed, forged or expired.
    :raises AuthorizationError: If the subject does not own the resource.
    """
    owner_id = parse_owner_id(raw_owner_id)
    claims = tokens.verify(extract_bearer(header))
    if claims.subject_id != owner_id:
        raise AuthorizationError("You can only access your own account.")
    return claims


# --------------------------------------------------------------------------- #
# View decorators
# --------------------------------------------------------------------------- #


def _deny(exc: Exception, guard: str) -> Exception:
    reason = getattr(exc, "reason", "forbidden")
    log.warning("auth.guard.denied", extra={"reason": f"{guard}:{reason}", "path": request.path})
    if isinstance(exc, InvalidTokenError):
        return Unauthorized(str(exc))
    return Forbidden(str(exc))


def require_roles(*roles: Role | str) -> Callable[[F], F]:
    """
    Restrict a view to tokens whose role is one of ``roles``.

    ``@require_roles()`` with no roles leaves the view public.
    """
    allowed = frozenset(Role(role) for role in roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            try:
                claims = authorize_roles(
                    request.headers.get("Authorization"), allowed, get_token_service()
                )
            except (InvalidTokenError, AuthorizationError) as exc:
                raise _deny(exc, "role") from exc
            g.claims = claims
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def require_self(func: F) -> F:
    """Restrict a view to the account named by the ``id`` query parameter."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            claims = authorize_self(
                request.headers.get("Authorization"),
                request.args.get("id"),
                get_token_service(),
            )
        except (InvalidTokenError, AuthorizationError) as exc:
            raise _deny(exc, "self") from exc
        g.claims = claims
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


__all__ = [
    "MISSING_OWNER_ID",
    "authorize_roles",
    "authorize_self",
    "extract_bearer",
    "parse_owner_id",
    "require_roles",
    "require_self",
]
