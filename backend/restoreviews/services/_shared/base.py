# restoreviews/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from restoreviews.core import errors as api_errors
from restoreviews.core.roles import Role
from restoreviews.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
)
from restoreviews.services._shared.policies.common import is_admin, is_owner
from restoreviews.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# First match wins, so subclasses must precede their bases.
_HTTP_TRANSLATIONS: tuple[tuple[type[ServiceError], Callable[[str], api_errors.APIError]], ...] = (
    (NotFoundError, api_errors.NotFound),
    (ConflictError, api_errors.Conflict),
    (
        InvalidCredentialsError,
        # Own code so clients can tell a failed login from a dead session.
        lambda msg: api_errors.APIError(msg, status_code=401, code="invalid_credentials"),
    ),
    (InvalidTokenError, api_errors.Unauthorized),
    (AuthorizationError, api_errors.Forbidden),
    (ServiceError, lambda msg: api_errors.APIError(msg, status_code=400, code="bad_request")),
)


@dataclass(slots=True)
class ServiceContext:
    """
    Who is calling, as established by the route guard.

    :param actor_id: Account id from the verified token (``None`` when anonymous).
    :param actor_role: Role claim from the verified token.
    :param request_id: Correlation id, for log lines.
    """

    actor_id: int | None = None
    actor_role: Role | None = None
    request_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return is_admin(self.actor_role)


class BaseService:
    """
    Base for the application services.

    Services open exactly one unit of work per use case through
    :meth:`rw_uow` / :meth:`ro_uow` and never touch ``db.session`` directly.
    Field rules live in the models; cross-row rules (uniqueness, ownership)
    live in the services.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map a service error to the API error carrying its HTTP status.

        ======================== ==========================
        Service error            HTTP
        ======================== ==========================
        NotFoundError            404 ``not_found``
        ConflictError            409 ``conflict``
        InvalidCredentialsError  401 ``invalid_credentials``
        InvalidTokenError        401 ``unauthorized``
        AuthorizationError       403 ``forbidden``
        other ServiceError       400 ``bad_request``
        ======================== ==========================

        Anything else is returned unchanged.

        :param exc: Exception raised by a service.
        :type exc: Exception
        :rtype: Exception
        """
        for error_type, to_api in _HTTP_TRANSLATIONS:
            if isinstance(exc, error_type):
                return to_api(str(exc))
        return exc

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Let the owner through; administrators always pass.

        :param actor_id: Calling account id.
        :type actor_id: int | None
        :param owner_id: Account recorded as the resource's owner.
        :type owner_id: int
        :param msg: Message for the raised error.
        :type msg: str | None
        :raises AuthorizationError: When the caller is neither owner nor admin.
        """
        if self.ctx.is_admin or is_owner(actor_id=actor_id, owner_id=owner_id):
            return
        raise AuthorizationError(msg or "You can only modify your own reviews.")
