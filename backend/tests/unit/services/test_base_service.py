import pytest

from restoreviews.core.errors import APIError
from restoreviews.core.roles import Role
from restoreviews.services._shared.base import BaseService, ServiceContext
from restoreviews.services._shared.errors import (
    AuthorizationError,
    DuplicateAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
)


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (NotFoundError("Review", 3), 404, "not_found"),
        (DuplicateAccountError(), 409, "conflict"),
        (InvalidCredentialsError(), 401, "invalid_credentials"),
        (InvalidTokenError("expired"), 401, "unauthorized"),
        (AuthorizationError(), 403, "forbidden"),
        (ServiceError("odd"), 400, "bad_request"),
    ],
)
def test_translate_exceptions(error, status, code):
    translated = BaseService.translate_exceptions(error)

    assert isinstance(translated, APIError)
    assert (translated.status_code, translated.code) == (status, code)


def test_non_service_errors_pass_through():
    err = KeyError("x")

    assert BaseService.translate_exceptions(err) is err


class TestEnsureOwner:
    def test_owner_passes(self):
        BaseService(ctx=ServiceContext(actor_id=4, actor_role=Role.USER)).ensure_owner(4, 4)

    def test_admin_passes_for_anyone(self):
        BaseService(ctx=ServiceContext(actor_id=1, actor_role=Role.ADMIN)).ensure_owner(1, 9)

    def test_other_user_is_denied(self):
        service = BaseService(ctx=ServiceContext(actor_id=4, actor_role=Role.USER))

        with pytest.raises(AuthorizationError, match="own reviews"):
            service.ensure_owner(4, 5)

    def test_anonymous_is_denied(self):
        with pytest.raises(AuthorizationError):
            BaseService().ensure_owner(None, 5)
