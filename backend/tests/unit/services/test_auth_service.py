import logging

import pytest

from restoreviews.core.roles import Role
from restoreviews.infra.jwt.jwt_token_service import JWTTokenService
from restoreviews.services._shared.errors import DuplicateAccountError, InvalidCredentialsError
from restoreviews.services.auth import AuthService, LoginIn, RegisterIn
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def service() -> AuthService:
    tokens = JWTTokenService(secret_key="auth-service-key-0123456789abcdef")
    return AuthService(token_service=tokens)


class TestLogin:
    def test_valid_credentials_issue_a_verifiable_token(self, session, service):
        user = UserFactory(username="harold")

        result = service.login(LoginIn(username="harold", password=DEFAULT_PASSWORD))

        assert result.token_type == "Bearer"
        assert result.claims.subject_id == user.id
        assert result.claims.role is Role.USER
        assert service.tokens.verify(result.access_token) == result.claims

    def test_wrong_password_and_unknown_user_look_identical(self, session, service):
        UserFactory(username="harold")

        with pytest.raises(InvalidCredentialsError) as wrong:
            service.login(LoginIn(username="harold", password="not-it"))
        with pytest.raises(InvalidCredentialsError) as unknown:
            service.login(LoginIn(username="nobody", password="not-it"))

        assert str(wrong.value) == str(unknown.value)

    def test_failed_login_is_logged(self, session, service, caplog):
        with caplog.at_level(logging.WARNING, logger="restoreviews.services.auth.service"):
            with pytest.raises(InvalidCredentialsError):
                service.login(LoginIn(username="nobody", password="whatever"))

        assert "auth.login.failed" in caplog.messages


class TestRegister:
    def test_register_always_creates_user_role(self, session, service):
        out = service.register(RegisterIn(username="newbie", password="pass12345"))

        assert out.id is not None
        assert out.role is Role.USER

    def test_registered_account_can_log_in(self, session, service):
        service.register(RegisterIn(username="newbie", password="pass12345"))

        result = service.login(LoginIn(username="newbie", password="pass12345"))

        assert result.claims.username == "newbie"

    def test_duplicate_username(self, session, service):
        UserFactory(username="taken")

        with pytest.raises(DuplicateAccountError):
            service.register(RegisterIn(username="taken", password="pass12345"))

    def test_duplicate_email(self, session, service):
        UserFactory(email="dup@example.com")

        with pytest.raises(DuplicateAccountError, match="email"):
            service.register(
                RegisterIn(username="another", password="pass12345", email="DUP@example.com")
            )

    def test_short_password_is_a_validation_error(self, session, service):
        with pytest.raises(ValueError):
            service.register(RegisterIn(username="shorty", password="abc"))
