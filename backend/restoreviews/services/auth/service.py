# restoreviews/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from restoreviews.core.roles import Role
from restoreviews.models.user import User, dummy_password_check
from restoreviews.repositories.user import UserRepository
from restoreviews.services._shared.base import BaseService
from restoreviews.services._shared.errors import (
    DuplicateAccountError,
    InvalidCredentialsError,
    violates,
)
from restoreviews.services._shared.ports.token_service import Identity, TokenService
from restoreviews.services.auth.dto import LoginIn, LoginOut, RegisterIn
from restoreviews.services.users.dto import UserPublicOut

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication flow: credential login and self-service registration.

    Tokens are issued through the injected :class:`TokenService` port; this
    service never reads the signing key or configuration itself.
    """

    def __init__(self, *, token_service: TokenService, **kwargs) -> None:
        """
        :param token_service: Adapter issuing and verifying session tokens.
        :type token_service: TokenService
        """
        super().__init__(**kwargs)
        self.tokens = token_service

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a session token.

        Unknown usernames and wrong passwords raise the same error, and an
        unknown username still pays for one hash verification.

        :param dto: Login input.
        :type dto: LoginIn
        :returns: Verified claims and the signed token.
        :rtype: LoginOut
        :raises InvalidCredentialsError: If the credentials do not match an account.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_username(dto.username or "")
            if user is None:
                dummy_password_check(dto.password)
                ok = False
            else:
                ok = user.verify_password(dto.password)

            if not ok or user is None:
                log.warning("auth.login.failed")
                raise InvalidCredentialsError()

            identity = Identity(subject_id=user.id, username=user.username, role=user.role)

        token = self.tokens.issue(identity)
        claims = self.tokens.verify(token)
        log.info(
            "auth.login.success",
            extra={"user_id": claims.subject_id, "role": claims.role.value},
        )
        return LoginOut(claims=claims, access_token=token)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create a ``user``-role account. No token is issued; clients log in afterwards.

        :param dto: Registration input.
        :type dto: RegisterIn
        :returns: Public projection of the new account.
        :rtype: UserPublicOut
        :raises DuplicateAccountError: If the username (or email) is taken.
        :raises ModelValidationError: If a field fails model validation.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_username(dto.username):
                    raise DuplicateAccountError()
                if dto.email and repo.exists_by_email(dto.email):
                    raise DuplicateAccountError("email already in use")

                user = User(username=dto.username, email=dto.email, role=Role.USER)
                user.password = dto.password
                repo.add(user)
                out = UserPublicOut.from_model(user)
        except IntegrityError as ie:
            # Lost a race against a concurrent signup
            if violates(ie, "uq_users_email"):
                raise DuplicateAccountError("email already in use") from ie
            raise DuplicateAccountError() from ie

        log.info("auth.register.created", extra={"user_id": out.id})
        return out
