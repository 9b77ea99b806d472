"""User (account) model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from restoreviews.core.extensions import db
from restoreviews.core.roles import Role

from .base import ModelValidationError, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .review import Review

USERNAME_MIN_LENGTH = 5
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 5

# Verified against when the username is unknown so both login failure paths
# pay for one hash check.
_DUMMY_PASSWORD_HASH: str | None = None


def dummy_password_check(raw: str) -> bool:
    """Run a throwaway hash verification and return ``False``."""
    global _DUMMY_PASSWORD_HASH
    if _DUMMY_PASSWORD_HASH is None:
        _DUMMY_PASSWORD_HASH = generate_password_hash("dummy-password-for-timing")
    check_password_hash(_DUMMY_PASSWORD_HASH, raw or "")
    return False


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity: credentials, role and authored reviews.

    Fields
    ------
    username : str
        Login handle. Unique, trimmed, at least five characters.
    email : str | None
        Optional contact email, stored lowercase. Unique when present.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    role : Role
        ``user`` or ``admin``; defaults to ``user``.
    reviews : list[Review]
        Reviews authored by the account. Deleted together with it.
    """

    __tablename__ = "users"
    __repr_label__ = "username"

    # Columns
    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(
            Role,
            name="enum_role",
            native_enum=True,
            create_constraint=True,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=Role.USER,
        server_default=Role.USER.value,
    )

    reviews: Mapped[list[Review]] = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_role", "role"),
    )

    # -------------------- Credentials --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - write-only attribute
        raise AttributeError("Password is write-only; compare with verify_password().")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Store a salted hash of ``raw``; the plain text is never kept.

        :raises ModelValidationError: If ``raw`` is empty or shorter than
            ``PASSWORD_MIN_LENGTH``.
        """
        if not isinstance(raw, str) or not raw:
            raise ModelValidationError("Password must be a non-empty string.")
        if len(raw) < PASSWORD_MIN_LENGTH:
            raise ModelValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """``True`` when ``raw`` matches the stored hash; non-strings never match."""
        if not self.password_hash or not isinstance(raw, str):
            return False
        return bool(check_password_hash(self.password_hash, raw))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str | None) -> str | None:
        """
        Normalize email; ``None`` and blank strings clear it.

        :raises ModelValidationError: If the email is malformed.
        """
        if value is None:
            return None
        if not isinstance(value, str):
            raise ModelValidationError("Email must be a string.")
        v = value.strip().lower()
        if not v:
            return None
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ModelValidationError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim and validate username length.

        :raises ModelValidationError: If username is missing or too short.
        """
        if not isinstance(value, str):
            raise ModelValidationError("Username is required.")
        v = value.strip()
        if len(v) < USERNAME_MIN_LENGTH:
            raise ModelValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters.")
        return v

    @validates("role")
    def _coerce_role(self, key: str, value: Role | str) -> Role:
        try:
            return Role(value)
        except ValueError as exc:
            raise ModelValidationError(f"Unknown role: {value!r}") from exc
