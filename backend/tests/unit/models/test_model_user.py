import pytest
from sqlalchemy.exc import IntegrityError

from restoreviews.core.roles import Role
from restoreviews.models.user import User
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


class TestUserModel:
    def test_password_is_hashed_and_verifiable(self, session):
        user = UserFactory(password="s3cret-pass")

        assert user.password_hash != "s3cret-pass"
        assert user.verify_password("s3cret-pass")
        assert not user.verify_password(DEFAULT_PASSWORD)

    def test_password_is_write_only(self):
        with pytest.raises(AttributeError):
            _ = User().password

    @pytest.mark.parametrize("raw", ["", "abcd"])
    def test_short_password_is_rejected(self, raw):
        with pytest.raises(ValueError):
            User().password = raw

    def test_username_is_trimmed_and_length_checked(self):
        user = User(username="  maria  ")
        assert user.username == "maria"

        with pytest.raises(ValueError):
            User(username="ana")

    def test_email_is_normalized(self):
        user = User(email="  Alice@Example.COM ")

        assert user.email == "alice@example.com"

    def test_malformed_email_is_rejected(self):
        with pytest.raises(ValueError):
            User(email="not-an-email")

    def test_role_is_coerced_from_value(self):
        assert User(role="admin").role is Role.ADMIN
        with pytest.raises(ValueError):
            User(role="superuser")

    def test_username_is_unique(self, session):
        UserFactory(username="charlie")

        with pytest.raises(IntegrityError):
            UserFactory(username="charlie")
