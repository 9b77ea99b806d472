import pytest

from restoreviews.core.roles import Role
from restoreviews.repositories.user import UserRepository
from tests.factories.user import AdminFactory, UserFactory


class TestUserRepository:
    def test_get_by_username_trims_input(self, session):
        user = UserFactory(username="dolores")
        repo = UserRepository(session=session)

        assert repo.get_by_username("  dolores ") == user
        assert repo.get_by_username("nobody") is None

    def test_exists_by_email_is_case_insensitive(self, session):
        UserFactory(email="eve@example.com")
        repo = UserRepository(session=session)

        assert repo.exists_by_email("EVE@example.com")
        assert not repo.exists_by_email("frank@example.com")

    def test_update_assigns_whitelisted_fields(self, session):
        user = UserFactory(username="gustavo")
        repo = UserRepository(session=session)

        repo.update(user, username="gustavo2", role=Role.ADMIN)

        assert user.username == "gustavo2"
        assert user.role is Role.ADMIN

    def test_update_rejects_non_whitelisted_fields(self, session):
        user = UserFactory()
        original_hash = user.password_hash
        repo = UserRepository(session=session)

        with pytest.raises(ValueError, match="password_hash"):
            repo.update(user, password_hash="forged")
        assert user.password_hash == original_hash

    def test_update_password_rehashes(self, session):
        user = UserFactory()
        repo = UserRepository(session=session)

        repo.update_password(user, "brand-new-pass")

        assert user.verify_password("brand-new-pass")

    def test_paginate_sorts_and_counts(self, session):
        for name in ("zelda", "ariel", "mulan"):
            UserFactory(username=name)
        AdminFactory(username="boss1")
        repo = UserRepository(session=session)

        page = repo.paginate(page=1, take=2, sort=["username"])

        assert page.total_count == 4
        assert page.page_count == 2
        assert [u.username for u in page.items] == ["ariel", "boss1"]

    def test_paginate_beyond_last_page_is_empty(self, session):
        UserFactory()
        repo = UserRepository(session=session)

        page = repo.paginate(page=5, take=10)

        assert list(page.items) == []
        assert page.total_count == 1

    def test_filter_by_role(self, session):
        UserFactory()
        admin = AdminFactory()
        repo = UserRepository(session=session)

        page = repo.paginate(page=1, take=10, filters={"role": Role.ADMIN})

        assert [u.id for u in page.items] == [admin.id]

    def test_unknown_sort_token_is_ignored(self, session):
        first = UserFactory()
        second = UserFactory()
        repo = UserRepository(session=session)

        page = repo.paginate(page=1, take=10, sort=["password_hash", "-nonexistent"])

        assert [u.id for u in page.items] == [first.id, second.id]
